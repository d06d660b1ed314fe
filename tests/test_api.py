from fastapi.testclient import TestClient

from companion.main import create_app


def make(settings, db):
    return TestClient(create_app(settings, db=db))


def test_detect_emotion(settings, db):
    client = make(settings, db)
    r = client.post("/detect_emotion", json={"user_message": "I am so happy and excited today"})
    assert r.status_code == 200
    data = r.json()
    assert data["emotion"] == "happy"
    assert data["crisis"] is False
    assert data["polarity"] > 0


def test_detect_emotion_rejects_blank(settings, db):
    client = make(settings, db)
    assert client.post("/detect_emotion", json={"user_message": "   "}).status_code == 400
    assert client.post("/detect_emotion", json={"user_message": ""}).status_code == 422


def test_mood_log_and_history(settings, db):
    client = make(settings, db)
    for emoji, emotion, intensity in [("😊", "happy", 7), ("😟", "anxious", 4), ("😌", "Calm", 8)]:
        r = client.post("/mood", json={"emoji": emoji, "emotion": emotion, "intensity": intensity, "user_id": "tester"})
        assert r.status_code == 200
        assert r.json()["status"] == "logged"
    client.post("/mood", json={"emoji": "😢", "emotion": "sad", "intensity": 2, "user_id": "other"})

    r = client.get("/mood/history", params={"user_id": "tester", "last_n": 2})
    items = r.json()["items"]
    assert [it["emotion"] for it in items] == ["anxious", "calm"]
    assert all(it["user_id"] == "tester" for it in items)

    assert len(client.get("/mood/history").json()["items"]) == 4


def test_mood_validation(settings, db):
    client = make(settings, db)
    assert client.post("/mood", json={"emoji": "🙂", "emotion": "bored", "intensity": 5}).status_code == 422
    assert client.post("/mood", json={"emoji": "🙂", "emotion": "happy", "intensity": 11}).status_code == 422
    assert client.get("/mood/history", params={"last_n": 0}).status_code == 422


def test_helplines(settings, db):
    client = make(settings, db)
    everything = client.get("/helplines").json()["items"]
    assert {"country": "USA", "name": "National Suicide Prevention", "number": "988", "available": "24/7"} in everything

    uk = client.get("/helplines", params={"country": "uk"}).json()["items"]
    assert {h["country"] for h in uk} == {"UK", "Global"}


def test_health_reports_upstream_configuration(settings, db):
    assert make(settings, db).get("/health").json() == {"status": "ok", "upstream_configured": True}
    settings.api_key = None
    assert make(settings, db).get("/health").json()["upstream_configured"] is False


def test_chat_headers_are_exposed_to_browsers(settings, db):
    client = make(settings, db)
    r = client.options(
        "/chat",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    r = client.get("/health", headers={"Origin": "http://localhost:5173"})
    exposed = r.headers["access-control-expose-headers"].lower()
    assert "x-detected-emotion" in exposed
    assert "x-crisis-detected" in exposed
