import asyncio
import threading

import httpx

from companion.client import CompanionClient
from companion.speech import crisis_notice, voice_turn

from tests.streams import sse


class FakeRecognizer:
    def __init__(self, *utterances):
        self.utterances = list(utterances)

    def start(self):
        pass

    def stop(self):
        pass

    def listen(self):
        return self.utterances.pop(0)


class FakeSpeaker:
    def __init__(self):
        self.spoken = []

    def say(self, text):
        self.spoken.append(text)


def companion(crisis="false"):
    def handler(request):
        return httpx.Response(
            200,
            content=sse("I'm right here."),
            headers={"x-detected-emotion": "neutral", "x-crisis-detected": crisis},
        )

    return CompanionClient("http://companion.test", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_silence_sends_nothing():
    client = companion()
    speaker = FakeSpeaker()
    assert asyncio.run(voice_turn(FakeRecognizer("  "), client, speaker)) is None
    assert speaker.spoken == []
    assert len(client.history) == 0


def test_reply_is_spoken_and_crisis_callback_fires():
    flagged = []
    speaker = FakeSpeaker()
    reply = asyncio.run(voice_turn(FakeRecognizer("I want to die"), companion("true"), speaker, on_crisis=flagged.append))
    assert speaker.spoken == ["I'm right here."]
    assert flagged == [reply]


def test_crisis_notice_lists_helplines():
    notice = crisis_notice("India")
    assert "iCall" in notice
    assert "741741" in notice
    assert "Samaritans" not in notice


class ThreadRecordingRecognizer(FakeRecognizer):
    def listen(self):
        self.thread = threading.get_ident()
        return super().listen()


class ThreadRecordingSpeaker(FakeSpeaker):
    def say(self, text):
        self.thread = threading.get_ident()
        super().say(text)


def test_listening_and_speaking_stay_off_the_event_loop():
    recognizer = ThreadRecordingRecognizer("hello there")
    speaker = ThreadRecordingSpeaker()

    async def run():
        loop_thread = threading.get_ident()
        await voice_turn(recognizer, companion(), speaker)
        return loop_thread

    loop_thread = asyncio.run(run())
    assert recognizer.thread != loop_thread
    assert speaker.thread != loop_thread
    assert speaker.spoken == ["I'm right here."]
