import pytest

from companion.classifier import classify, detect_crisis, detect_emotion, find_crisis_trigger, normalize_locale
from companion.keywords import DEFAULT_TABLE, EMOTION_PRIORITY, LOCALES


NEUTRAL_SENTENCES = [
    "The train leaves at noon",
    "Please pass the salt",
    "We walked to the library on Tuesday",
]


@pytest.mark.parametrize("locale", LOCALES)
def test_every_anxious_keyword_is_anxious(locale):
    for keyword in DEFAULT_TABLE.emotions["anxious"][locale]:
        assert detect_emotion(f"... {keyword} ...", locale) == "anxious", keyword


@pytest.mark.parametrize("locale", LOCALES)
def test_keyword_resolves_to_its_category_or_an_earlier_one(locale):
    for emotion in EMOTION_PRIORITY:
        for keyword in DEFAULT_TABLE.emotions[emotion].get(locale, ()):
            result = detect_emotion(f"... {keyword} ...", locale)
            assert EMOTION_PRIORITY.index(result) <= EMOTION_PRIORITY.index(emotion), (emotion, keyword, result)


def test_first_category_in_priority_order_wins():
    assert detect_emotion("I'm happy but also so nervous") == "anxious"
    assert detect_emotion("feeling calm and grateful") == "hopeful"
    assert detect_emotion("so frustrated and exhausted") == "angry"


@pytest.mark.parametrize("locale", LOCALES)
@pytest.mark.parametrize("text", NEUTRAL_SENTENCES)
def test_no_keyword_is_neutral_without_crisis(text, locale):
    assert classify(text, locale) == ("neutral", False)


def test_empty_string():
    result = classify("")
    assert result.emotion == "neutral"
    assert result.crisis is False


def test_matching_is_case_insensitive():
    assert detect_emotion("I AM SO ANXIOUS") == "anxious"
    assert detect_crisis("I Want To Die")


def test_english_keywords_match_under_any_locale():
    assert detect_emotion("I feel anxious", "es") == "anxious"
    assert detect_emotion("so lonely", "de") == "sad"


def test_locale_keywords_only_apply_to_their_locale():
    assert detect_emotion("estoy muy triste", "es") == "sad"
    assert detect_emotion("estoy muy triste", "en") == "neutral"


def test_locale_normalization():
    assert normalize_locale("es-ES") == "es"
    assert normalize_locale("FR") == "fr"
    assert normalize_locale("pt-BR") == "en"
    assert normalize_locale(None) == "en"
    assert detect_emotion("estoy muy triste", "es_ES") == "sad"


def test_crisis_is_independent_of_emotion():
    text = "I'm happy today but I want to die"
    emotion, crisis = classify(text)
    assert crisis is True
    assert emotion == "happy"
    assert find_crisis_trigger(text) == "want to die"


def test_crisis_list_is_not_locale_filtered():
    assert classify("pienso en el suicidio", "de").crisis is True
    assert classify("I want to kill myself", "hi").crisis is True


def test_worry_example_is_anxious_without_crisis():
    result = classify("I can't stop worrying and I feel like I might panic", "en")
    assert result.emotion == "anxious"
    assert result.crisis is False


def test_end_my_life_is_crisis():
    result = classify("I want to end my life")
    assert result.crisis is True
    assert result.emotion in ("neutral", "sad")


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TABLE.emotions["anxious"] = {}
