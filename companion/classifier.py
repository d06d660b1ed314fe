from __future__ import annotations

from typing import NamedTuple, Optional

from companion.keywords import DEFAULT_TABLE, EMOTION_PRIORITY, FALLBACK_LOCALE, LOCALES, NEUTRAL, KeywordTable


class Classification(NamedTuple):
    emotion: str
    crisis: bool


def normalize_locale(locale: Optional[str]) -> str:
    """Map ``"es-ES"``/``"ES"`` style values onto a supported locale, else English."""
    if not locale:
        return FALLBACK_LOCALE
    short = locale.strip().lower().replace("_", "-").split("-")[0]
    return short if short in LOCALES else FALLBACK_LOCALE


def find_crisis_trigger(text: str, table: KeywordTable = DEFAULT_TABLE) -> Optional[str]:
    lower_text = text.lower()
    for phrase in table.crisis:
        if phrase in lower_text:
            return phrase
    return None


def detect_crisis(text: str, table: KeywordTable = DEFAULT_TABLE) -> bool:
    return find_crisis_trigger(text, table) is not None


def detect_emotion(text: str, locale: str = FALLBACK_LOCALE, table: KeywordTable = DEFAULT_TABLE) -> str:
    """Return the first emotion in priority order with a keyword inside ``text``.

    Categories are checked as anxious, sad, angry, stressed, lonely, hopeful,
    happy, calm. A message with both an "anxious" and a "happy" keyword is
    anxious. Keywords for the requested locale are tried together with the
    English list, so an English keyword matches under any locale.
    """
    lower_text = text.lower()
    if not lower_text:
        return NEUTRAL
    locale = normalize_locale(locale)
    for emotion in EMOTION_PRIORITY:
        if any(keyword in lower_text for keyword in table.keywords_for(emotion, locale)):
            return emotion
    return NEUTRAL


def classify(text: str, locale: str = FALLBACK_LOCALE, table: KeywordTable = DEFAULT_TABLE) -> Classification:
    text = text or ""
    return Classification(
        emotion=detect_emotion(text, locale, table),
        crisis=detect_crisis(text, table),
    )
