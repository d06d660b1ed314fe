from __future__ import annotations

from textblob import TextBlob

from companion.classifier import classify


def sentiment_polarity(user_message: str) -> float:
    """TextBlob polarity in [-1.0, 1.0]. Only meaningful for English text."""
    return float(TextBlob(user_message).sentiment.polarity)


def analyze_message(user_message: str, locale: str = "en") -> dict:
    """Keyword classification plus sentiment polarity for one message.

    The emotion and crisis flag come from the keyword classifier alone;
    polarity is reported next to them and never overrides either.
    """
    result = classify(user_message, locale)
    return {
        "emotion": result.emotion,
        "crisis": result.crisis,
        "polarity": sentiment_polarity(user_message),
    }
