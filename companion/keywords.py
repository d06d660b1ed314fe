"""Static keyword tables used by the emotion and crisis classifier.

Tables are built once at import and never mutated. Matching against them is
plain substring search on lowercased text, so short keywords can match inside
unrelated words ("down" inside "download"). That looseness is accepted.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple


LOCALES: Tuple[str, ...] = ("en", "hi", "es", "fr", "de")
FALLBACK_LOCALE = "en"

NEUTRAL = "neutral"

# First match wins; this order is part of the classifier's contract.
EMOTION_PRIORITY: Tuple[str, ...] = (
    "anxious",
    "sad",
    "angry",
    "stressed",
    "lonely",
    "hopeful",
    "happy",
    "calm",
)

EMOTION_LABELS: Tuple[str, ...] = EMOTION_PRIORITY + (NEUTRAL,)


@dataclass(frozen=True)
class KeywordTable:
    emotions: Mapping[str, Mapping[str, Tuple[str, ...]]]
    crisis: Tuple[str, ...]

    def keywords_for(self, emotion: str, locale: str) -> Tuple[str, ...]:
        """Keywords for ``emotion`` in ``locale``, always followed by the English list."""
        by_locale = self.emotions.get(emotion, {})
        english = by_locale.get(FALLBACK_LOCALE, ())
        if locale == FALLBACK_LOCALE:
            return english
        return by_locale.get(locale, ()) + english


def _freeze(raw: dict) -> Mapping[str, Mapping[str, Tuple[str, ...]]]:
    return MappingProxyType(
        {
            emotion: MappingProxyType(
                {locale: tuple(k.lower() for k in words) for locale, words in by_locale.items()}
            )
            for emotion, by_locale in raw.items()
        }
    )


_EMOTION_KEYWORDS = {
    "anxious": {
        "en": ["anxious", "anxiety", "worried", "nervous", "panic", "scared", "fear", "overwhelmed", "stressed"],
        "hi": ["चिंतित", "परेशान", "डर", "घबराहट", "भय", "तनाव"],
        "es": ["ansioso", "preocupado", "nervioso", "pánico", "miedo", "temor"],
        "fr": ["anxieux", "inquiet", "nerveux", "panique", "peur", "angoisse"],
        "de": ["ängstlich", "besorgt", "nervös", "panik", "angst", "furcht"],
    },
    "sad": {
        "en": ["sad", "depressed", "down", "crying", "tears", "miserable", "unhappy", "grief", "loss", "lonely"],
        "hi": ["उदास", "दुखी", "रो रहा", "अकेला", "निराश", "दर्द"],
        "es": ["triste", "deprimido", "llorando", "infeliz", "solo", "dolor"],
        "fr": ["triste", "déprimé", "pleure", "malheureux", "seul", "chagrin"],
        "de": ["traurig", "deprimiert", "weinen", "unglücklich", "einsam", "schmerz"],
    },
    "angry": {
        "en": ["angry", "mad", "furious", "frustrated", "annoyed", "irritated", "rage"],
        "hi": ["गुस्सा", "नाराज़", "क्रोध"],
        "es": ["enojado", "furioso", "frustrado", "molesto"],
        "fr": ["en colère", "furieux", "frustré", "énervé"],
        "de": ["wütend", "sauer", "frustriert", "verärgert"],
    },
    "stressed": {
        "en": ["stressed", "pressure", "exhausted", "burnout", "tired", "overwhelmed", "busy"],
        "hi": ["तनाव", "थका", "दबाव", "व्यस्त", "परेशान"],
        "es": ["estresado", "presión", "agotado", "cansado", "ocupado"],
        "fr": ["stressé", "pression", "épuisé", "fatigué", "débordé"],
        "de": ["gestresst", "druck", "erschöpft", "müde", "überfordert"],
    },
    "lonely": {
        "en": ["lonely", "alone", "isolated", "no friends", "nobody cares", "abandoned"],
        "hi": ["अकेलापन", "तन्हा"],
        "es": ["aislado", "abandonado", "sin amigos"],
        "fr": ["isolé", "abandonné", "sans amis"],
        "de": ["allein", "isoliert", "verlassen"],
    },
    "hopeful": {
        "en": ["hopeful", "better", "improving", "positive", "grateful", "thankful"],
        "hi": ["उम्मीद", "आभारी", "बेहतर"],
        "es": ["esperanza", "agradecido", "mejor"],
        "fr": ["espoir", "reconnaissant", "mieux"],
        "de": ["hoffnung", "dankbar", "besser"],
    },
    "happy": {
        "en": ["happy", "joy", "excited", "great", "wonderful", "amazing", "good"],
        "hi": ["खुश", "खुशी", "अच्छा", "मज़ा"],
        "es": ["feliz", "alegría", "emocionado", "genial", "maravilloso"],
        "fr": ["heureux", "joie", "excité", "super", "merveilleux"],
        "de": ["glücklich", "freude", "aufgeregt", "toll", "wunderbar"],
    },
    "calm": {
        "en": ["calm", "peaceful", "relaxed", "content", "serene"],
        "hi": ["शांत", "सुकून"],
        "es": ["tranquilo", "en paz", "relajado"],
        "fr": ["calme", "serein", "apaisé"],
        "de": ["ruhig", "entspannt", "gelassen"],
    },
}

# One flat, language-mixed list. Not filtered by locale.
_CRISIS_KEYWORDS = [
    "suicide",
    "kill myself",
    "end my life",
    "want to die",
    "no reason to live",
    "self-harm",
    "hurt myself",
    "cutting",
    "overdose",
    "hopeless",
    "give up",
    "can't go on",
    "better off dead",
    "end it all",
    "no point living",
    "आत्महत्या",
    "मरना चाहता",
    "suicidio",
    "quiero morir",
    "quitarme la vida",
    "me tuer",
    "envie de mourir",
    "selbstmord",
    "suizid",
    "sterben will",
]


DEFAULT_TABLE = KeywordTable(
    emotions=_freeze(_EMOTION_KEYWORDS),
    crisis=tuple(k.lower() for k in _CRISIS_KEYWORDS),
)
