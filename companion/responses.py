"""Local supportive replies shown when the chat relay cannot answer."""
from __future__ import annotations

import random
from typing import Dict, List, Optional

from companion.classifier import normalize_locale


THERAPEUTIC_RESPONSES: Dict[str, Dict[str, List[str]]] = {
    "anxious": {
        "en": [
            "I can sense you're feeling anxious. Let's try a grounding technique together. Take a deep breath with me.",
            "Anxiety can feel overwhelming. Remember, you've faced difficult moments before and come through. You're stronger than you know.",
            "When anxiety rises, focus on this moment. Name 5 things you can see, 4 you can touch, 3 you can hear. I'm right here with you.",
        ],
        "hi": [
            "मुझे लगता है आप चिंतित हैं। आइए साथ में एक ग्राउंडिंग तकनीक आज़माएं। मेरे साथ गहरी सांस लें।",
            "चिंता भारी लग सकती है। याद रखें, आपने पहले भी कठिन पलों का सामना किया है। आप अपनी सोच से ज़्यादा मज़बूत हैं।",
        ],
        "es": [
            "Puedo sentir que estás ansioso. Intentemos una técnica de arraigo juntos. Respira profundo conmigo.",
            "La ansiedad puede ser abrumadora. Recuerda que has enfrentado momentos difíciles antes. Eres más fuerte de lo que crees.",
        ],
        "fr": [
            "Je sens que vous êtes anxieux. Essayons une technique d'ancrage ensemble. Respirez profondément avec moi.",
            "L'anxiété peut sembler accablante. N'oubliez pas que vous avez surmonté des moments difficiles avant.",
        ],
        "de": [
            "Ich spüre, dass Sie ängstlich sind. Versuchen wir gemeinsam eine Erdungstechnik. Atmen Sie tief mit mir ein.",
            "Angst kann überwältigend sein. Denken Sie daran, Sie haben schwierige Momente zuvor gemeistert.",
        ],
    },
    "sad": {
        "en": [
            "I hear the sadness in what you're sharing. It's okay to feel this way. Your feelings are valid and important.",
            "Sadness is a natural part of being human. Allow yourself to feel it. I'm here to listen without judgment.",
            "When you're ready, we can explore what's weighing on your heart. For now, just know you're not alone in this.",
        ],
        "hi": [
            "ऐसा महसूस करना ठीक है। आपकी भावनाएं मान्य और महत्वपूर्ण हैं।",
            "उदासी मनुष्य होने का स्वाभाविक हिस्सा है। मैं बिना किसी निर्णय के सुनने के लिए यहां हूं।",
        ],
        "es": [
            "Está bien sentirse así. Tus sentimientos son válidos e importantes.",
            "La tristeza es una parte natural de ser humano. Estoy aquí para escuchar sin juzgar.",
        ],
        "fr": [
            "C'est normal de se sentir ainsi. Vos sentiments sont valides et importants.",
            "La tristesse fait partie de la nature humaine. Je suis là pour écouter sans jugement.",
        ],
        "de": [
            "Es ist okay, so zu fühlen. Ihre Gefühle sind berechtigt und wichtig.",
            "Traurigkeit ist ein natürlicher Teil des Menschseins. Ich bin hier, um zuzuhören.",
        ],
    },
    "stressed": {
        "en": [
            "It sounds like you're carrying a heavy load. Let's pause and take three slow breaths together.",
            "Stress can make everything feel urgent. But right now, in this moment, you're safe. Let's focus on one thing at a time.",
            "Your body holds onto stress. Try rolling your shoulders and releasing that tension. I'm here to help you find calm.",
        ],
        "hi": ["ऐसा लगता है आप भारी बोझ उठा रहे हैं। चलिए रुकें और साथ में तीन धीमी सांसें लें।"],
        "es": ["Parece que llevas una carga pesada. Hagamos una pausa y tomemos tres respiraciones lentas juntos."],
        "fr": ["On dirait que vous portez une lourde charge. Faisons une pause et prenons trois respirations lentes ensemble."],
        "de": ["Es klingt, als trügen Sie eine schwere Last. Lassen Sie uns pausieren und drei langsame Atemzüge nehmen."],
    },
    "happy": {
        "en": [
            "I can hear the joy in what you're sharing! That's wonderful. Let's celebrate this positive moment together.",
            "Your happiness is contagious! It's beautiful to hear you feeling good. What's bringing you joy today?",
        ],
        "hi": ["यह अद्भुत है। चलिए इस सकारात्मक पल को साथ मनाएं।"],
        "es": ["¡Eso es maravilloso! Celebremos este momento positivo juntos."],
        "fr": ["C'est merveilleux. Célébrons ce moment positif ensemble."],
        "de": ["Das ist wunderbar. Lassen Sie uns diesen positiven Moment zusammen feiern."],
    },
    "default": {
        "en": [
            "I'm here to listen. Take your time and share what's on your mind.",
            "Thank you for sharing with me. Your thoughts and feelings matter.",
            "I appreciate you opening up. How can I best support you right now?",
        ],
        "hi": [
            "मैं सुनने के लिए यहां हूं। अपना समय लें और बताएं कि आपके मन में क्या है।",
            "मेरे साथ साझा करने के लिए धन्यवाद। आपके विचार और भावनाएं मायने रखती हैं।",
        ],
        "es": [
            "Estoy aquí para escuchar. Tómate tu tiempo y comparte lo que tienes en mente.",
            "Gracias por compartir conmigo. Tus pensamientos y sentimientos importan.",
        ],
        "fr": [
            "Je suis là pour écouter. Prenez votre temps et partagez ce que vous avez en tête.",
            "Merci de partager avec moi. Vos pensées et sentiments comptent.",
        ],
        "de": [
            "Ich bin hier, um zuzuhören. Nehmen Sie sich Zeit und teilen Sie, was Sie beschäftigt.",
            "Danke, dass Sie sich mir mitteilen. Ihre Gedanken und Gefühle sind wichtig.",
        ],
    },
}


def local_reply(emotion: str, locale: str = "en", rng: Optional[random.Random] = None) -> str:
    """Pick a canned reply for ``emotion``; unknown emotions use the default set."""
    by_locale = THERAPEUTIC_RESPONSES.get(emotion, THERAPEUTIC_RESPONSES["default"])
    options = by_locale.get(normalize_locale(locale)) or by_locale["en"]
    return (rng or random).choice(options)
