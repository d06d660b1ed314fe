from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

from companion.client import CompanionClient, Reply
from companion.helplines import helplines_for


SPEECH_CODES = {
    "en": "en-US",
    "hi": "hi-IN",
    "es": "es-ES",
    "fr": "fr-FR",
    "de": "de-DE",
}


class SpeechRecognizer(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def listen(self) -> str:
        """Block until one utterance is heard; empty string when nothing was understood."""
        ...


class Speaker(Protocol):
    def say(self, text: str) -> None: ...


def crisis_notice(country: Optional[str] = None) -> str:
    lines = ["You don't have to go through this alone. You can reach someone right now:"]
    lines.extend(f"{h['name']} ({h['country']}): {h['number']}" for h in helplines_for(country))
    return "\n".join(lines)


async def voice_turn(
    recognizer: SpeechRecognizer,
    client: CompanionClient,
    speaker: Speaker,
    on_crisis: Optional[Callable[[Reply], None]] = None,
) -> Optional[Reply]:
    """Listen once, send the text and speak the full reply. None when nothing was heard.

    Listening and speaking block, so both run in a worker thread.
    """
    text = (await asyncio.to_thread(recognizer.listen)).strip()
    if not text:
        return None
    reply = await client.send(text)
    await asyncio.to_thread(speaker.say, reply.content)
    if reply.crisis and on_crisis is not None:
        on_crisis(reply)
    return reply
