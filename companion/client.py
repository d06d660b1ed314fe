"""Consumer side of ``POST /chat``: session history, stream decoding, local fallback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, Iterator, List, Literal, Optional, Tuple

import httpx

from companion.classifier import classify, normalize_locale
from companion.responses import local_reply
from companion.streaming import iter_deltas


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationHistory:
    """Session-scoped, append-only list of messages. Nothing is persisted."""

    def __init__(self) -> None:
        self._messages: List[ChatMessage] = []

    def append(self, role: Literal["user", "assistant"], content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def as_payload(self) -> List[Dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in self._messages]

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(tuple(self._messages))

    def __len__(self) -> int:
        return len(self._messages)


@dataclass
class Reply:
    content: str
    emotion: str
    crisis: bool
    fallback: bool = False


class CompanionClient:
    """Talks to a running companion backend.

    One turn at a time: ``busy`` is set while a reply streams and a second
    ``send``/``stream`` call during that window raises RuntimeError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        locale: str = "en",
        user_id: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.locale = normalize_locale(locale)
        self.user_id = user_id
        self.history = ConversationHistory()
        self.busy = False
        self.last_reply: Optional[Reply] = None
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=10.0))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "CompanionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def stream(self, text: str) -> AsyncIterator[str]:
        """Yield the assistant message as it grows.

        The turn is added to the history only once the stream completes.
        Closing this generator early leaves the history untouched.
        """
        if self.busy:
            raise RuntimeError("a reply is already in progress")
        self.busy = True
        self.last_reply = None
        try:
            local = classify(text, self.locale)
            emotion, crisis = local.emotion, local.crisis
            content = ""
            body = {
                "messages": self.history.as_payload() + [{"role": "user", "content": text}],
                "userMessage": text,
                "locale": self.locale,
            }
            if self.user_id:
                body["userId"] = self.user_id

            try:
                async with self._http.stream("POST", f"{self.base_url}/chat", json=body) as response:
                    if response.status_code != 200:
                        await response.aread()
                        logger.warning("Chat request failed (%s): %s", response.status_code, self._error_message(response))
                    else:
                        emotion = response.headers.get("x-detected-emotion", emotion)
                        crisis = response.headers.get("x-crisis-detected", str(crisis).lower()).lower() == "true"
                        async for delta in iter_deltas(response.aiter_bytes()):
                            content += delta
                            yield content
            except httpx.HTTPError as exc:
                logger.warning("Chat request failed: %r", exc)

            fallback = not content
            if fallback:
                content = local_reply(emotion, self.locale)
                yield content

            self.history.append("user", text)
            self.history.append("assistant", content)
            self.last_reply = Reply(content=content, emotion=emotion, crisis=crisis, fallback=fallback)
        finally:
            self.busy = False

    async def send(self, text: str) -> Reply:
        async for _ in self.stream(text):
            pass
        if self.last_reply is None:
            raise RuntimeError("reply stream ended without a reply")
        return self.last_reply

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(payload, dict):
            return str(payload.get("error", ""))
        return str(payload)[:200]
