"""Streaming relay from the chat endpoint to the upstream chat-completions gateway."""
from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import AsyncIterator, Dict, List, Optional

import httpx

from companion.classifier import Classification, classify, find_crisis_trigger
from companion.config import Settings
from companion.db import Database
from companion.errors import QuotaExceeded, RateLimited, UpstreamFailure
from companion.keywords import DEFAULT_TABLE, KeywordTable
from companion.prompts import compose_system_prompt


logger = logging.getLogger(__name__)


@dataclass
class RelayResponse:
    classification: Classification
    body: AsyncIterator[bytes]

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "X-Detected-Emotion": self.classification.emotion,
            "X-Crisis-Detected": "true" if self.classification.crisis else "false",
        }


def build_messages(history: List[Dict[str, str]], user_message: str, system_prompt: str) -> List[Dict[str, str]]:
    """System prompt first, then the history in order.

    The history sent by the UI normally already ends with the new user
    message; it is appended only when it is missing.
    """
    messages = [{"role": "system", "content": system_prompt}]
    messages.extend({"role": m["role"], "content": m["content"]} for m in history)
    last = history[-1] if history else None
    if not last or last.get("role") != "user" or last.get("content") != user_message:
        messages.append({"role": "user", "content": user_message})
    return messages


class ChatRelay:
    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        store: Optional[Database] = None,
        store_path: Optional[str] = None,
        table: KeywordTable = DEFAULT_TABLE,
    ) -> None:
        self.settings = settings
        self.store = store
        self.store_path = store_path
        self._owns_store = False
        self.table = table
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=settings.connect_timeout,
                read=settings.read_timeout,
                write=10.0,
                pool=10.0,
            )
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
        if self._owns_store and self.store is not None:
            self.store.close()

    async def relay(
        self,
        history: List[Dict[str, str]],
        user_message: str,
        locale: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> RelayResponse:
        """Send one turn upstream and hand back its event stream.

        The body is passed through as sent, minus any transfer compression.

        Raises RateLimited, QuotaExceeded or UpstreamFailure. Nothing is
        retried; the caller resubmits.
        """
        classification = classify(user_message, locale or self.settings.default_locale, self.table)
        if classification.crisis:
            self._record_crisis(find_crisis_trigger(user_message, self.table), user_id)

        if not self.settings.api_key:
            raise UpstreamFailure("AI_GATEWAY_API_KEY is not configured")

        payload = {
            "model": self.settings.model,
            "messages": build_messages(
                history,
                user_message,
                compose_system_prompt(classification.emotion, classification.crisis),
            ),
            "stream": True,
        }
        request = self._client.build_request(
            "POST",
            self.settings.gateway_url,
            json=payload,
            headers={"Authorization": f"Bearer {self.settings.api_key}"},
        )
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise UpstreamFailure(f"upstream request failed: {exc!r}") from exc

        if response.is_success:
            logger.info(
                "Relaying stream emotion=%s crisis=%s", classification.emotion, classification.crisis
            )
            return RelayResponse(classification=classification, body=self._stream_body(response))

        status = response.status_code
        try:
            error_text = (await response.aread()).decode("utf-8", "replace")
        except httpx.HTTPError:
            error_text = ""
        finally:
            await response.aclose()

        if status == 429:
            raise RateLimited(f"upstream rate limited: {error_text[:200]}")
        if status == 402:
            raise QuotaExceeded(f"upstream quota exceeded: {error_text[:200]}")
        raise UpstreamFailure(f"AI gateway error {status}: {error_text[:500]}")

    async def _stream_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            # Headers are already sent; the stream just ends early.
            logger.warning("Upstream stream interrupted: %r", exc)
        finally:
            await response.aclose()

    def _open_store(self) -> Optional[Database]:
        """The crisis log store, opened on first use from ``store_path``."""
        if self.store is None and self.store_path:
            try:
                self.store = Database(self.store_path)
            except (OSError, sqlite3.Error):
                logger.exception("Cannot open crisis log at %s", self.store_path)
                return None
            self._owns_store = True
        return self.store

    def _record_crisis(self, trigger: Optional[str], user_id: Optional[str]) -> None:
        logger.warning("Crisis keyword detected trigger=%r user_id=%s", trigger, user_id)
        store = self._open_store()
        if store is None:
            return
        try:
            store.log_crisis(trigger, user_id=user_id)
        except sqlite3.Error:
            logger.exception("Failed to write crisis log")
