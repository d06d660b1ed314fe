"""Incremental decoder for ``data: ``-prefixed chat-completion event streams.

Chunks can end anywhere, including inside a multi-byte character or a JSON
object. Only complete lines are parsed; the remainder waits for more bytes.
"""
from __future__ import annotations

import codecs
import json
import logging
from typing import AsyncIterable, AsyncIterator, List

from companion.errors import DecodeAnomaly


logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


def extract_delta(payload: str) -> str:
    """Return ``choices[0].delta.content`` from one record payload.

    Raises DecodeAnomaly for anything that is not that shape.
    """
    try:
        obj = json.loads(payload)
    except ValueError as exc:
        raise DecodeAnomaly(f"invalid json: {payload[:80]!r}") from exc
    if not isinstance(obj, dict):
        raise DecodeAnomaly("record is not an object")
    choices = obj.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise DecodeAnomaly("record has no choices")
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        raise DecodeAnomaly("record has no delta")
    content = delta.get("content")
    if not isinstance(content, str):
        raise DecodeAnomaly("delta has no text content")
    return content


class StreamDecoder:
    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._parts: List[str] = []
        self.done = False

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def feed(self, chunk: bytes) -> List[str]:
        """Consume one chunk and return the deltas completed by it, in order."""
        if self.done:
            return []
        self._buffer += self._utf8.decode(chunk)
        deltas: List[str] = []
        while not self.done:
            newline = self._buffer.find("\n")
            if newline == -1:
                break
            line = self._buffer[:newline].strip()
            self._buffer = self._buffer[newline + 1 :]
            delta = self._handle_line(line)
            if delta:
                deltas.append(delta)
        self._parts.extend(deltas)
        return deltas

    def _handle_line(self, line: str) -> str:
        if not line.startswith(DATA_PREFIX):
            return ""
        payload = line[len(DATA_PREFIX) :].strip()
        if payload == DONE_MARKER:
            self.done = True
            self._buffer = ""
            return ""
        try:
            return extract_delta(payload)
        except DecodeAnomaly as exc:
            logger.debug("Skipping stream record: %s", exc)
            return ""


async def iter_deltas(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield text deltas until EOF or ``[DONE]``, whichever comes first."""
    decoder = StreamDecoder()
    async for chunk in chunks:
        for delta in decoder.feed(chunk):
            yield delta
        if decoder.done:
            break


async def collect_text(chunks: AsyncIterable[bytes]) -> str:
    parts: List[str] = []
    async for delta in iter_deltas(chunks):
        parts.append(delta)
    return "".join(parts)
