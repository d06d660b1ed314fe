from __future__ import annotations


class CompanionError(Exception):
    """Base class for errors raised by the companion backend."""


class RelayError(CompanionError):
    """An upstream failure normalized to a status code and a user-facing message."""

    status_code = 500
    user_message = "I'm having trouble connecting right now. Please try again."

    def __init__(self, detail: str = "", status_code: int | None = None, user_message: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        if user_message is not None:
            self.user_message = user_message

    def to_payload(self) -> dict:
        return {"error": self.user_message}


class RateLimited(RelayError):
    status_code = 429
    user_message = "I'm taking a moment to rest. Please try again in a few seconds 💛"


class QuotaExceeded(RelayError):
    status_code = 402
    user_message = "Service temporarily unavailable. Please try again later."


class UpstreamFailure(RelayError):
    status_code = 500


class DecodeAnomaly(CompanionError):
    """A stream record that is not valid JSON or has no text delta. Never escapes the decoder."""
