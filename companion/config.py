import os
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application configuration loaded from environment variables.

    Upstream gateway:
    - AI_GATEWAY_URL is the chat-completions endpoint requests are relayed to.
    - AI_GATEWAY_API_KEY is sent as a bearer token. When it is missing the
      relay answers every chat request with the generic 500 error.
    - UPSTREAM_READ_TIMEOUT is the allowed inactivity between stream chunks.
    """

    def __init__(self) -> None:
        self.gateway_url: str = os.getenv(
            "AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions"
        )
        self.api_key: Optional[str] = os.getenv("AI_GATEWAY_API_KEY") or None
        self.model: str = os.getenv("AI_GATEWAY_MODEL", "google/gemini-3-flash-preview")
        self.connect_timeout: float = float(os.getenv("UPSTREAM_CONNECT_TIMEOUT", "10"))
        self.read_timeout: float = float(os.getenv("UPSTREAM_READ_TIMEOUT", "45"))

        self.default_locale: str = os.getenv("DEFAULT_LOCALE", "en")
        self.sqlite_path: str = os.getenv("SQLITE_PATH", "./data/companion.db")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins: List[str] = self._get_list(os.getenv("CORS_ORIGINS", "*"))

    @staticmethod
    def _get_list(value: str) -> List[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def upstream_configured(self) -> bool:
        return bool(self.api_key and self.gateway_url)


settings = Settings()
