from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from companion.config import Settings
from companion.db import Database
from companion.main import create_app
from companion.relay import ChatRelay


GATEWAY_URL = "https://gateway.test/v1/chat/completions"


@pytest.fixture
def settings() -> Settings:
    s = Settings()
    s.gateway_url = GATEWAY_URL
    s.api_key = "test-key"
    s.model = "test-model"
    s.sqlite_path = ":memory:"
    s.default_locale = "en"
    return s


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    database.close()


@pytest.fixture
def upstream_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(settings, db, upstream_requests) -> Callable[..., TestClient]:
    """Build a TestClient whose relay talks to a stubbed gateway."""

    def factory(handler=None, status: int = 200, body: bytes = b"", **overrides) -> TestClient:
        for key, value in overrides.items():
            setattr(settings, key, value)

        def default_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, content=body, headers={"content-type": "text/event-stream"})

        inner = handler or default_handler

        def recording(request: httpx.Request) -> httpx.Response:
            upstream_requests.append(request)
            return inner(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
        relay = ChatRelay(settings, http_client=http_client, store=db)
        return TestClient(create_app(settings, relay=relay, db=db))

    return factory
