import json

import httpx
import pytest
from fastapi.testclient import TestClient

from chat_relay.api.dependencies import get_openai_client
from chat_relay.core.config import Settings, get_settings
from chat_relay.llm.utils import build_openai_client
from chat_relay.main import app

UPSTREAM_BASE_URL = "https://upstream.test/v1"

COMPLETION = {
    "id": "abc",
    "object": "chat.completion",
    "choices": [{"index": 0, "message": {"role": "assistant", "content": "hello"}}],
}


class UpstreamStub:
    """Stands in for the OpenAI API behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = COMPLETION
        self.raw_content: bytes | None = None
        self.exc: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw_content is not None:
            return httpx.Response(self.status_code, content=self.raw_content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
def settings():
    return Settings(
        OPENAI_API_KEY="sk-test",
        OPENAI_BASE_URL=UPSTREAM_BASE_URL,
        ACCESS_TOKEN=None,
    )


@pytest.fixture
def openai_client(settings, upstream):
    return build_openai_client(
        settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    )


@pytest.fixture
def client(settings, openai_client):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_openai_client] = lambda: openai_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
