"""Pytest fixtures and shared test configuration.

Fixtures:
    - store: Fresh in-memory conversation store
    - async_client: HTTPX client bound to the FastAPI app via ASGITransport
    - gateway_env: Gateway API key set in the environment
    - sse_body: Builds an SSE body from content fragments

The app's store dependency is overridden so tests never touch the on-disk database.
"""

import json
from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from yuno.api import app
from yuno.storage.store import ConversationStore, get_conversation_store


def _frame(content: str) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n"


@pytest.fixture
def store() -> ConversationStore:
    """Return an isolated in-memory conversation store."""
    return ConversationStore("sqlite://")


@pytest.fixture
async def async_client(store: ConversationStore) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_conversation_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def gateway_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Configure the gateway with a test key and default model settings."""
    monkeypatch.setenv("LLM_API_KEY", "gw-test-key")
    monkeypatch.setenv("LLM_GATEWAY_URL", "https://gateway.test/v1/chat/completions")
    monkeypatch.delenv("LLM_MODEL", raising=False)
    monkeypatch.delenv("LLM_VISION_MODEL", raising=False)


@pytest.fixture
def sse_body() -> Callable[..., bytes]:
    """Return a builder for well-formed SSE bodies ending in [DONE]."""

    def build(*fragments: str, done: bool = True) -> bytes:
        body = "".join(_frame(f) for f in fragments)
        if done:
            body += "data: [DONE]\n"
        return body.encode("utf-8")

    return build
