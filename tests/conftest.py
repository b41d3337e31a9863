"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - app / async_client: Fresh FastAPI app and HTTPX client over ASGI
    - api_key / no_api_key: Control the credential seen by each request
    - openai_client: Mocked AsyncOpenAI with an AsyncMock ``create``
    - patched_service: Routes use a CompletionService bound to openai_client
"""

from collections.abc import AsyncGenerator, Generator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from imagechat.api.app import create_app
from imagechat.llm.completion import CompletionService
from imagechat.llm.config import LLMConfig

TEST_API_KEY = "sk-test-key-12345"


def make_completion(content: str | None) -> SimpleNamespace:
    """Build an object shaped like a ChatCompletion with one choice."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def make_api_error(code: str | None, status_code: int = 400) -> openai.APIStatusError:
    """Build a real OpenAI SDK error carrying a vendor error code."""
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError(
        f"Error code: {status_code}",
        response=response,
        body={"code": code, "message": "upstream failure", "type": "error"},
    )


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure an API key in the environment."""
    monkeypatch.setenv("OPENAI_API_KEY", TEST_API_KEY)
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    return TEST_API_KEY


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every API key variable from the environment."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("LLM_API_KEY", raising=False)


@pytest.fixture
def openai_client() -> MagicMock:
    """Mocked AsyncOpenAI client returning a fixed reply by default."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_completion("Hello there!"))
    return client


@pytest.fixture
def patched_service(api_key: str, openai_client: MagicMock) -> Generator[MagicMock]:
    """Route both endpoints to a CompletionService using the mocked client."""

    def factory(config: LLMConfig) -> CompletionService:
        config.require_api_key()
        return CompletionService(config, client=openai_client)

    with (
        patch("imagechat.api.chat.get_completion_service", side_effect=factory),
        patch("imagechat.api.analyze.get_completion_service", side_effect=factory),
    ):
        yield openai_client


@pytest.fixture
def app() -> FastAPI:
    """Create a fresh application instance."""
    return create_app()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
