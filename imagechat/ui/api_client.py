"""HTTP client the chat page uses to reach the proxy endpoints."""

import logging
import os

import httpx

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
REQUEST_TIMEOUT = 120.0


class ChatApiError(Exception):
    """Request failed; ``str(error)`` is the text to show the user."""

    pass


class ChatApiClient:
    """Thin async wrapper over POST /api/chat and POST /api/analyze-image."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    async def _post(self, path: str, payload: dict) -> dict:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=REQUEST_TIMEOUT,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(path, json=payload)
            except httpx.RequestError as e:
                logger.error(f"Request to {path} failed: {e}")
                raise ChatApiError(f"Connection failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            error = data.get("error") if isinstance(data, dict) else None
            raise ChatApiError(error or f"Error: {response.status_code}")

        return data

    async def send_chat(self, messages: list[dict], image: str | None = None) -> str:
        """Send the conversation and return the assistant reply.

        Raises:
            ChatApiError: With the server's error message, verbatim.
        """
        data = await self._post("/api/chat", {"messages": messages, "image": image})
        return data.get("message") or ""

    async def analyze_image(self, image: str) -> str:
        """Request a description of a base64 image.

        Raises:
            ChatApiError: With the server's error message, verbatim.
        """
        data = await self._post("/api/analyze-image", {"image": image})
        return data.get("analysis") or ""
