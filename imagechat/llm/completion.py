"""OpenAI completion service for chat replies and image analysis.

Wraps ``AsyncOpenAI`` so the HTTP layer deals only in Message lists and
plain strings, and so upstream failures leave here already translated into
the proxy's error taxonomy.

Each request results in exactly one upstream call. The SDK's own retries are
disabled and nothing is streamed: the full reply is buffered.
"""

import logging

from openai import AsyncOpenAI

from imagechat.errors import (
    ANALYSIS_ERROR_MESSAGES,
    ANALYSIS_GENERIC_ERROR,
    CHAT_ERROR_MESSAGES,
    CHAT_GENERIC_ERROR,
    InternalError,
    classify_upstream_error,
)
from imagechat.llm.config import LLMConfig
from imagechat.llm.prompts import build_analysis_messages, build_chat_messages, to_wire
from imagechat.models.schemas import Message

logger = logging.getLogger(__name__)


class CompletionService:
    """Service for calling the chat completion API.

    Wraps the OpenAI SDK client with:
    - Fixed model parameters taken from LLMConfig
    - Upstream message assembly (system prompt, staged image)
    - Vendor error code translation per endpoint
    """

    def __init__(self, config: LLMConfig, client: AsyncOpenAI | None = None) -> None:
        """Initialize the completion service.

        Args:
            config: Configuration with a non-empty API key.
            client: Optional pre-built SDK client (used by tests).
        """
        self._config = config
        self._client = client or self._create_client()

    @property
    def config(self) -> LLMConfig:
        return self._config

    def _create_client(self) -> AsyncOpenAI:
        """Create the SDK client.

        Returns:
            AsyncOpenAI with retries disabled.
        """
        return AsyncOpenAI(
            api_key=self._config.require_api_key(),
            base_url=self._config.base_url,
            max_retries=0,
        )

    async def chat(self, conversation: list[Message], image: str | None = None) -> str:
        """Get the assistant reply for a conversation.

        Args:
            conversation: Client messages in order.
            image: Optional staged base64 image.

        Returns:
            The assistant's reply text (empty if the model returned none).

        Raises:
            UpstreamError: If the completion API call fails.
        """
        messages = build_chat_messages(conversation, image)

        try:
            completion = await self._client.chat.completions.create(
                model=self._config.chat_model,
                messages=to_wire(messages),
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        except Exception as e:
            logger.error(f"Chat completion failed: {e}")
            raise classify_upstream_error(e, CHAT_ERROR_MESSAGES, CHAT_GENERIC_ERROR) from e

        return completion.choices[0].message.content or ""

    async def analyze_image(self, image: str) -> str:
        """Describe an image with the vision model.

        Args:
            image: Base64 image without data-URI prefix.

        Returns:
            Free-text description of the image.

        Raises:
            UpstreamError: If the completion API call fails.
            InternalError: If the API returned no content.
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._config.vision_model,
                messages=to_wire(build_analysis_messages(image)),
                max_tokens=self._config.analysis_max_tokens,
            )
        except Exception as e:
            logger.error(f"Image analysis failed: {e}")
            raise classify_upstream_error(
                e, ANALYSIS_ERROR_MESSAGES, ANALYSIS_GENERIC_ERROR
            ) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error("Image analysis returned no content")
            raise InternalError(ANALYSIS_GENERIC_ERROR)

        return content


# Module-level cache, rebuilt when the configuration changes
_completion_service: CompletionService | None = None


def get_completion_service(config: LLMConfig) -> CompletionService:
    """Get the completion service for a configuration.

    The SDK client is reused across requests as long as the configuration
    (API key included) stays the same.

    Args:
        config: Configuration for the current request.

    Returns:
        A CompletionService bound to ``config``.

    Raises:
        ServiceUnavailableError: If ``config`` has no API key.
    """
    global _completion_service
    config.require_api_key()
    if _completion_service is None or _completion_service.config != config:
        _completion_service = CompletionService(config)
    return _completion_service
