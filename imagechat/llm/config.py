"""Completion API configuration with environment variable loading.

Pydantic-based configuration for the OpenAI client.
Supports OpenAI and OpenAI-compatible APIs via custom base URL.

The API key is read per request and is allowed to be empty: a missing key is
reported to the caller of that request rather than failing at startup.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from imagechat.errors import MISSING_API_KEY_ERROR, ServiceUnavailableError

# Load environment variables from .env file
load_dotenv()


class LLMConfig(BaseModel):
    """Configuration for the completion API client.

    Attributes:
        api_key: API key for model access (may be empty).
        base_url: API base URL (None for OpenAI default).
        chat_model: Model identifier for chat completions.
        vision_model: Vision-capable model for image analysis.
        temperature: Sampling temperature for chat completions.
        max_tokens: Maximum tokens in a chat reply.
        analysis_max_tokens: Maximum tokens in an image analysis.
    """

    model_config = {"frozen": True}

    api_key: str = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY") or os.getenv("LLM_API_KEY", ""),
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    chat_model: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"),
        description="Model used for chat completions",
    )
    vision_model: str = Field(
        default_factory=lambda: os.getenv("LLM_VISION_MODEL", "gpt-4-vision-preview"),
        description="Vision-capable model used for image analysis",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for chat completions",
    )
    max_tokens: int = Field(
        default=1000,
        ge=1,
        le=128000,
        description="Maximum tokens in a chat reply",
    )
    analysis_max_tokens: int = Field(
        default=500,
        ge=1,
        le=128000,
        description="Maximum tokens in an image analysis",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace; a blank key becomes empty."""
        return v.strip()

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        """Return the API key or fail the current request.

        Raises:
            ServiceUnavailableError: If no key is configured.
        """
        if not self.has_api_key:
            raise ServiceUnavailableError(MISSING_API_KEY_ERROR)
        return self.api_key


def get_llm_config() -> LLMConfig:
    """Create configuration from the current environment.

    Called once per request so that a key added to the environment after
    startup is picked up.

    Returns:
        LLMConfig instance.
    """
    return LLMConfig()
