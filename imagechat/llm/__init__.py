"""Completion API access for the proxy endpoints.

Responsibilities:
    - Configuration loaded from the environment on every request
    - Upstream message assembly (system prompt, staged image, analysis prompt)
    - Single, non-streaming calls to the OpenAI chat completion API
    - Translation of vendor error codes into user-facing messages

Keeps the OpenAI SDK out of the HTTP layer.
"""

from imagechat.llm.completion import CompletionService, get_completion_service
from imagechat.llm.config import LLMConfig, get_llm_config

__all__ = ["CompletionService", "LLMConfig", "get_completion_service", "get_llm_config"]
