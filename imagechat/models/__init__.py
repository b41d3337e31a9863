"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Message: Individual message in a conversation
    - ChatReply / AnalysisResult: Successful endpoint responses
    - ErrorResponse: ``{"error": ...}`` body for every failure
    - Valid / Invalid: Tagged result of chat request validation
"""

from imagechat.models.schemas import (
    AnalysisResult,
    ChatReply,
    ErrorResponse,
    Invalid,
    Message,
    Role,
    Valid,
    validate_chat_request,
)

__all__ = [
    "AnalysisResult",
    "ChatReply",
    "ErrorResponse",
    "Invalid",
    "Message",
    "Role",
    "Valid",
    "validate_chat_request",
]
