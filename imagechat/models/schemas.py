from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

MESSAGES_NOT_ARRAY = "Invalid request: messages must be an array"
IMAGE_NOT_STRING = "Invalid request: image must be a base64 string"


class Role(str, Enum):
    """Speaker of a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ImageUrl(BaseModel):
    """Inline image reference; ``url`` is a base64 data URI."""

    url: str


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrlPart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[TextPart | ImageUrlPart, Field(discriminator="type")]


class Message(BaseModel):
    """A single message in the conversation.

    Attributes:
        role: The speaker (user, assistant, or system).
        content: Plain text or an ordered list of content parts.
    """

    role: Role
    content: str | list[ContentPart]


class ClientMessage(Message):
    """A message supplied by the browser.

    System messages are injected by the server only.
    """

    @field_validator("role")
    @classmethod
    def reject_system_role(cls, v: Role) -> Role:
        if v is Role.SYSTEM:
            raise ValueError("system messages are added by the server")
        return v


_client_messages = TypeAdapter(list[ClientMessage])


class ChatReply(BaseModel):
    """Successful response from POST /api/chat."""

    message: str


class AnalysisResult(BaseModel):
    """Successful response from POST /api/analyze-image."""

    analysis: str


class ErrorResponse(BaseModel):
    """Error body returned by both endpoints."""

    error: str


@dataclass(frozen=True)
class Valid:
    """Accepted chat request.

    Attributes:
        conversation: Client messages in the order they were sent.
        image: Staged base64 image, or None.
    """

    conversation: list[Message]
    image: str | None = None


@dataclass(frozen=True)
class Invalid:
    """Rejected chat request with the reason shown to the client."""

    reason: str


ChatValidation = Valid | Invalid


def _format_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"Invalid request: messages.{location}: {first['msg']}"


def validate_image(value: Any) -> str | None:
    """Normalize the optional ``image`` field.

    Returns:
        The base64 string, or None when absent or empty.

    Raises:
        ValueError: If the value is present but not a string.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(IMAGE_NOT_STRING)
    return value


def validate_chat_request(body: Any) -> ChatValidation:
    """Check the shape of a decoded /api/chat body.

    Args:
        body: The decoded JSON value.

    Returns:
        Valid with the conversation and optional image, or Invalid with the
        reason to return to the client.
    """
    if not isinstance(body, dict) or not isinstance(body.get("messages"), list):
        return Invalid(MESSAGES_NOT_ARRAY)

    try:
        image = validate_image(body.get("image"))
    except ValueError as e:
        return Invalid(str(e))

    try:
        messages = _client_messages.validate_python(body["messages"])
    except ValidationError as e:
        return Invalid(_format_error(e))

    return Valid(conversation=list(messages), image=image)
