"""Prompt text and upstream message assembly."""

from imagechat.encoding.image_encoder import to_data_uri
from imagechat.models.schemas import (
    ImageUrl,
    ImageUrlPart,
    Message,
    Role,
    TextPart,
)

SYSTEM_PROMPT = (
    "You are a helpful AI assistant that can analyze images and answer questions about them."
)

ANALYSIS_PROMPT = (
    "What do you see in this image? Please provide a detailed description."
)


def image_message(image: str) -> Message:
    """Wrap a base64 image in a user message with a single image part."""
    return Message(
        role=Role.USER,
        content=[ImageUrlPart(image_url=ImageUrl(url=to_data_uri(image)))],
    )


def build_chat_messages(conversation: list[Message], image: str | None = None) -> list[Message]:
    """Assemble the message list sent to the chat completion API.

    Layout: system prompt, then the staged image as its own user message
    (when present), then the client conversation in its original order.

    Args:
        conversation: Messages supplied by the client.
        image: Optional base64 image without data-URI prefix.

    Returns:
        The ordered upstream message list.
    """
    messages = [Message(role=Role.SYSTEM, content=SYSTEM_PROMPT)]
    if image:
        messages.append(image_message(image))
    messages.extend(conversation)
    return messages


def build_analysis_messages(image: str) -> list[Message]:
    """Single user message pairing the analysis prompt with the image."""
    return [
        Message(
            role=Role.USER,
            content=[
                TextPart(text=ANALYSIS_PROMPT),
                ImageUrlPart(image_url=ImageUrl(url=to_data_uri(image))),
            ],
        )
    ]


def to_wire(messages: list[Message]) -> list[dict]:
    """Serialize messages into the dicts the OpenAI SDK accepts."""
    return [message.model_dump(mode="json") for message in messages]
