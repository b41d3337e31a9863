"""Image validation and base64 encoding for staged uploads.

Validates the declared content type and size before touching the file
content, then reads it once and returns the bare base64 payload.
"""

import base64
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

# Constants
MAX_IMAGE_SIZE = 4 * 1024 * 1024  # 4MB
DEFAULT_IMAGE_MIME = "image/jpeg"


class ImageEncodeError(Exception):
    """Raised when a selected file cannot be staged as an image."""

    pass


class InvalidImageTypeError(ImageEncodeError):
    """Declared content type is not an image."""

    def __init__(self) -> None:
        super().__init__("Please upload an image file (JPEG, PNG, etc.)")


class ImageTooLargeError(ImageEncodeError):
    """File exceeds MAX_IMAGE_SIZE."""

    def __init__(self) -> None:
        super().__init__("Image size should be less than 4MB")


class ImageReadError(ImageEncodeError):
    """File content could not be read."""

    def __init__(self) -> None:
        super().__init__("Failed to read file")


class ImageSource(Protocol):
    """Anything exposing a declared type, a size and an async read."""

    content_type: str
    size: int

    async def read(self) -> bytes: ...


@dataclass
class UploadedFile:
    """ImageSource built from separate attributes and a read callable.

    Attributes:
        name: Original filename.
        content_type: MIME type declared by the browser.
        size: Byte length declared by the browser.
        reader: Coroutine function returning the file content.
    """

    name: str
    content_type: str
    size: int
    reader: Callable[[], Awaitable[bytes]]

    async def read(self) -> bytes:
        return await self.reader()


def to_data_uri(payload: str, mime: str = DEFAULT_IMAGE_MIME) -> str:
    """Build a ``data:<mime>;base64,<payload>`` URI."""
    return f"data:{mime};base64,{payload}"


async def encode_image(source: ImageSource) -> str:
    """Validate an image file and return its base64 content.

    Args:
        source: The selected file.

    Returns:
        Base64 string of the file bytes, without data-URI prefix.

    Raises:
        InvalidImageTypeError: If the content type does not start with ``image/``.
        ImageTooLargeError: If the file is larger than 4MB.
        ImageReadError: If reading the content fails.
    """
    if not (source.content_type or "").startswith("image/"):
        raise InvalidImageTypeError()

    if source.size > MAX_IMAGE_SIZE:
        raise ImageTooLargeError()

    try:
        content = await source.read()
    except Exception as e:
        logger.warning(f"Failed to read uploaded image: {e}")
        raise ImageReadError() from e

    return base64.b64encode(content).decode("ascii")
