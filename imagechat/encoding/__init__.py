"""Image staging for the browser client.

Validates a user-selected file and converts it to the base64 payload the
chat endpoints accept.
"""

from imagechat.encoding.image_encoder import (
    MAX_IMAGE_SIZE,
    ImageEncodeError,
    ImageReadError,
    ImageTooLargeError,
    InvalidImageTypeError,
    UploadedFile,
    encode_image,
    to_data_uri,
)

__all__ = [
    "MAX_IMAGE_SIZE",
    "ImageEncodeError",
    "ImageReadError",
    "ImageTooLargeError",
    "InvalidImageTypeError",
    "UploadedFile",
    "encode_image",
    "to_data_uri",
]
