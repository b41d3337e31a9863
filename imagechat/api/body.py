"""Request body decoding shared by the proxy endpoints."""

import json
import logging
from typing import Any

from fastapi import Request

from imagechat.errors import INVALID_JSON_ERROR, BadRequestError

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> Any:
    """Decode the request body as JSON.

    Parse failures are reported as ``{"error": ...}`` with status 400.

    Raises:
        BadRequestError: If the body is not valid JSON.
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Rejected malformed JSON body on {request.url.path}: {e}")
        raise BadRequestError(INVALID_JSON_ERROR) from e
