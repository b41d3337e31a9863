"""Chat proxy endpoint.

Forwards the browser's conversation, plus an optional staged image, to the
chat completion API and returns the assistant's reply.
"""

import logging

from fastapi import APIRouter, Request

from imagechat.api.body import read_json_body
from imagechat.errors import CHAT_GENERIC_ERROR, BadRequestError, InternalError, ProxyError
from imagechat.llm.completion import get_completion_service
from imagechat.llm.config import get_llm_config
from imagechat.models.schemas import (
    ChatReply,
    ErrorResponse,
    Invalid,
    validate_chat_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


async def _generate_reply(request: Request) -> str:
    body = await read_json_body(request)

    # Key is checked per request; the process may start without one
    config = get_llm_config()
    config.require_api_key()

    result = validate_chat_request(body)
    if isinstance(result, Invalid):
        logger.warning(f"Rejected chat request: {result.reason}")
        raise BadRequestError(result.reason)

    service = get_completion_service(config)
    reply = await service.chat(result.conversation, result.image)

    logger.info(
        f"Chat reply generated ({len(result.conversation)} messages, "
        f"image={'yes' if result.image else 'no'})"
    )
    return reply


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: Request) -> ChatReply:
    """Send a conversation to the completion API.

    Body: ``{"messages": Message[], "image"?: base64 string}``.

    Returns:
        ChatReply with the assistant's text.

    Raises:
        400: Malformed JSON or invalid message list.
        500: API key not configured, upstream failure, or unexpected error.
    """
    try:
        reply = await _generate_reply(request)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in chat endpoint: {e}")
        raise InternalError(CHAT_GENERIC_ERROR) from e

    return ChatReply(message=reply)
