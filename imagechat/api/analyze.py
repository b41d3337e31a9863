"""Image analysis endpoint.

Sends a single image with a fixed prompt to the vision model and returns
its description. Not used by the chat page; kept as an independent endpoint.
"""

import logging

from fastapi import APIRouter, Request

from imagechat.api.body import read_json_body
from imagechat.errors import (
    ANALYSIS_GENERIC_ERROR,
    BadRequestError,
    InternalError,
    ProxyError,
)
from imagechat.llm.completion import get_completion_service
from imagechat.llm.config import get_llm_config
from imagechat.models.schemas import AnalysisResult, ErrorResponse, validate_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])

NO_IMAGE_ERROR = "No image provided"


def _extract_image(body: object) -> str:
    """Pull the required base64 image out of the decoded body.

    Raises:
        BadRequestError: If the image is missing or not a string.
    """
    try:
        image = validate_image(body.get("image") if isinstance(body, dict) else None)
    except ValueError as e:
        raise BadRequestError(str(e)) from e
    if image is None:
        raise BadRequestError(NO_IMAGE_ERROR)
    return image


@router.post(
    "/analyze-image",
    response_model=AnalysisResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_image(request: Request) -> AnalysisResult:
    """Describe a base64 image.

    Body: ``{"image": base64 string}``.

    Returns:
        AnalysisResult with the model's description.

    Raises:
        400: Malformed JSON, or no image in the body.
        500: API key not configured, upstream failure, or empty analysis.
    """
    try:
        image = _extract_image(await read_json_body(request))
        config = get_llm_config()
        config.require_api_key()
        service = get_completion_service(config)
        analysis = await service.analyze_image(image)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in analysis endpoint: {e}")
        raise InternalError(ANALYSIS_GENERIC_ERROR) from e

    logger.info(f"Image analysis generated ({len(analysis)} chars)")
    return AnalysisResult(analysis=analysis)
