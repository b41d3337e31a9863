"""Error taxonomy for the proxy endpoints.

Every failure raised inside a route is a ProxyError carrying the HTTP status
and the user-facing message. The exception handler registered in
``create_app`` turns it into a ``{"error": message}`` JSON body.
"""

from enum import Enum


class ProxyError(Exception):
    """Base class for errors surfaced to the client as ``{"error": ...}``.

    Attributes:
        status_code: HTTP status returned to the client.
        message: User-facing error text, returned verbatim.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(ProxyError):
    """Malformed or missing client input."""

    status_code = 400


class ServiceUnavailableError(ProxyError):
    """Upstream credential is not configured."""

    status_code = 500


class InternalError(ProxyError):
    """Unexpected failure, including an upstream reply with no content."""

    status_code = 500


class UpstreamErrorKind(str, Enum):
    """Vendor error codes returned by the completion API."""

    QUOTA = "insufficient_quota"
    RATE_LIMIT = "rate_limit_exceeded"
    CREDENTIAL = "invalid_api_key"
    MODEL = "model_not_found"
    OTHER = "other"

    @classmethod
    def from_code(cls, code: object) -> "UpstreamErrorKind":
        """Map a raw vendor code to a kind, OTHER when unrecognized."""
        try:
            return cls(code)
        except ValueError:
            return cls.OTHER


class UpstreamError(ProxyError):
    """Failure propagated from the completion API."""

    status_code = 500

    def __init__(self, message: str, kind: UpstreamErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


# Translation tables: kind -> user-facing message. Kinds missing from a
# table fall back to the endpoint's generic message.
CHAT_ERROR_MESSAGES: dict[UpstreamErrorKind, str] = {
    UpstreamErrorKind.MODEL: (
        "The GPT-4o-mini model is not available or you do not have access to it"
    ),
    UpstreamErrorKind.CREDENTIAL: "Invalid OpenAI API key",
}
CHAT_GENERIC_ERROR = "An error occurred while processing your request"

ANALYSIS_ERROR_MESSAGES: dict[UpstreamErrorKind, str] = {
    UpstreamErrorKind.QUOTA: "OpenAI API quota exceeded",
    UpstreamErrorKind.RATE_LIMIT: "Rate limit exceeded, please try again later",
    UpstreamErrorKind.CREDENTIAL: "Invalid OpenAI API key",
    UpstreamErrorKind.MODEL: (
        "Please make sure you have access to GPT-4 Vision Preview in your OpenAI account"
    ),
}
ANALYSIS_GENERIC_ERROR = "Error analyzing image"

INVALID_JSON_ERROR = "Invalid JSON in request body"
MISSING_API_KEY_ERROR = "OpenAI API key not configured"


def classify_upstream_error(
    exc: Exception,
    table: dict[UpstreamErrorKind, str],
    default: str,
) -> UpstreamError:
    """Translate an upstream exception into an UpstreamError.

    The vendor code is read from the exception's ``code`` attribute, which
    the OpenAI SDK sets from the error body.

    Args:
        exc: Exception raised by the completion client.
        table: Endpoint-specific kind -> message table.
        default: Message used when the kind is not in the table.

    Returns:
        UpstreamError with the translated message and classified kind.
    """
    kind = UpstreamErrorKind.from_code(getattr(exc, "code", None))
    return UpstreamError(table.get(kind, default), kind=kind)
