"""Map raw upstream failures onto the classified error hierarchy.

Classification reads observable fields (status, headers, class name, message) rather than
concrete exception types, so SDK exceptions and test doubles of the same shape are treated
identically.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from models.errors import (
    AuthError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    SearchServiceError,
    UnknownUpstreamError,
)
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60

NETWORK_MARKERS = ("network", "econnrefused", "connection refused")


@dataclass(frozen=True)
class ErrorShape:
    """Structural description of a failure."""

    name: str
    message: str
    status: Optional[int] = None
    headers: dict[str, str] = field(default_factory=dict)


def _read_headers(error: Any) -> dict[str, str]:
    headers = getattr(error, "headers", None)
    if headers is None:
        response = getattr(error, "response", None)
        headers = getattr(response, "headers", None)
    if not isinstance(headers, Mapping) and not hasattr(headers, "items"):
        return {}
    return {str(k).lower(): str(v) for k, v in headers.items()}


def describe_error(error: BaseException) -> ErrorShape:
    # openai's APIStatusError exposes status_code; other clients use status.
    status = getattr(error, "status", None)
    if status is None:
        status = getattr(error, "status_code", None)
    if isinstance(status, bool) or not isinstance(status, int):
        status = None

    name = getattr(error, "name", None)
    if not isinstance(name, str) or not name:
        name = type(error).__name__
    message = getattr(error, "message", None)
    if not isinstance(message, str) or not message:
        message = str(error)

    return ErrorShape(
        name=name,
        message=message,
        status=status,
        headers=_read_headers(error) if status is not None else {},
    )


def parse_retry_after(headers: Mapping[str, str]) -> float:
    value = headers.get("retry-after")
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = float(value)
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    if seconds < 0:
        return DEFAULT_RETRY_AFTER_SECONDS
    return int(seconds) if seconds.is_integer() else seconds


def classify_shape(shape: ErrorShape, cause: BaseException, timeout_ms: int) -> SearchServiceError:
    if shape.status is not None:
        logger.error(
            "OpenAI API error",
            extra={
                "extra_fields": {
                    "status": shape.status,
                    "error_name": shape.name,
                    "error_message": shape.message,
                }
            },
        )
        if shape.status == 401:
            return AuthError(
                "OpenAI API key is invalid. Check OPENAI_API_KEY.", cause=cause, status=401
            )
        if shape.status == 429:
            return RateLimitError(
                "OpenAI API rate limit reached.",
                retry_after=parse_retry_after(shape.headers),
                cause=cause,
                status=429,
            )
        if shape.status >= 500:
            return NetworkError(
                "OpenAI API server error occurred.", cause=cause, status=shape.status
            )
        return NetworkError(
            f"OpenAI API error: {shape.message}", cause=cause, status=shape.status
        )

    lowered = shape.message.lower()
    if shape.name == "AbortError" or "timeout" in shape.name.lower() or "timeout" in lowered:
        return RequestTimeoutError(
            f"Request timed out ({timeout_ms}ms)", timeout_ms=timeout_ms, cause=cause
        )

    if any(marker in lowered for marker in NETWORK_MARKERS) or "connection" in shape.name.lower():
        return NetworkError("Network connection error occurred.", cause=cause)

    return UnknownUpstreamError(
        "An unexpected error occurred.",
        cause=cause,
        error_type=shape.name,
        error_message=shape.message,
    )


def classify_error(error: BaseException, timeout_ms: int) -> SearchServiceError:
    """
    Classify any exception raised by the upstream call.

    Already-classified errors (including parse and validation errors) are returned as-is.

    Args:
        error: The raised exception
        timeout_ms: Configured request timeout, reported on timeout errors

    Returns:
        A SearchServiceError subclass instance; the original exception is kept as ``cause``
    """
    if isinstance(error, SearchServiceError):
        return error
    return classify_shape(describe_error(error), error, timeout_ms)
