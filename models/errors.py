"""Typed error hierarchy for the search service.

Every failure that leaves the core is one of these exceptions. The ``code`` attribute is
the closed set used to drive retry policy and user messaging.
"""

from typing import Any


class SearchServiceError(Exception):
    """Base class for classified search errors."""

    code = "unknown"
    retryable = False

    def __init__(self, message: str, *, cause: BaseException | None = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details: dict[str, Any] = details

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            "details": dict(self.details),
        }


class AuthError(SearchServiceError):
    """Credentials were rejected upstream. The user must fix configuration."""

    code = "auth"


class RateLimitError(SearchServiceError):
    code = "rate_limit"
    retryable = True

    def __init__(self, message: str, retry_after: float = 60, **kwargs: Any):
        super().__init__(message, retry_after=retry_after, **kwargs)
        self.retry_after = retry_after


class RequestTimeoutError(SearchServiceError):
    code = "timeout"
    retryable = True

    def __init__(self, message: str, timeout_ms: int, **kwargs: Any):
        super().__init__(message, timeout_ms=timeout_ms, **kwargs)
        self.timeout_ms = timeout_ms


class NetworkError(SearchServiceError):
    """Connectivity failure or upstream server fault."""

    code = "network"
    retryable = True


class UnknownUpstreamError(NetworkError):
    """Unrecognised upstream failure. Retried like a network error."""

    code = "unknown"


class SearchValidationError(SearchServiceError, ValueError):
    """Caller input failed validation. Raised before any network call."""

    code = "validation"


class ResponseParseError(SearchServiceError):
    """The upstream answered, but not with a usable result payload."""

    code = "parse"
