"""Shared utilities for FastAPI routes."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from models.errors import RateLimitError, SearchServiceError
from server.schemas.responses import ErrorDTO
from utils.logger import get_logger

logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    # Literal: the 422 constant was renamed across Starlette releases.
    "validation": 422,
    "auth": status.HTTP_401_UNAUTHORIZED,
    "rate_limit": status.HTTP_429_TOO_MANY_REQUESTS,
    "timeout": status.HTTP_504_GATEWAY_TIMEOUT,
    "network": status.HTTP_502_BAD_GATEWAY,
    "parse": status.HTTP_502_BAD_GATEWAY,
    "unknown": status.HTTP_502_BAD_GATEWAY,
}


def status_code_for(error: SearchServiceError) -> int:
    return ERROR_STATUS_CODES.get(error.code, status.HTTP_502_BAD_GATEWAY)


async def search_error_handler(request: Request, exc: SearchServiceError) -> JSONResponse:
    """Render classified search errors as ErrorDTO with a matching status code."""
    status_code = status_code_for(exc)
    headers = {}
    if isinstance(exc, RateLimitError):
        headers["Retry-After"] = str(int(exc.retry_after))

    logger.warning(
        f"Search request failed: {exc.code}",
        extra={
            "extra_fields": {
                "path": request.url.path,
                "status_code": status_code,
                "error_code": exc.code,
                "error_message": exc.message,
            }
        },
    )
    dto = ErrorDTO(
        code=exc.code,
        message=exc.message,
        retryable=exc.retryable,
        details={k: v for k, v in exc.details.items() if isinstance(v, (str, int, float, bool))},
    )
    return JSONResponse(status_code=status_code, content=dto.model_dump(), headers=headers)
