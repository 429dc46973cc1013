"""
Models package for search parameters, responses and errors.
"""

from .errors import (
    AuthError,
    NetworkError,
    RateLimitError,
    RequestTimeoutError,
    ResponseParseError,
    SearchServiceError,
    SearchValidationError,
    UnknownUpstreamError,
)
from .search_params import SearchParams, UpstreamQuery
from .search_response import (
    BatchOutcome,
    CostBreakdown,
    CostInfo,
    NormalizedResult,
    SearchOutcome,
    SearchResponse,
    SearchResult,
    UsageInfo,
)

__all__ = [
    "AuthError",
    "BatchOutcome",
    "CostBreakdown",
    "CostInfo",
    "NetworkError",
    "NormalizedResult",
    "RateLimitError",
    "RequestTimeoutError",
    "ResponseParseError",
    "SearchOutcome",
    "SearchParams",
    "SearchResponse",
    "SearchResult",
    "SearchServiceError",
    "SearchValidationError",
    "UnknownUpstreamError",
    "UpstreamQuery",
    "UsageInfo",
]
