"""Error classification, retry policy and search orchestration."""

from .error_classifier import classify_error
from .retry_executor import RetryExecutor, RetryPolicy
from .search_orchestrator import SearchOrchestrator

__all__ = ["RetryExecutor", "RetryPolicy", "SearchOrchestrator", "classify_error"]
