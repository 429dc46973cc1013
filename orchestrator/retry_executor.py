"""Retry loop for upstream calls: classify each failure, then back off or give up."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from models.errors import (
    AuthError,
    RateLimitError,
    ResponseParseError,
    SearchServiceError,
    SearchValidationError,
)
from orchestrator.error_classifier import classify_error
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

NON_RETRYABLE_ERRORS = (AuthError, SearchValidationError, ResponseParseError)


class RetryState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 10000

    def backoff_ms(self, attempt: int) -> int:
        """Exponential backoff after the given (1-based) failed attempt, capped."""
        return min(self.base_delay_ms * 2 ** (attempt - 1), self.max_delay_ms)


class RetryExecutor:
    """
    Runs an idempotent async operation, retrying transient classified errors.

    Rate-limited calls wait the server-specified delay; network and timeout failures use
    exponential backoff. Auth, validation and parse errors fail fast.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        timeout_ms: int = 30000,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            policy: Attempt and backoff limits
            timeout_ms: Request timeout reported on classified timeout errors
            sleep: Coroutine used for waiting between attempts (seconds)
        """
        self.policy = policy or RetryPolicy()
        self.timeout_ms = timeout_ms
        self._sleep = sleep

    def delay_ms_for(self, error: SearchServiceError, attempt: int) -> float | None:
        """
        Return how long to wait before the next attempt, or None if the error is final.
        """
        if isinstance(error, NON_RETRYABLE_ERRORS) or not error.retryable:
            return None
        if isinstance(error, RateLimitError):
            return error.retry_after * 1000
        return self.policy.backoff_ms(attempt)

    async def execute_with_retry(
        self, operation: Callable[[], Awaitable[T]], max_attempts: int | None = None
    ) -> T:
        """
        Execute operation up to max_attempts times.

        Args:
            operation: Zero-argument coroutine function; called once per attempt
            max_attempts: Total tries including the first (defaults to the policy)

        Returns:
            The first successful result

        Raises:
            SearchServiceError: The classified error of the last attempt, or the first
                non-retryable one
        """
        attempts = max(1, max_attempts if max_attempts is not None else self.policy.max_attempts)
        state = RetryState.IDLE

        for attempt in range(1, attempts + 1):
            state = RetryState.ATTEMPTING
            logger.debug(
                f"Attempt {attempt}/{attempts}",
                extra={"extra_fields": {"attempt": attempt, "state": state.value}},
            )
            try:
                result = await operation()
            except Exception as e:
                error = classify_error(e, self.timeout_ms)
                delay_ms = self.delay_ms_for(error, attempt)

                if delay_ms is None or attempt == attempts:
                    state = RetryState.FAILED
                    logger.error(
                        "All attempts failed" if delay_ms is not None else "Non-retryable error",
                        extra={
                            "extra_fields": {
                                "attempt": attempt,
                                "max_attempts": attempts,
                                "error_code": error.code,
                                "error_message": error.message,
                                "state": state.value,
                            }
                        },
                    )
                    if error is e:
                        raise
                    raise error from e

                state = RetryState.RETRYING
                logger.warning(
                    f"Attempt {attempt} failed, retrying in {delay_ms:.0f}ms",
                    extra={
                        "extra_fields": {
                            "attempt": attempt,
                            "max_attempts": attempts,
                            "error_code": error.code,
                            "delay_ms": delay_ms,
                            "state": state.value,
                        }
                    },
                )
                await self._sleep(delay_ms / 1000)
                continue

            state = RetryState.SUCCEEDED
            logger.debug(
                "Operation succeeded",
                extra={"extra_fields": {"attempt": attempt, "state": state.value}},
            )
            return result
