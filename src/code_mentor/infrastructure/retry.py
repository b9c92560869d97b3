"""Retry executor with capped exponential backoff."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

import httpx

from code_mentor.domain.exceptions import CodeMentorError, ConfigurationError, RemoteAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_DELAY_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class RetryContext:
    """State of a failed attempt, handed to ``on_retry`` before the next one."""

    operation: str
    attempt: int
    last_error: BaseException
    delay: float


def is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, CodeMentorError):
        return exc.retryable
    return isinstance(exc, (httpx.TransportError, TimeoutError, ConnectionError))


class RetryExecutor:
    """Runs an async operation up to ``retries + 1`` times.

    Non-retryable errors surface after the first attempt.  The delay before
    attempt ``n + 1`` is ``min(base_delay * 2 ** (n - 1), 30)`` seconds.
    """

    def __init__(
        self,
        retries: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_retry: Callable[[RetryContext], None] | None = None,
    ) -> None:
        if retries < 0:
            raise ConfigurationError(f"Retry count must not be negative, got {retries}")
        if base_delay < 0:
            raise ConfigurationError(f"Retry delay must not be negative, got {base_delay}")
        self.retries = retries
        self.base_delay = base_delay
        self._sleep = sleep
        self._on_retry = on_retry

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * 2 ** (attempt - 1), MAX_DELAY_SECONDS)

    async def run(self, operation: Callable[[], Awaitable[T]], context: str) -> T:
        attempts = self.retries + 1
        last_error: Exception = RuntimeError(f"{context} was never attempted")

        for attempt in range(1, attempts + 1):
            try:
                return await operation()
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Attempt %d/%d failed for %s: %s", attempt, attempts, context, exc
                )
                if attempt == attempts or not is_retryable(exc):
                    break
                ctx = RetryContext(
                    operation=context,
                    attempt=attempt,
                    last_error=exc,
                    delay=self.delay_for(attempt),
                )
                logger.debug("Retrying %s in %.2fs", ctx.operation, ctx.delay)
                if self._on_retry is not None:
                    self._on_retry(ctx)
                await self._sleep(ctx.delay)

        logger.error("Operation failed after %d attempt(s): %s", attempt, context)
        wrapped = self._wrap(last_error, context)
        if wrapped is last_error:
            raise wrapped
        raise wrapped from last_error

    @staticmethod
    def _wrap(exc: Exception, context: str) -> CodeMentorError:
        if isinstance(exc, CodeMentorError):
            exc.add_context(context)
            return exc
        if isinstance(exc, httpx.TransportError):
            return RemoteAPIError(
                f"Network error in {context}: {exc}",
                details={"operation": context, "originalError": str(exc)},
                retryable=True,
            )
        return CodeMentorError(
            f"Unexpected error in {context}: {exc}",
            "UNEXPECTED_ERROR",
            details={"operation": context, "originalError": str(exc)},
        )
