"""Bounded-parallel batch scheduler tolerant of per-item failure."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from code_mentor.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class BatchOutcome(Generic[T, R]):
    """Successful results in completion order, plus the items that failed."""

    results: list[R] = field(default_factory=list)
    failures: list[tuple[T, Exception]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.results) + len(self.failures)


class BatchScheduler:
    """Runs ``worker(item)`` for each item, ``batch_size`` at a time.

    Batch ``n + 1`` starts only once every task of batch ``n`` has settled.
    A failing item is logged and recorded, never raised.  Cancellation of the
    caller propagates.
    """

    def __init__(self, batch_size: int = 5) -> None:
        if batch_size < 1:
            raise ConfigurationError(f"Batch size must be at least 1, got {batch_size}")
        self.batch_size = batch_size

    async def run(
        self,
        items: Sequence[T],
        worker: Callable[[T], Awaitable[R]],
        label: Callable[[T], str] = str,
    ) -> BatchOutcome[T, R]:
        outcome: BatchOutcome[T, R] = BatchOutcome()

        async def settle(item: T) -> tuple[T, R | None, Exception | None]:
            try:
                return item, await worker(item), None
            except Exception as exc:
                return item, None, exc

        for start in range(0, len(items), self.batch_size):
            batch = items[start : start + self.batch_size]
            tasks = [asyncio.ensure_future(settle(item)) for item in batch]
            try:
                for next_done in asyncio.as_completed(tasks):
                    item, value, error = await next_done
                    if error is None:
                        outcome.results.append(value)  # type: ignore[arg-type]
                    else:
                        logger.warning("Failed to process %s: %s", label(item), error)
                        outcome.failures.append((item, error))
            finally:
                for task in tasks:
                    if not task.done():
                        task.cancel()

            logger.debug(
                "Batch %d settled (%d/%d items done)",
                start // self.batch_size + 1,
                outcome.attempted,
                len(items),
            )

        return outcome
