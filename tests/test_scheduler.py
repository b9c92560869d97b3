"""Tests for the bounded-parallel batch scheduler."""

import asyncio

import pytest

from code_mentor.domain.exceptions import ConfigurationError
from code_mentor.services.scheduler import BatchScheduler


class TestBatchScheduler:
    """Test batching, failure tolerance and ordering."""

    def test_rejects_empty_batches(self):
        with pytest.raises(ConfigurationError):
            BatchScheduler(0)

    @pytest.mark.asyncio
    async def test_failures_are_recorded_not_raised(self):
        async def worker(n):
            if n % 2:
                raise RuntimeError(f"odd {n}")
            return n * 10

        outcome = await BatchScheduler(3).run(list(range(6)), worker)

        assert sorted(outcome.results) == [0, 20, 40]
        assert sorted(item for item, _ in outcome.failures) == [1, 3, 5]
        assert outcome.attempted == 6

    @pytest.mark.asyncio
    async def test_batches_do_not_overlap(self):
        running = 0
        peak = 0
        events = []

        async def worker(n):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            events.append(("start", n))
            await asyncio.sleep(0.01 if n == 0 else 0)
            events.append(("end", n))
            running -= 1
            return n

        await BatchScheduler(2).run([0, 1, 2, 3, 4], worker)

        assert peak <= 2
        # the second batch waits for the slow first item
        assert events.index(("start", 2)) > events.index(("end", 0))

    @pytest.mark.asyncio
    async def test_results_in_completion_order(self):
        async def worker(n):
            await asyncio.sleep(0.02 if n == "slow" else 0)
            return n

        outcome = await BatchScheduler(5).run(["slow", "fast"], worker)

        assert outcome.results == ["fast", "slow"]

    @pytest.mark.asyncio
    async def test_empty_input(self):
        async def worker(n):
            return n

        outcome = await BatchScheduler().run([], worker)
        assert outcome.results == []
        assert outcome.failures == []

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def worker(n):
            await asyncio.sleep(10)

        task = asyncio.ensure_future(BatchScheduler(2).run([1, 2], worker))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
