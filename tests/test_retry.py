"""Tests for the retry executor."""

import httpx
import pytest

from code_mentor.domain.exceptions import (
    CodeMentorError,
    ConfigurationError,
    RemoteAPIError,
    ValidationError,
)
from code_mentor.infrastructure.retry import RetryContext, RetryExecutor, is_retryable


class FlakyOperation:
    """Fails with the queued errors, then returns ``value``."""

    def __init__(self, errors, value="ok"):
        self.errors = list(errors)
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.value


class TestRetryExecutor:
    """Test backoff and retry classification."""

    @pytest.mark.asyncio
    async def test_recovers_after_two_server_errors(self, retry, sleeps):
        """Two 503s then success: backoff is base then 2 * base."""
        operation = FlakyOperation(
            [RemoteAPIError("unavailable", status_code=503)] * 2, value={"ok": True}
        )

        assert await retry.run(operation, "get_file_content") == {"ok": True}
        assert operation.calls == 3
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_not_found_is_never_retried(self, retry, sleeps):
        operation = FlakyOperation([RemoteAPIError("missing", status_code=404)])

        with pytest.raises(RemoteAPIError) as info:
            await retry.run(operation, "get_repository(acme/shop)")

        assert operation.calls == 1
        assert sleeps == []
        assert info.value.retryable is False
        assert info.value.context == "get_repository(acme/shop)"

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_last_error(self, retry, sleeps):
        operation = FlakyOperation([RemoteAPIError("down", status_code=500)] * 10)

        with pytest.raises(RemoteAPIError):
            await retry.run(operation, "list_files")

        assert operation.calls == 4
        assert sleeps == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_transport_errors_are_wrapped(self, sleeps):
        async def no_sleep(delay):
            sleeps.append(delay)

        executor = RetryExecutor(retries=1, base_delay=0.5, sleep=no_sleep)
        operation = FlakyOperation([httpx.ConnectError("refused")] * 2)

        with pytest.raises(RemoteAPIError) as info:
            await executor.run(operation, "get_rate_limit")

        assert info.value.retryable is True
        assert isinstance(info.value.__cause__, httpx.ConnectError)
        assert sleeps == [0.5]

    @pytest.mark.asyncio
    async def test_unknown_errors_become_unexpected(self, retry):
        operation = FlakyOperation([KeyError("content")])

        with pytest.raises(CodeMentorError) as info:
            await retry.run(operation, "decode")

        assert info.value.code == "UNEXPECTED_ERROR"
        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_on_retry_receives_each_failed_attempt(self, sleeps):
        async def no_sleep(delay):
            sleeps.append(delay)

        seen = []
        executor = RetryExecutor(retries=2, base_delay=0.25, sleep=no_sleep, on_retry=seen.append)
        busy = RemoteAPIError("busy", status_code=503)

        assert await executor.run(FlakyOperation([busy, busy]), "get_file_content") == "ok"

        assert seen == [
            RetryContext(operation="get_file_content", attempt=1, last_error=busy, delay=0.25),
            RetryContext(operation="get_file_content", attempt=2, last_error=busy, delay=0.5),
        ]
        assert sleeps == [0.25, 0.5]

    def test_delay_is_capped(self):
        executor = RetryExecutor(base_delay=1.0)
        assert executor.delay_for(1) == 1.0
        assert executor.delay_for(3) == 4.0
        assert executor.delay_for(10) == 30.0

    @pytest.mark.parametrize("kwargs", [{"retries": -1}, {"base_delay": -0.5}])
    def test_invalid_settings_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            RetryExecutor(**kwargs)

    @pytest.mark.asyncio
    async def test_zero_retries_runs_once(self, sleeps):
        async def no_sleep(delay):
            sleeps.append(delay)

        executor = RetryExecutor(retries=0, sleep=no_sleep)
        operation = FlakyOperation([RemoteAPIError("down", status_code=503)])

        with pytest.raises(RemoteAPIError):
            await executor.run(operation, "get_repository")

        assert operation.calls == 1
        assert sleeps == []

    @pytest.mark.parametrize(
        "error,expected",
        [
            (RemoteAPIError("x", status_code=429), True),
            (RemoteAPIError("x", status_code=403), False),
            (ValidationError("x"), False),
            (httpx.ReadTimeout("slow"), True),
            (ValueError("x"), False),
        ],
    )
    def test_is_retryable(self, error, expected):
        assert is_retryable(error) is expected
