"""
Tests for the retry policy.
"""

import pytest

from circonus_api.exceptions import RateLimitError, TransportError
from circonus_api.resilience import RetryConfig, RetryableOperation


class Flaky:
    """Fails with the given errors, then returns 'ok'."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


class TestRetryConfig:

    def test_defaults(self):
        config = RetryConfig()
        assert config.max_retries == 4
        assert config.max_attempts == 5

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            RetryConfig(base_delay=10.0, max_delay=1.0)

    def test_negative_retries(self):
        with pytest.raises(ValueError):
            RetryConfig(max_retries=-1)


class TestRetryableOperation:

    def test_exponential_backoff_capped(self):
        sleeps = []
        op = RetryableOperation(
            RetryConfig(max_retries=4, base_delay=1.0, max_delay=3.0, jitter=False),
            sleep=sleeps.append
        )
        func = Flaky(*[TransportError("x", status_code=502)] * 4)

        assert op.execute(func) == "ok"
        assert sleeps == [1.0, 2.0, 3.0, 3.0]

    def test_non_retryable_raises_immediately(self):
        sleeps = []
        op = RetryableOperation(RetryConfig(jitter=False), sleep=sleeps.append)
        func = Flaky(TransportError("bad request", status_code=400))

        with pytest.raises(TransportError):
            op.execute(func)
        assert func.calls == 1
        assert sleeps == []

    def test_retry_after_honoured(self):
        sleeps = []
        op = RetryableOperation(
            RetryConfig(max_retries=1, base_delay=1.0, max_delay=15.0, jitter=False),
            sleep=sleeps.append
        )

        op.execute(Flaky(RateLimitError("slow down", retry_after=7)))
        assert sleeps == [7]

    def test_retry_after_capped(self):
        sleeps = []
        op = RetryableOperation(
            RetryConfig(max_retries=1, base_delay=1.0, max_delay=15.0, jitter=False),
            sleep=sleeps.append
        )

        op.execute(Flaky(RateLimitError("slow down", retry_after=600)))
        assert sleeps == [15.0]

    def test_last_error_raised(self):
        op = RetryableOperation(RetryConfig(max_retries=2, base_delay=0.0, max_delay=0.0), sleep=lambda _: None)
        last = TransportError("third", status_code=500)
        func = Flaky(TransportError("first", status_code=500), TransportError("second", status_code=500), last)

        with pytest.raises(TransportError) as exc_info:
            op.execute(func)
        assert exc_info.value is last
        assert func.calls == 3

    def test_no_retries(self):
        op = RetryableOperation(RetryConfig(max_retries=0), sleep=lambda _: None)
        func = Flaky(TransportError("down", status_code=503))

        with pytest.raises(TransportError):
            op.execute(func)
        assert func.calls == 1
