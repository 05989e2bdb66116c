"""Retry policy for the Circonus API transport.

Failed requests that may succeed on a second attempt (rate limiting, server
errors, timeouts, dropped connections) are retried with exponential backoff.
Everything else fails on the first attempt.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import RateLimitError, TransportError


logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry logic."""
    max_retries: int = 4
    base_delay: float = 1.0
    max_delay: float = 15.0
    exponential_base: float = 2.0
    jitter: bool = True

    def __post_init__(self):
        """Validate retry configuration."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")
        if self.exponential_base < 1:
            raise ValueError("exponential_base must be >= 1")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


class RetryableOperation:
    """Wrapper for operations that should be retried on failure."""

    def __init__(self, config: RetryConfig, sleep: Callable[[float], None] = time.sleep):
        """Initialize retryable operation.

        Args:
            config: Retry configuration
            sleep: Function used to wait between attempts
        """
        self.config = config
        self._sleep = sleep

    def execute(self, func: Callable, *args, **kwargs) -> Any:
        """Execute function with retry logic.

        Args:
            func: Function to execute
            *args: Positional arguments for function
            **kwargs: Keyword arguments for function

        Returns:
            Function result

        Raises:
            TransportError: Last error if all retries fail, or the first non-retryable one
        """
        last_exception = None

        for attempt in range(self.config.max_attempts):
            try:
                return func(*args, **kwargs)

            except TransportError as e:
                last_exception = e

                if not e.is_retryable:
                    logger.debug(
                        f"{type(e).__name__} is not retryable, failing immediately"
                    )
                    raise

                # Don't retry on last attempt
                if attempt == self.config.max_attempts - 1:
                    break

                delay = self._calculate_delay(attempt, e)

                logger.warning(
                    f"Request failed (attempt {attempt + 1}/{self.config.max_attempts}), "
                    f"retrying in {delay:.2f}s: {e}",
                    extra={
                        "attempt": attempt + 1,
                        "max_attempts": self.config.max_attempts,
                        "delay": delay,
                        "exception_type": type(e).__name__
                    }
                )

                self._sleep(delay)

        logger.error(
            f"Request failed after {self.config.max_attempts} attempts",
            extra={
                "max_attempts": self.config.max_attempts,
                "final_exception": str(last_exception)
            }
        )

        raise last_exception

    def _calculate_delay(self, attempt: int, error: TransportError) -> float:
        """Calculate delay for retry attempt.

        Args:
            attempt: Current attempt number (0-based)
            error: The error that triggered the retry

        Returns:
            Delay in seconds
        """
        # Honour the server's Retry-After, within the configured window
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return min(max(error.retry_after, self.config.base_delay), self.config.max_delay)

        delay = self.config.base_delay * (self.config.exponential_base ** attempt)
        delay = min(delay, self.config.max_delay)

        if self.config.jitter:
            jitter_range = delay * 0.1  # 10% jitter
            delay += random.uniform(-jitter_range, jitter_range)

        return max(0, delay)
