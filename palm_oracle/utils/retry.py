"""Bounded, sequential retry with a pluggable delay schedule."""

import logging
import time
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

log = logging.getLogger("palm_oracle.retry")


class RetryExhausted(Exception):
    """Raised by RetryPolicy.run when no attempt succeeded."""

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"gave up after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


def linear_delay(base_delay: float) -> Callable[[int], float]:
    """Delay schedule waiting base_delay * attempt after a failed attempt."""
    return lambda attempt: base_delay * attempt


def _always(error: BaseException) -> bool:
    return True


class RetryPolicy:
    """Run a callable up to max_attempts times, one attempt after another.

    Args:
        max_attempts: Total attempts including the first one (>= 1)
        delay: Maps the 1-based number of the failed attempt to seconds to wait
        retry_on: Predicate deciding whether an error is worth another attempt
        sleep: Blocking wait, replaceable in tests
    """

    def __init__(
        self,
        max_attempts: int = 2,
        delay: Optional[Callable[[int], float]] = None,
        retry_on: Optional[Callable[[BaseException], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
            raise ValueError(f"max_attempts must be a positive integer, got {max_attempts!r}")
        self.max_attempts = max_attempts
        self.delay = delay or linear_delay(0.5)
        self.retry_on = retry_on or _always
        self.sleep = sleep

    def run(self, fn: Callable[[], T], label: str = "call") -> T:
        last_error: Optional[BaseException] = None
        attempt = 0
        while attempt < self.max_attempts:
            attempt += 1
            try:
                return fn()
            except Exception as e:
                last_error = e
                log.warning("%s attempt %d/%d failed: %s", label, attempt, self.max_attempts, e)
                if attempt >= self.max_attempts or not self.retry_on(e):
                    break
                self.sleep(self.delay(attempt))

        raise RetryExhausted(attempt, last_error) from last_error
