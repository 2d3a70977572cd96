"""Tests for the retry policy."""

import pytest

from palm_oracle.utils.retry import RetryExhausted, RetryPolicy, linear_delay


class Flaky:
    def __init__(self, failures, result="ok"):
        self.failures = failures
        self.result = result
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"boom {self.calls}")
        return self.result


def test_first_success_returns_immediately(waits):
    fn = Flaky(failures=0)
    assert RetryPolicy(max_attempts=3, sleep=waits.append).run(fn) == "ok"
    assert fn.calls == 1
    assert waits == []


def test_linear_backoff_between_attempts(waits):
    fn = Flaky(failures=3)
    policy = RetryPolicy(max_attempts=4, delay=linear_delay(0.5), sleep=waits.append)
    assert policy.run(fn) == "ok"
    assert fn.calls == 4
    assert waits == [0.5, 1.0, 1.5]


def test_exhausted_carries_last_error(waits):
    fn = Flaky(failures=5)
    policy = RetryPolicy(max_attempts=2, sleep=waits.append)
    with pytest.raises(RetryExhausted) as info:
        policy.run(fn)
    assert fn.calls == 2
    assert info.value.attempts == 2
    assert str(info.value.last_error) == "boom 2"
    assert isinstance(info.value.__cause__, ConnectionError)
    # no wait after the final attempt
    assert len(waits) == 1


def test_non_retryable_error_stops_early(waits):
    fn = Flaky(failures=5)
    policy = RetryPolicy(max_attempts=5, retry_on=lambda e: False, sleep=waits.append)
    with pytest.raises(RetryExhausted) as info:
        policy.run(fn)
    assert fn.calls == 1
    assert info.value.attempts == 1
    assert waits == []


def test_each_failed_attempt_is_logged(caplog, waits):
    fn = Flaky(failures=2)
    with caplog.at_level("WARNING", logger="palm_oracle.retry"):
        with pytest.raises(RetryExhausted):
            RetryPolicy(max_attempts=2, sleep=waits.append).run(fn, label="probe")
    messages = [r.getMessage() for r in caplog.records]
    assert any("probe attempt 1/2 failed" in m for m in messages)
    assert any("probe attempt 2/2 failed" in m for m in messages)


@pytest.mark.parametrize("bad", [0, -1, 1.5, True, "2"])
def test_max_attempts_must_be_positive_int(bad):
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=bad)
