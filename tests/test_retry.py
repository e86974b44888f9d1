import pytest

from app.core.retry import RetryExhausted, RetryPolicy


class Recorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


def _flaky(failures, result="ok", exc=ConnectionError):
    state = {"calls": 0}

    async def fn():
        state["calls"] += 1
        if state["calls"] <= failures:
            raise exc(f"fail {state['calls']}")
        return result

    return fn, state


def test_delay_doubles():
    policy = RetryPolicy(base_delay_s=1.0, multiplier=2.0)
    assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]


@pytest.mark.asyncio
async def test_returns_first_success():
    sleep = Recorder()
    fn, state = _flaky(0)
    assert await RetryPolicy(sleep=sleep).run(fn) == "ok"
    assert state["calls"] == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_retries_then_succeeds():
    sleep = Recorder()
    fn, state = _flaky(1)
    assert await RetryPolicy(sleep=sleep).run(fn) == "ok"
    assert state["calls"] == 2
    assert sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_exhaustion_wraps_last_error():
    sleep = Recorder()
    fn, state = _flaky(10)
    with pytest.raises(RetryExhausted) as exc_info:
        await RetryPolicy(max_attempts=3, sleep=sleep).run(fn)
    assert exc_info.value.attempts == 3
    assert str(exc_info.value.last_error) == "fail 3"
    assert state["calls"] == 3
    assert sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_non_retryable_error_propagates_immediately():
    sleep = Recorder()
    fn, state = _flaky(10, exc=ValueError)
    policy = RetryPolicy(sleep=sleep, is_retryable=lambda e: not isinstance(e, ValueError))
    with pytest.raises(ValueError):
        await policy.run(fn)
    assert state["calls"] == 1
    assert sleep.delays == []


def test_zero_attempts_rejected():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


@pytest.mark.asyncio
async def test_single_attempt_gives_up_without_sleeping():
    sleep = Recorder()
    fn, state = _flaky(10)
    with pytest.raises(RetryExhausted) as exc_info:
        await RetryPolicy(max_attempts=1, sleep=sleep).run(fn)
    assert exc_info.value.attempts == 1
    assert state["calls"] == 1
    assert sleep.delays == []
