import asyncio

import pytest

from stacks_assistant.core.intent import CircuitBreaker, CircuitState


@pytest.fixture
def breaker(clock):
    return CircuitBreaker(max_failures=3, cooldown_seconds=300, clock=clock)


@pytest.mark.asyncio
async def test_starts_closed(breaker):
    assert breaker.state == CircuitState.CLOSED
    assert await breaker.allow_request() is True
    assert breaker.snapshot()["seconds_until_retry"] == 0.0


@pytest.mark.asyncio
async def test_opens_at_threshold(breaker):
    assert await breaker.record_failure() == CircuitState.CLOSED
    assert await breaker.record_failure() == CircuitState.CLOSED
    assert await breaker.record_failure() == CircuitState.OPEN

    assert await breaker.allow_request() is False
    assert breaker.consecutive_failures == 3


@pytest.mark.asyncio
async def test_success_resets_counter(breaker):
    await breaker.record_failure()
    await breaker.record_failure()
    await breaker.record_success()
    await breaker.record_failure()

    assert breaker.consecutive_failures == 1
    assert breaker.state == CircuitState.CLOSED


@pytest.mark.asyncio
async def test_cooldown_clears_failures(breaker, clock):
    for _ in range(3):
        await breaker.record_failure()

    clock.advance(299)
    assert await breaker.allow_request() is False
    assert breaker.snapshot()["seconds_until_retry"] == pytest.approx(1)

    clock.advance(1)
    assert await breaker.allow_request() is True
    assert breaker.consecutive_failures == 0


@pytest.mark.asyncio
async def test_stale_failures_do_not_accumulate(breaker, clock):
    await breaker.record_failure()
    await breaker.record_failure()
    clock.advance(301)

    assert await breaker.allow_request() is True
    assert await breaker.record_failure() == CircuitState.CLOSED
    assert breaker.consecutive_failures == 1


def test_snapshot_and_reset(breaker):
    snapshot = breaker.snapshot()
    assert snapshot == {
        "state": "closed",
        "consecutive_failures": 0,
        "max_failures": 3,
        "cooldown_seconds": 300,
        "seconds_until_retry": 0.0,
    }

    breaker.consecutive_failures = 3
    breaker.last_failure_at = 1_000.0
    assert breaker.state == CircuitState.OPEN

    breaker.reset()
    assert breaker.state == CircuitState.CLOSED
    assert breaker.last_failure_at is None


@pytest.mark.asyncio
async def test_concurrent_failures_are_all_counted(clock):
    breaker = CircuitBreaker(max_failures=5, cooldown_seconds=300, clock=clock)

    states = await asyncio.gather(*(breaker.record_failure() for _ in range(8)))

    assert breaker.consecutive_failures == 8
    assert states.count(CircuitState.CLOSED) == 4
    assert states[4:] == [CircuitState.OPEN] * 4
    assert await breaker.allow_request() is False


@pytest.mark.asyncio
async def test_concurrent_checks_after_cooldown(breaker, clock):
    for _ in range(3):
        await breaker.record_failure()
    clock.advance(300)

    allowed = await asyncio.gather(*(breaker.allow_request() for _ in range(5)))

    assert allowed == [True] * 5
    assert breaker.consecutive_failures == 0
