import asyncio

import pytest

from quizsense.concurrency import bounded_gather, retry_with_exponential_backoff


def test_bounded_gather_limits_and_keeps_order():
    state = {"running": 0, "peak": 0}
    
    async def work(i):
        state["running"] += 1
        state["peak"] = max(state["peak"], state["running"])
        await asyncio.sleep(0.005 * (5 - i % 5))
        state["running"] -= 1
        return i
    
    results = asyncio.run(bounded_gather((work(i) for i in range(10)), limit=2))
    
    assert results == list(range(10))
    assert state["peak"] == 2


def test_retry_gives_up_after_max_retries():
    calls = []
    
    async def always_fails():
        calls.append(1)
        raise ConnectionError("down")
    
    with pytest.raises(ConnectionError):
        asyncio.run(retry_with_exponential_backoff(always_fails, max_retries=2, base_delay=0))
    
    assert len(calls) == 3


def test_retry_does_not_catch_unlisted_errors():
    calls = []
    
    async def bad_input():
        calls.append(1)
        raise ValueError("bad")
    
    with pytest.raises(ValueError):
        asyncio.run(retry_with_exponential_backoff(
            bad_input, max_retries=3, base_delay=0, retry_on=(ConnectionError,)
        ))
    
    assert len(calls) == 1
