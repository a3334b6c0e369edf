import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_BACKOFF = 2  # Exponential backoff base
RETRY_BASE_DELAY = 1.0  # seconds


async def bounded_gather(coros: Iterable[Awaitable[T]], limit: int) -> List[T]:
    """
    Run awaitables concurrently with at most `limit` in flight.

    Results are returned in input order. The first exception propagates.
    """
    semaphore = asyncio.Semaphore(limit)

    async def _run(coro: Awaitable[T]) -> T:
        async with semaphore:
            return await coro

    return list(await asyncio.gather(*(_run(c) for c in coros)))


async def retry_with_exponential_backoff(
    func: Callable[..., Awaitable[T]],
    *args,
    max_retries: int = 2,
    base_delay: Optional[float] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    **kwargs
) -> T:
    """
    Call `func`, retrying up to `max_retries` extra times on `retry_on` errors.

    Waits base_delay, base_delay*2, base_delay*4 ... between attempts.
    """
    if base_delay is None:
        base_delay = RETRY_BASE_DELAY
    last_exception: Optional[BaseException] = None
    attempts = max_retries + 1

    for attempt in range(attempts):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info(f"✅ Retry attempt {attempt + 1} succeeded after {attempt} failures")
            return result
        except retry_on as e:
            last_exception = e
            if attempt < attempts - 1:
                wait_time = base_delay * (RETRY_BACKOFF ** attempt)
                logger.warning(
                    f"⚠️ Attempt {attempt + 1}/{attempts} failed: {str(e)[:100]}. Retrying in {wait_time}s..."
                )
                await asyncio.sleep(wait_time)
            else:
                logger.error(f"❌ All {attempts} attempts failed. Last error: {e}")

    raise last_exception
