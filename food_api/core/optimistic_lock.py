"""
Food API — Optimistic locking for whole-document rewrites

Order documents are rewritten as a whole. A write carries the update time
of the snapshot it was computed from; if another request wrote the
document in between, the store raises StaleDataError and the whole
read-modify-write is replayed. A conflict that outlasts the retries is
reported to the caller as StoreUnavailable.
"""
import asyncio
import functools
import logging
import random

from food_api.core.config import get_settings
from food_api.core.errors import StoreUnavailable

settings = get_settings()
logger = logging.getLogger(__name__)


class StaleDataError(Exception):
    """A compare-and-set write lost: the document changed (or was created)
    after our read."""

    def __init__(self, collection: str, key: str):
        self.collection = collection
        self.key = key
        super().__init__(f"{collection}/{key} changed concurrently.")


def _backoff(attempt: int) -> float:
    base = settings.OPT_LOCK_BASE_DELAY_MS / 1000.0
    cap = settings.OPT_LOCK_MAX_DELAY_MS / 1000.0
    return min(base * (2 ** attempt), cap) + random.uniform(0, settings.OPT_LOCK_JITTER_MS / 1000.0)


def with_optimistic_retry(max_retries: int | None = None):
    """
    Replay a read-modify-write coroutine while its write hits StaleDataError.

    Usage:
        @with_optimistic_retry()
        async def append_order(store, ...):
            ...
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            attempts = max_retries or settings.OPT_LOCK_MAX_RETRIES
            for attempt in range(1, attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except StaleDataError as exc:
                    if attempt == attempts:
                        logger.error(
                            "%s/%s still conflicting after %d attempts in %s",
                            exc.collection, exc.key, attempts, func.__name__,
                        )
                        raise StoreUnavailable(
                            f"{exc.collection.capitalize()} changed concurrently, please retry."
                        ) from exc
                    delay = _backoff(attempt)
                    logger.warning(
                        "%s/%s changed under %s (attempt %d/%d), retrying in %.3fs",
                        exc.collection, exc.key, func.__name__, attempt, attempts, delay,
                    )
                    await asyncio.sleep(delay)
        return wrapper
    return decorator
