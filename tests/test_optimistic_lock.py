"""
with_optimistic_retry tests
"""
import pytest

from food_api.core.errors import StoreUnavailable
from food_api.core.optimistic_lock import StaleDataError, with_optimistic_retry


@pytest.mark.asyncio
async def test_retries_until_write_succeeds():
    attempts = []

    @with_optimistic_retry(max_retries=3)
    async def write():
        attempts.append(1)
        if len(attempts) < 3:
            raise StaleDataError("orders", "u1")
        return "ok"

    assert await write() == "ok"
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_exhausted_retries_become_store_unavailable():
    attempts = []

    @with_optimistic_retry(max_retries=2)
    async def write():
        attempts.append(1)
        raise StaleDataError("orders", "u1")

    with pytest.raises(StoreUnavailable, match="Orders changed concurrently") as excinfo:
        await write()
    assert len(attempts) == 2
    assert isinstance(excinfo.value.__cause__, StaleDataError)
    assert excinfo.value.__cause__.key == "u1"


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    attempts = []

    @with_optimistic_retry(max_retries=5)
    async def write():
        attempts.append(1)
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        await write()
    assert len(attempts) == 1
