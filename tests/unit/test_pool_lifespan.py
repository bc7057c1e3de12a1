"""Unit tests for PoolLifespanMiddleware."""

from unittest.mock import AsyncMock

import pytest

from apex.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware


@pytest.mark.asyncio
async def test_startup_waits_for_pool_with_timeout() -> None:
    pool = AsyncMock(min_size=2, max_size=10)
    middleware = PoolLifespanMiddleware(pool, open_timeout=5.0)
    await middleware.process_startup({}, {})
    pool.open.assert_awaited_once_with(wait=True, timeout=5.0)
    pool.close.assert_not_called()


@pytest.mark.asyncio
async def test_startup_failure_propagates() -> None:
    pool = AsyncMock(min_size=2, max_size=10)
    pool.open.side_effect = TimeoutError("pool initialization incomplete")
    with pytest.raises(TimeoutError):
        await PoolLifespanMiddleware(pool).process_startup({}, {})


@pytest.mark.asyncio
async def test_shutdown_closes_pool() -> None:
    pool = AsyncMock()
    await PoolLifespanMiddleware(pool).process_shutdown({}, {})
    pool.close.assert_awaited_once()
