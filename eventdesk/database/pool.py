import asyncio
import logging
from typing import Optional

import asyncpg

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.Pool] = None
_lock = asyncio.Lock()


async def init_pool(dsn: str, *, min_size: int = 2, max_size: int = 10) -> asyncpg.Pool:
    global _pool
    async with _lock:
        if _pool is None:
            # Drafts are written on a timer, so keep a small idle reserve.
            _pool = await asyncpg.create_pool(
                dsn,
                min_size=min_size,
                max_size=max_size,
                command_timeout=10,
                server_settings={"application_name": "eventdesk"},
            )
            logger.info(f"Database pool ready: min_size={min_size} max_size={max_size}")
    return _pool


def get_pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool is not initialized; call init_pool first")
    return _pool


async def close_pool() -> None:
    global _pool
    async with _lock:
        if _pool is None:
            return
        await _pool.close()
        _pool = None
        logger.info("Database pool closed")
