import logging
from typing import Sequence

import asyncpg

from .pool import get_pool
from .schema import STATEMENTS

logger = logging.getLogger(__name__)


async def run_schema_setup(statements: Sequence[str] = STATEMENTS) -> None:
    pool = get_pool()
    async with pool.acquire() as connection:
        applied = await _apply_statements(connection, statements)
    logger.info(f"Schema setup finished: applied={applied} total={len(statements)}")


async def _apply_statements(connection: asyncpg.Connection, statements: Sequence[str]) -> int:
    applied = 0
    for number, statement in enumerate(statements, 1):
        try:
            await connection.execute(statement)
        except asyncpg.PostgresError as e:
            # Statements are idempotent; a failure here leaves the existing object in place.
            logger.warning(f"Schema statement {number}/{len(statements)} failed: {_summary(statement)} error={e}")
            continue
        applied += 1
    return applied


def _summary(statement: str) -> str:
    return " ".join(statement.split())[:80]
