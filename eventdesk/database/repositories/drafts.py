from typing import Optional

import asyncpg


class DraftRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def get(self, slot_key: str) -> Optional[str]:
        query = """
        SELECT payload
        FROM event_drafts
        WHERE slot_key = $1
        """
        return await self._pool.fetchval(query, slot_key)

    async def save(self, slot_key: str, payload: str) -> None:
        query = """
        INSERT INTO event_drafts (slot_key, payload, updated_at)
        VALUES ($1, $2, NOW())
        ON CONFLICT (slot_key) DO UPDATE
            SET payload = EXCLUDED.payload,
                updated_at = EXCLUDED.updated_at
        """
        await self._pool.execute(query, slot_key, payload)

    async def delete(self, slot_key: str) -> None:
        query = """
        DELETE FROM event_drafts
        WHERE slot_key = $1
        """
        await self._pool.execute(query, slot_key)
