from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

import asyncpg


@dataclass(frozen=True)
class TicketTierRecord:
    id: Optional[int]
    name: str
    price: Decimal
    quantity_total: int
    sales_start_at: Optional[datetime]
    sales_end_at: Optional[datetime]
    max_per_user: Optional[int]
    description: Optional[str] = None
    currency: str = "KES"


@dataclass(frozen=True)
class EventRecord:
    id: Optional[int]
    organizer_id: int
    title: str
    description: str
    category_id: Optional[str]
    thumbnail_url: Optional[str]
    is_online: bool
    is_private: bool
    location_name: Optional[str]
    start_datetime: datetime
    end_datetime: datetime
    capacity: Optional[int]
    tags: tuple[str, ...] = ()
    ticket_tiers: tuple[TicketTierRecord, ...] = ()


class EventRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def get(self, event_id: int) -> Optional[EventRecord]:
        query = """
        SELECT id, organizer_id, title, description, category_id, thumbnail_url, is_online, is_private,
               location_name, start_datetime, end_datetime, capacity
        FROM events
        WHERE id = $1
        """
        record = await self._pool.fetchrow(query, event_id)
        if record is None:
            return None
        tier_rows = await self._pool.fetch(
            """
            SELECT id, name, price, currency, quantity_total, description, sales_start_at, sales_end_at, max_per_user
            FROM ticket_tiers
            WHERE event_id = $1
            ORDER BY position, id
            """,
            event_id,
        )
        tag_rows = await self._pool.fetch(
            """
            SELECT tag
            FROM event_tags
            WHERE event_id = $1
            ORDER BY position
            """,
            event_id,
        )
        return EventRecord(
            id=record["id"],
            organizer_id=record["organizer_id"],
            title=record["title"],
            description=record["description"],
            category_id=record["category_id"],
            thumbnail_url=record["thumbnail_url"],
            is_online=record["is_online"],
            is_private=record["is_private"],
            location_name=record["location_name"],
            start_datetime=record["start_datetime"],
            end_datetime=record["end_datetime"],
            capacity=record["capacity"],
            tags=tuple(row["tag"] for row in tag_rows),
            ticket_tiers=tuple(self._to_tier(row) for row in tier_rows),
        )

    async def create(self, event: EventRecord) -> int:
        query = """
        INSERT INTO events (
            organizer_id, title, description, category_id, thumbnail_url, is_online, is_private,
            location_name, start_datetime, end_datetime, capacity
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
        RETURNING id
        """
        async with self._pool.acquire() as connection:
            async with connection.transaction():
                event_id = await connection.fetchval(
                    query,
                    event.organizer_id,
                    event.title,
                    event.description,
                    event.category_id,
                    event.thumbnail_url,
                    event.is_online,
                    event.is_private,
                    event.location_name,
                    event.start_datetime,
                    event.end_datetime,
                    event.capacity,
                )
                await self._replace_tags(connection, event_id, event.tags)
                for position, tier in enumerate(event.ticket_tiers):
                    await self._insert_tier(connection, event_id, tier, position)
        return event_id

    async def update(self, event_id: int, event: EventRecord, keep_tier_ids: Sequence[int]) -> bool:
        query = """
        UPDATE events
        SET title = $3,
            description = $4,
            category_id = $5,
            thumbnail_url = $6,
            is_online = $7,
            is_private = $8,
            location_name = $9,
            start_datetime = $10,
            end_datetime = $11,
            capacity = $12,
            updated_at = NOW()
        WHERE id = $1 AND organizer_id = $2
        """
        async with self._pool.acquire() as connection:
            async with connection.transaction():
                result = await connection.execute(
                    query,
                    event_id,
                    event.organizer_id,
                    event.title,
                    event.description,
                    event.category_id,
                    event.thumbnail_url,
                    event.is_online,
                    event.is_private,
                    event.location_name,
                    event.start_datetime,
                    event.end_datetime,
                    event.capacity,
                )
                if result.split()[-1] == "0":
                    return False
                await connection.execute(
                    """
                    DELETE FROM ticket_tiers
                    WHERE event_id = $1 AND NOT (id = ANY($2::int[]))
                    """,
                    event_id,
                    list(keep_tier_ids),
                )
                for position, tier in enumerate(event.ticket_tiers):
                    if tier.id is None:
                        await self._insert_tier(connection, event_id, tier, position)
                    else:
                        await self._update_tier(connection, event_id, tier, position)
                await self._replace_tags(connection, event_id, event.tags)
        return True

    async def _insert_tier(self, connection: asyncpg.Connection, event_id: int, tier: TicketTierRecord, position: int) -> None:
        query = """
        INSERT INTO ticket_tiers (
            event_id, name, price, currency, quantity_total, description,
            sales_start_at, sales_end_at, max_per_user, position
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
        """
        await connection.execute(
            query,
            event_id,
            tier.name,
            tier.price,
            tier.currency,
            tier.quantity_total,
            tier.description,
            tier.sales_start_at,
            tier.sales_end_at,
            tier.max_per_user,
            position,
        )

    async def _update_tier(self, connection: asyncpg.Connection, event_id: int, tier: TicketTierRecord, position: int) -> None:
        query = """
        UPDATE ticket_tiers
        SET name = $3,
            price = $4,
            currency = $5,
            quantity_total = $6,
            description = $7,
            sales_start_at = $8,
            sales_end_at = $9,
            max_per_user = $10,
            position = $11
        WHERE id = $1 AND event_id = $2
        """
        await connection.execute(
            query,
            tier.id,
            event_id,
            tier.name,
            tier.price,
            tier.currency,
            tier.quantity_total,
            tier.description,
            tier.sales_start_at,
            tier.sales_end_at,
            tier.max_per_user,
            position,
        )

    async def _replace_tags(self, connection: asyncpg.Connection, event_id: int, tags: Sequence[str]) -> None:
        await connection.execute("DELETE FROM event_tags WHERE event_id = $1", event_id)
        for position, tag in enumerate(tags):
            await connection.execute(
                "INSERT INTO event_tags (event_id, tag, position) VALUES ($1, $2, $3)",
                event_id,
                tag,
                position,
            )

    def _to_tier(self, record: asyncpg.Record) -> TicketTierRecord:
        return TicketTierRecord(
            id=record["id"],
            name=record["name"],
            price=record["price"],
            currency=record["currency"],
            quantity_total=record["quantity_total"],
            description=record["description"],
            sales_start_at=record["sales_start_at"],
            sales_end_at=record["sales_end_at"],
            max_per_user=record["max_per_user"],
        )
