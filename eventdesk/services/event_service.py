import logging
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

import asyncpg

from eventdesk.database.pool import get_pool
from eventdesk.database.repositories.events import EventRecord, EventRepository, TicketTierRecord
from eventdesk.utils.i18n import t
from eventdesk.wizard.errors import SubmitFailure
from eventdesk.wizard.images import CoverFile
from eventdesk.wizard.models import EventDraft, TicketTier
from eventdesk.wizard.validation import parse_int, parse_moment, parse_price, parse_schedule_datetime

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_USER = 5
DEFAULT_CURRENCY = "KES"


class EventNotFoundError(Exception):
    def __init__(self, event_id: int) -> None:
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class EventService:
    def __init__(self, repository: EventRepository) -> None:
        self._repository = repository

    async def create_event(self, organizer_id: int, draft: EventDraft, cover: Optional[CoverFile] = None) -> int:
        event = build_event_record(organizer_id, draft, cover)
        try:
            event_id = await self._repository.create(event)
        except asyncpg.PostgresError as e:
            logger.error(f"Event insert failed: organizer_id={organizer_id} error={e}")
            raise SubmitFailure(t("submit.database_error")) from e
        logger.info(f"Event created: event_id={event_id} organizer_id={organizer_id} tiers={len(event.ticket_tiers)}")
        return event_id

    async def update_event(
        self,
        organizer_id: int,
        event_id: int,
        draft: EventDraft,
        cover: Optional[CoverFile] = None,
    ) -> None:
        event = build_event_record(organizer_id, draft, cover)
        keep_tier_ids = [tier.id for tier in event.ticket_tiers if tier.id is not None]
        try:
            updated = await self._repository.update(event_id, event, keep_tier_ids)
        except asyncpg.PostgresError as e:
            logger.error(f"Event update failed: event_id={event_id} error={e}")
            raise SubmitFailure(t("submit.database_error")) from e
        if not updated:
            raise SubmitFailure(t("submit.event_missing"))
        logger.info(f"Event updated: event_id={event_id} organizer_id={organizer_id}")

    async def load_form_data(self, organizer_id: int, event_id: int) -> dict[str, Any]:
        record = await self._repository.get(event_id)
        if record is None or record.organizer_id != organizer_id:
            raise EventNotFoundError(event_id)
        return form_data_from_record(record)


def build_event_record(organizer_id: int, draft: EventDraft, cover: Optional[CoverFile] = None) -> EventRecord:
    start = parse_schedule_datetime(draft.start_date, draft.start_time)
    end = parse_schedule_datetime(draft.end_date, draft.end_time)
    if start is None or end is None:
        raise SubmitFailure(t("validation.datetime_invalid"))

    tiers: tuple[TicketTierRecord, ...] = ()
    if draft.is_paid:
        tiers = tuple(_build_tier(tier, start, end) for tier in draft.tickets)

    thumbnail_url = cover.file_id if cover and cover.file_id else draft.cover_image
    return EventRecord(
        id=None,
        organizer_id=organizer_id,
        title=str(draft.title).strip(),
        description=str(draft.description).strip(),
        category_id=draft.category or None,
        thumbnail_url=thumbnail_url or None,
        is_online=draft.is_online,
        is_private=draft.is_private,
        location_name=str(draft.location).strip() or None,
        start_datetime=start,
        end_datetime=end,
        capacity=_parse_capacity(draft.capacity_limit),
        tags=tuple(draft.tags),
        ticket_tiers=tiers,
    )


def form_data_from_record(record: EventRecord) -> dict[str, Any]:
    return {
        "title": record.title,
        "description": record.description,
        "category": record.category_id or "",
        "tags": list(record.tags),
        "cover_image": record.thumbnail_url,
        "is_online": record.is_online,
        "location": record.location_name or "",
        "start_date": record.start_datetime.strftime("%Y-%m-%d"),
        "start_time": record.start_datetime.strftime("%H:%M"),
        "end_date": record.end_datetime.strftime("%Y-%m-%d"),
        "end_time": record.end_datetime.strftime("%H:%M"),
        "is_private": record.is_private,
        "is_paid": bool(record.ticket_tiers),
        "capacity_limit": str(record.capacity) if record.capacity else "",
        "tickets": [
            {
                "id": str(tier.id) if tier.id is not None else None,
                "name": tier.name,
                "price": _format_price(tier.price),
                "quantity": str(tier.quantity_total),
                "description": tier.description or "",
                "sale_start": _format_moment(tier.sales_start_at),
                "sale_end": _format_moment(tier.sales_end_at),
                "max_per_order": str(tier.max_per_user) if tier.max_per_user else "",
            }
            for tier in record.ticket_tiers
        ],
    }


def _build_tier(tier: TicketTier, event_start, event_end) -> TicketTierRecord:
    price = parse_price(tier.price)
    quantity = parse_int(tier.quantity)
    if price is None or quantity is None:
        raise SubmitFailure(t("submit.ticket_invalid", name=tier.name))

    sales_start_at = event_start
    if str(tier.sale_start).strip():
        sales_start_at = parse_moment(tier.sale_start)
    sales_end_at = event_end
    if str(tier.sale_end).strip():
        sales_end_at = parse_moment(tier.sale_end)
    if sales_start_at is None or sales_end_at is None:
        raise SubmitFailure(t("submit.sale_window_invalid", name=tier.name))

    max_per_user = DEFAULT_MAX_PER_USER
    if str(tier.max_per_order).strip():
        max_per_user = parse_int(tier.max_per_order) or DEFAULT_MAX_PER_USER

    return TicketTierRecord(
        id=_tier_id(tier),
        name=str(tier.name).strip(),
        price=price,
        currency=DEFAULT_CURRENCY,
        quantity_total=quantity,
        description=str(tier.description).strip() or None,
        sales_start_at=sales_start_at,
        sales_end_at=sales_end_at,
        max_per_user=max_per_user,
    )


def _parse_capacity(raw: str) -> Optional[int]:
    if not str(raw).strip():
        return None
    capacity = parse_int(raw)
    if capacity is None or capacity <= 0:
        raise SubmitFailure(t("submit.capacity_invalid"))
    return capacity


def _tier_id(tier: TicketTier) -> Optional[int]:
    if tier.id and tier.id.isdigit():
        return int(tier.id)
    return None


def _format_moment(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.time() == time.min:
        return value.strftime("%Y-%m-%d")
    return value.strftime("%Y-%m-%dT%H:%M")


def _format_price(value: Decimal) -> str:
    decimal_value = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    price_str = format(decimal_value, "f")
    if "." in price_str:
        price_str = price_str.rstrip("0").rstrip(".")
    return price_str or "0"


def build_event_service() -> EventService:
    pool = get_pool()
    repository = EventRepository(pool)
    return EventService(repository)
