from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from eventdesk.utils.i18n import t
from eventdesk.wizard.models import EventDraft, TicketTier

SCHEDULE_FIELDS = ("start_date", "start_time", "end_date", "end_time")
TICKETS_PREFIX = "tickets."


def ticket_error_key(index: int, field: str) -> str:
    return f"{TICKETS_PREFIX}{index}.{field}"


def validate_draft(draft: EventDraft) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not _text(draft.title).strip():
        errors["title"] = t("validation.title_required")
    if not _text(draft.description).strip():
        errors["description"] = t("validation.description_required")

    _validate_schedule(draft, errors)

    if not draft.is_online and not _text(draft.location).strip():
        errors["location"] = t("validation.location_required")

    if draft.is_paid:
        for index, tier in enumerate(draft.tickets):
            _validate_tier(index, tier, errors)

    return errors


def _validate_schedule(draft: EventDraft, errors: dict[str, str]) -> None:
    missing = False
    for name in SCHEDULE_FIELDS:
        if not _text(getattr(draft, name)).strip():
            errors[name] = t(f"validation.{name}_required")
            missing = True
    if missing:
        return

    start = parse_schedule_datetime(draft.start_date, draft.start_time)
    end = parse_schedule_datetime(draft.end_date, draft.end_time)
    if start is None:
        errors["start_date"] = t("validation.datetime_invalid")
    if end is None:
        errors["end_date"] = t("validation.datetime_invalid")
    elif start is not None and end < start:
        errors["end_date"] = t("validation.end_before_start")


def _validate_tier(index: int, tier: TicketTier, errors: dict[str, str]) -> None:
    if not _text(tier.name).strip():
        errors[ticket_error_key(index, "name")] = t("validation.ticket.name_required")

    price = parse_price(tier.price)
    if price is None or price < 0:
        errors[ticket_error_key(index, "price")] = t("validation.ticket.price_invalid")

    quantity = parse_int(tier.quantity)
    if quantity is None or quantity <= 0:
        errors[ticket_error_key(index, "quantity")] = t("validation.ticket.quantity_invalid")

    if _text(tier.sale_start).strip() and _text(tier.sale_end).strip():
        sale_start = parse_moment(tier.sale_start)
        sale_end = parse_moment(tier.sale_end)
        if sale_start is not None and sale_end is not None and sale_end <= sale_start:
            errors[ticket_error_key(index, "sale_end")] = t("validation.ticket.sale_window")

    if _text(tier.max_per_order).strip():
        max_per_order = parse_int(tier.max_per_order)
        key = ticket_error_key(index, "max_per_order")
        if max_per_order is None or max_per_order <= 0:
            errors[key] = t("validation.ticket.max_per_order_positive")
        if max_per_order is not None and quantity is not None and max_per_order > quantity:
            errors[key] = t("validation.ticket.max_per_order_exceeds")


def parse_schedule_datetime(day: Any, clock: Any) -> datetime | None:
    try:
        parsed_date = date.fromisoformat(_text(day).strip())
    except ValueError:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            parsed_time = datetime.strptime(_text(clock).strip(), fmt).time()
        except ValueError:
            continue
        return datetime.combine(parsed_date, parsed_time)
    return None


def parse_moment(raw: Any) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(_text(raw).strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_price(raw: Any) -> Decimal | None:
    try:
        value = Decimal(_text(raw).strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_int(raw: Any) -> int | None:
    try:
        return int(_text(raw).strip())
    except ValueError:
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
