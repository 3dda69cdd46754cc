from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from eventdesk.wizard.errors import DraftLoadCorruption

CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Arts&Entertainment", "Arts & Entertainment"),
    ("Business&Professional", "Business & Professional"),
    ("Sports&Games", "Sports & Games"),
    ("Food&Drinks", "Food & Drinks"),
    ("Education&Training", "Education & Training"),
    ("Health&Wellness", "Health & Wellness"),
    ("Community&Social", "Community & Social"),
    ("Seasonal&Holiday", "Seasonal & Holiday"),
)
DEFAULT_CATEGORY = CATEGORIES[0][0]

TEXT_FIELDS = (
    "title",
    "description",
    "category",
    "location",
    "start_date",
    "start_time",
    "end_date",
    "end_time",
    "capacity_limit",
)
BOOLEAN_FIELDS = ("is_online", "is_private", "is_paid")
# Booleans change only through toggle, so a stored snapshot always keeps bool types.
SETTABLE_FIELDS = TEXT_FIELDS + ("cover_image",)

TIER_FIELDS = (
    "name",
    "price",
    "quantity",
    "description",
    "sale_start",
    "sale_end",
    "max_per_order",
)


@dataclass
class TicketTier:
    name: str = ""
    price: str = ""
    quantity: str = ""
    description: str = ""
    sale_start: str = ""
    sale_end: str = ""
    max_per_order: str = ""
    # Database id of a saved tier; only set for tiers loaded in edit mode.
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> TicketTier:
        if not isinstance(data, Mapping):
            raise DraftLoadCorruption("Ticket tier must be an object")
        tier = cls()
        for name in TIER_FIELDS:
            if name in data:
                setattr(tier, name, _coerce_text(name, data[name]))
        if data.get("id") is not None:
            tier.id = _coerce_text("id", data["id"])
        return tier


@dataclass
class EventDraft:
    title: str = ""
    description: str = ""
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    cover_image: str | None = None
    is_online: bool = False
    location: str = ""
    start_date: str = ""
    start_time: str = ""
    end_date: str = ""
    end_time: str = ""
    is_private: bool = False
    is_paid: bool = False
    capacity_limit: str = ""
    tickets: list[TicketTier] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def copy(self) -> EventDraft:
        return EventDraft.from_dict(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> EventDraft:
        if not isinstance(data, Mapping):
            raise DraftLoadCorruption("Draft snapshot must be an object")
        draft = cls()
        for name in TEXT_FIELDS:
            if name in data and data[name] is not None:
                setattr(draft, name, _coerce_text(name, data[name]))
        for name in BOOLEAN_FIELDS:
            if name in data and data[name] is not None:
                value = data[name]
                if not isinstance(value, bool):
                    raise DraftLoadCorruption(f"Field '{name}' must be a boolean")
                setattr(draft, name, value)
        if data.get("cover_image") is not None:
            draft.cover_image = _coerce_text("cover_image", data["cover_image"]) or None
        if data.get("tags") is not None:
            draft.tags = _load_tags(data["tags"])
        if data.get("tickets") is not None:
            tickets = data["tickets"]
            if not isinstance(tickets, list):
                raise DraftLoadCorruption("Field 'tickets' must be a list")
            draft.tickets = [TicketTier.from_dict(item) for item in tickets]
        return draft


def category_name(category_id: str) -> str:
    for key, name in CATEGORIES:
        if key == category_id:
            return name
    return category_id


def _coerce_text(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise DraftLoadCorruption(f"Field '{name}' must be text")


def _load_tags(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        raise DraftLoadCorruption("Field 'tags' must be a list")
    tags: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            raise DraftLoadCorruption("Tags must be text")
        if item not in tags:
            tags.append(item)
    return tags
