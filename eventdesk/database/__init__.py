from .migrations import run_schema_setup
from .pool import close_pool, get_pool, init_pool
from .repositories.drafts import DraftRepository
from .repositories.events import EventRecord, EventRepository, TicketTierRecord

__all__ = [
    "DraftRepository",
    "EventRecord",
    "EventRepository",
    "TicketTierRecord",
    "close_pool",
    "get_pool",
    "init_pool",
    "run_schema_setup",
]
