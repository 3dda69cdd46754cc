"""Pytest configuration and shared fixtures."""

from datetime import timezone

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from eventdesk.wizard.models import EventDraft, TicketTier


@pytest.fixture
def valid_draft() -> EventDraft:
    return EventDraft(
        title="Tech Summit",
        description="A day of talks and workshops.",
        tags=["tech", "nairobi"],
        location="KICC, Nairobi",
        start_date="2025-10-12",
        start_time="09:00",
        end_date="2025-10-12",
        end_time="17:00",
    )


@pytest.fixture
def paid_draft(valid_draft: EventDraft) -> EventDraft:
    valid_draft.is_paid = True
    valid_draft.tickets = [
        TicketTier(name="Regular", price="1500", quantity="500"),
        TicketTier(name="VIP", price="5000", quantity="50", max_per_order="4"),
    ]
    return valid_draft


@pytest.fixture
async def scheduler():
    scheduler = AsyncIOScheduler(timezone=timezone.utc)
    scheduler.start()
    yield scheduler
    scheduler.shutdown(wait=False)
