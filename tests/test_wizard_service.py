"""Tests for per-organizer session management."""

import asyncio

import pytest

from eventdesk.services.draft_service import MemoryDraftService
from eventdesk.services.event_service import EventNotFoundError
from eventdesk.services.wizard_service import WizardService

ORGANIZER_ID = 42


class FakeEventService:
    def __init__(self) -> None:
        self.created = []
        self.updated = []
        self.events = {7: {"title": "Saved event", "location": "Hall A"}}

    async def create_event(self, organizer_id, draft, cover=None):
        self.created.append((organizer_id, draft))
        return 1

    async def update_event(self, organizer_id, event_id, draft, cover=None):
        self.updated.append((organizer_id, event_id, draft))

    async def load_form_data(self, organizer_id, event_id):
        if event_id not in self.events:
            raise EventNotFoundError(event_id)
        return dict(self.events[event_id])


@pytest.fixture
def events() -> FakeEventService:
    return FakeEventService()


@pytest.fixture
def drafts() -> MemoryDraftService:
    return MemoryDraftService()


@pytest.fixture
def wizard(events, drafts, scheduler):
    service = WizardService(events, drafts, scheduler, quiet_interval=0.05)
    yield service
    service.close_all()


def test_slot_keys_are_scoped_per_organizer(drafts):
    assert drafts.slot_key(ORGANIZER_ID) == "event_draft:42"
    assert drafts.slot_for(1) is not drafts.slot_for(2)
    assert drafts.slot_for(1) is drafts.slot_for(1)


async def test_open_create_restores_organizer_draft(wizard, drafts):
    await drafts.slot_for(ORGANIZER_ID).set({"title": "Half done"})

    session = await wizard.open_create(ORGANIZER_ID)

    assert session.draft.title == "Half done"
    assert session.draft_restored is True
    assert wizard.get(ORGANIZER_ID) is session


async def test_reopening_closes_the_previous_session(wizard):
    first = await wizard.open_create(ORGANIZER_ID)
    second = await wizard.open_create(ORGANIZER_ID)

    assert first.closed is True
    assert wizard.get(ORGANIZER_ID) is second


async def test_create_submit_goes_to_event_service(wizard, events, valid_draft):
    session = await wizard.open_create(ORGANIZER_ID)
    for name in ("title", "description", "location", "start_date", "start_time", "end_date", "end_time"):
        session.store.set_field(name, getattr(valid_draft, name))

    result = await session.submit()

    assert result.submitted is True
    assert events.created[0][0] == ORGANIZER_ID
    assert events.created[0][1].title == "Tech Summit"


async def test_open_edit_seeds_from_saved_event(wizard, drafts):
    await drafts.slot_for(ORGANIZER_ID).set({"title": "Unrelated draft"})

    session = await wizard.open_edit(ORGANIZER_ID, 7)
    session.store.set_field("title", "Renamed")
    await asyncio.sleep(0.3)

    assert session.edit_mode is True
    assert session.draft.location == "Hall A"
    assert (await drafts.slot_for(ORGANIZER_ID).get())["title"] == "Unrelated draft"


async def test_open_edit_of_missing_event_keeps_current_session(wizard):
    current = await wizard.open_create(ORGANIZER_ID)

    with pytest.raises(EventNotFoundError):
        await wizard.open_edit(ORGANIZER_ID, 404)

    assert wizard.get(ORGANIZER_ID) is current
    assert current.closed is False


async def test_close_all_closes_every_session(wizard):
    first = await wizard.open_create(1)
    second = await wizard.open_create(2)

    wizard.close_all()

    assert first.closed and second.closed
    assert wizard.get(1) is None
