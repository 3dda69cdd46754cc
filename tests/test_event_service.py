"""Tests for mapping drafts to event records and back."""

from datetime import datetime
from decimal import Decimal

import asyncpg
import pytest

from eventdesk.services.event_service import EventNotFoundError, EventService, build_event_record
from eventdesk.wizard.errors import SubmitFailure
from eventdesk.wizard.images import CoverFile
from eventdesk.wizard.models import EventDraft

ORGANIZER_ID = 1001


class FakeEventRepository:
    def __init__(self) -> None:
        self.records = {}
        self.updates = []
        self.error = None
        self._next_id = 1

    async def get(self, event_id):
        return self.records.get(event_id)

    async def create(self, event):
        if self.error is not None:
            raise self.error
        event_id = self._next_id
        self._next_id += 1
        self.records[event_id] = event
        return event_id

    async def update(self, event_id, event, keep_tier_ids):
        if self.error is not None:
            raise self.error
        self.updates.append((event_id, event, list(keep_tier_ids)))
        if event_id not in self.records:
            return False
        self.records[event_id] = event
        return True


@pytest.fixture
def repository() -> FakeEventRepository:
    return FakeEventRepository()


@pytest.fixture
def service(repository) -> EventService:
    return EventService(repository)


class TestBuildEventRecord:
    def test_maps_schedule_and_text_fields(self, valid_draft):
        valid_draft.title = "  Tech Summit  "
        record = build_event_record(ORGANIZER_ID, valid_draft)

        assert record.title == "Tech Summit"
        assert record.start_datetime == datetime(2025, 10, 12, 9, 0)
        assert record.end_datetime == datetime(2025, 10, 12, 17, 0)
        assert record.category_id == "Arts&Entertainment"
        assert record.tags == ("tech", "nairobi")
        assert record.capacity is None
        assert record.ticket_tiers == ()

    def test_tiers_are_dropped_for_free_events(self, paid_draft):
        paid_draft.is_paid = False
        assert build_event_record(ORGANIZER_ID, paid_draft).ticket_tiers == ()

    def test_tier_defaults_follow_the_event_window(self, paid_draft):
        record = build_event_record(ORGANIZER_ID, paid_draft)
        regular, vip = record.ticket_tiers

        assert regular.price == Decimal("1500")
        assert regular.quantity_total == 500
        assert regular.currency == "KES"
        assert regular.max_per_user == 5
        assert regular.sales_start_at == datetime(2025, 10, 12, 9, 0)
        assert regular.sales_end_at == datetime(2025, 10, 12, 17, 0)
        assert vip.max_per_user == 4

    def test_explicit_sale_window_is_used(self, paid_draft):
        paid_draft.tickets[0].sale_start = "2025-09-01"
        paid_draft.tickets[0].sale_end = "2025-10-11T18:30"
        tier = build_event_record(ORGANIZER_ID, paid_draft).ticket_tiers[0]

        assert tier.sales_start_at == datetime(2025, 9, 1)
        assert tier.sales_end_at == datetime(2025, 10, 11, 18, 30)

    def test_unparseable_sale_date_fails_submit(self, paid_draft):
        paid_draft.tickets[1].sale_end = "next week"
        with pytest.raises(SubmitFailure) as exc_info:
            build_event_record(ORGANIZER_ID, paid_draft)
        assert "VIP" in exc_info.value.message

    @pytest.mark.parametrize("capacity", ["0", "-10", "lots"])
    def test_invalid_capacity_fails_submit(self, valid_draft, capacity):
        valid_draft.capacity_limit = capacity
        with pytest.raises(SubmitFailure) as exc_info:
            build_event_record(ORGANIZER_ID, valid_draft)
        assert exc_info.value.message == "Capacity limit must be a positive whole number."

    def test_capacity_is_parsed(self, valid_draft):
        valid_draft.capacity_limit = " 250 "
        assert build_event_record(ORGANIZER_ID, valid_draft).capacity == 250

    def test_cover_file_id_takes_precedence_over_preview(self, valid_draft):
        valid_draft.cover_image = "data:image/jpeg;base64,AAAA"
        cover = CoverFile(filename="cover.jpg", content=b"", file_id="AgACAgQ")
        assert build_event_record(ORGANIZER_ID, valid_draft, cover).thumbnail_url == "AgACAgQ"

    def test_online_event_keeps_empty_location_as_none(self, valid_draft):
        valid_draft.is_online = True
        valid_draft.location = "  "
        assert build_event_record(ORGANIZER_ID, valid_draft).location_name is None


class TestEventService:
    async def test_create_returns_new_event_id(self, service, repository, paid_draft):
        event_id = await service.create_event(ORGANIZER_ID, paid_draft)

        assert event_id == 1
        assert repository.records[1].organizer_id == ORGANIZER_ID
        assert len(repository.records[1].ticket_tiers) == 2

    async def test_database_error_becomes_submit_failure(self, service, repository, valid_draft):
        repository.error = asyncpg.PostgresError("connection reset")

        with pytest.raises(SubmitFailure) as exc_info:
            await service.create_event(ORGANIZER_ID, valid_draft)

        assert exc_info.value.message == "The event could not be saved right now. Please try again."

    async def test_load_form_data_round_trips_into_a_draft(self, service, paid_draft):
        event_id = await service.create_event(ORGANIZER_ID, paid_draft)

        data = await service.load_form_data(ORGANIZER_ID, event_id)
        draft = EventDraft.from_dict(data)

        assert draft.title == "Tech Summit"
        assert draft.start_date == "2025-10-12"
        assert draft.start_time == "09:00"
        assert draft.is_paid is True
        assert [tier.name for tier in draft.tickets] == ["Regular", "VIP"]
        assert draft.tickets[0].price == "1500"
        assert draft.tickets[0].sale_start == "2025-10-12T09:00"
        assert draft.tickets[0].id is None
        assert draft.tickets[1].max_per_order == "4"

    async def test_load_form_data_rejects_other_organizers(self, service, valid_draft):
        event_id = await service.create_event(ORGANIZER_ID, valid_draft)

        with pytest.raises(EventNotFoundError):
            await service.load_form_data(ORGANIZER_ID + 1, event_id)

    async def test_load_form_data_for_missing_event(self, service):
        with pytest.raises(EventNotFoundError) as exc_info:
            await service.load_form_data(ORGANIZER_ID, 404)
        assert exc_info.value.event_id == 404

    async def test_update_keeps_only_saved_tier_ids(self, service, repository, paid_draft):
        event_id = await service.create_event(ORGANIZER_ID, paid_draft)
        paid_draft.tickets[0].id = "7"
        paid_draft.tickets[1].id = None

        await service.update_event(ORGANIZER_ID, event_id, paid_draft)

        assert repository.updates[0][2] == [7]

    async def test_update_of_missing_event_fails_submit(self, service, valid_draft):
        with pytest.raises(SubmitFailure) as exc_info:
            await service.update_event(ORGANIZER_ID, 99, valid_draft)
        assert exc_info.value.message == "This event no longer exists or belongs to another organizer."
