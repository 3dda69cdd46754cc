"""Tests for the event form validation rules."""

import pytest

from eventdesk.wizard.models import EventDraft, TicketTier
from eventdesk.wizard.validation import validate_draft


class TestRequiredFields:
    def test_valid_draft_has_no_errors(self, valid_draft):
        assert validate_draft(valid_draft) == {}

    def test_empty_title_is_reported(self, valid_draft):
        valid_draft.title = ""
        assert validate_draft(valid_draft)["title"] == "Event title is required"

    def test_whitespace_only_description_is_reported(self, valid_draft):
        valid_draft.description = "   "
        assert validate_draft(valid_draft)["description"] == "Description is required"

    def test_default_draft_reports_every_required_field(self):
        errors = validate_draft(EventDraft())
        assert set(errors) == {
            "title",
            "description",
            "start_date",
            "start_time",
            "end_date",
            "end_time",
            "location",
        }
        assert errors["end_time"] == "End time is required"


class TestSchedule:
    def test_end_before_start_is_reported_on_end_date(self, valid_draft):
        valid_draft.start_time = "09:00"
        valid_draft.end_time = "08:00"
        errors = validate_draft(valid_draft)
        assert errors["end_date"] == "End date/time cannot be before start date/time"

    def test_end_equal_to_start_is_allowed(self, valid_draft):
        valid_draft.end_time = valid_draft.start_time
        assert "end_date" not in validate_draft(valid_draft)

    def test_end_on_earlier_day_is_reported(self, valid_draft):
        valid_draft.end_date = "2025-10-11"
        valid_draft.end_time = "23:00"
        assert "end_date" in validate_draft(valid_draft)

    def test_ordering_is_skipped_while_a_component_is_missing(self, valid_draft):
        valid_draft.end_time = ""
        errors = validate_draft(valid_draft)
        assert errors["end_time"] == "End time is required"
        assert "end_date" not in errors

    def test_unparseable_start_is_reported_on_start_date(self, valid_draft):
        valid_draft.start_date = "12/10/2025"
        errors = validate_draft(valid_draft)
        assert errors["start_date"] == "Enter a valid date and time"
        assert "end_date" not in errors

    def test_single_digit_hour_is_accepted(self, valid_draft):
        valid_draft.start_time = "9:00"
        assert validate_draft(valid_draft) == {}


class TestLocation:
    @pytest.mark.parametrize("location", ["", "   ", "\t"])
    def test_in_person_event_requires_location(self, valid_draft, location):
        valid_draft.location = location
        assert validate_draft(valid_draft)["location"] == "Location is required for in-person events"

    @pytest.mark.parametrize("location", ["", "  ", "https://meet.example.com/abc"])
    def test_online_event_never_reports_location(self, valid_draft, location):
        valid_draft.is_online = True
        valid_draft.location = location
        assert "location" not in validate_draft(valid_draft)


class TestTicketTiers:
    def test_paid_draft_with_valid_tiers_passes(self, paid_draft):
        assert validate_draft(paid_draft) == {}

    def test_tiers_are_ignored_for_free_events(self, valid_draft):
        valid_draft.tickets = [TicketTier(name="", price="-1", quantity="0")]
        assert validate_draft(valid_draft) == {}

    def test_negative_price_is_reported(self, valid_draft):
        valid_draft.is_paid = True
        valid_draft.tickets = [TicketTier(name="VIP", price="-5", quantity="10")]
        errors = validate_draft(valid_draft)
        assert errors == {"tickets.0.price": "Price must be a positive number"}

    def test_zero_price_is_allowed(self, paid_draft):
        paid_draft.tickets[0].price = "0"
        assert validate_draft(paid_draft) == {}

    @pytest.mark.parametrize("price", ["", "abc", "NaN", "Infinity"])
    def test_non_numeric_price_is_reported(self, paid_draft, price):
        paid_draft.tickets[1].price = price
        assert "tickets.1.price" in validate_draft(paid_draft)

    @pytest.mark.parametrize("quantity", ["0", "-3", "", "ten", "2.5"])
    def test_non_positive_or_non_integer_quantity_is_reported(self, paid_draft, quantity):
        paid_draft.tickets[0].quantity = quantity
        errors = validate_draft(paid_draft)
        assert errors["tickets.0.quantity"] == "Quantity must be a positive integer"

    def test_missing_name_is_reported_per_row(self, paid_draft):
        paid_draft.tickets[1].name = "  "
        errors = validate_draft(paid_draft)
        assert errors == {"tickets.1.name": "Ticket name is required"}

    def test_sale_end_must_be_after_sale_start(self, paid_draft):
        paid_draft.tickets[0].sale_start = "2025-10-01T10:00"
        paid_draft.tickets[0].sale_end = "2025-10-01T10:00"
        errors = validate_draft(paid_draft)
        assert errors["tickets.0.sale_end"] == "Sale end must be after sale start"

    def test_sale_window_with_unparseable_date_is_not_checked(self, paid_draft):
        paid_draft.tickets[0].sale_start = "soon"
        paid_draft.tickets[0].sale_end = "2025-10-01"
        assert validate_draft(paid_draft) == {}

    def test_sale_window_accepts_plain_dates(self, paid_draft):
        paid_draft.tickets[0].sale_start = "2025-09-01"
        paid_draft.tickets[0].sale_end = "2025-10-11"
        assert validate_draft(paid_draft) == {}

    def test_max_per_order_above_quantity_is_reported(self, paid_draft):
        paid_draft.tickets[1].max_per_order = "51"
        errors = validate_draft(paid_draft)
        assert errors["tickets.1.max_per_order"] == "Cannot exceed total quantity"

    @pytest.mark.parametrize("max_per_order", ["0", "-1", "many"])
    def test_max_per_order_must_be_positive(self, paid_draft, max_per_order):
        paid_draft.tickets[1].max_per_order = max_per_order
        errors = validate_draft(paid_draft)
        assert errors["tickets.1.max_per_order"] == "Max per order must be positive"

    def test_max_per_order_is_not_compared_with_unparseable_quantity(self, paid_draft):
        paid_draft.tickets[1].quantity = "lots"
        paid_draft.tickets[1].max_per_order = "1000"
        errors = validate_draft(paid_draft)
        assert "tickets.1.max_per_order" not in errors
        assert "tickets.1.quantity" in errors


class TestPurity:
    def test_validation_is_idempotent(self, paid_draft):
        paid_draft.title = ""
        paid_draft.tickets[0].price = "-1"
        first = validate_draft(paid_draft)
        second = validate_draft(paid_draft)
        assert first == second
        assert list(first) == list(second)

    def test_validation_does_not_modify_the_draft(self, paid_draft):
        before = paid_draft.to_dict()
        validate_draft(paid_draft)
        assert paid_draft.to_dict() == before

    def test_values_stored_as_numbers_are_validated_as_text(self, paid_draft):
        paid_draft.tickets[0].price = 10
        paid_draft.tickets[0].quantity = 0
        errors = validate_draft(paid_draft)
        assert "tickets.0.price" not in errors
        assert "tickets.0.quantity" in errors
