"""Tests for section error flags and the first-error jump."""

import pytest

from eventdesk.wizard.sections import Section, SectionRouter, section_has_error


def test_router_starts_on_media():
    assert SectionRouter().active is Section.MEDIA


def test_select_accepts_section_values():
    router = SectionRouter()
    assert router.select("tickets") is Section.TICKETS
    assert router.active is Section.TICKETS


def test_select_rejects_unknown_section():
    with pytest.raises(ValueError):
        SectionRouter().select("payments")


def test_error_flags_group_fields_by_section():
    errors = {"start_time": "x", "tickets.2.quantity": "y"}
    flags = SectionRouter().error_flags(errors)
    assert flags == {
        Section.MEDIA: False,
        Section.BASICS: False,
        Section.SCHEDULE: True,
        Section.LOCATION: False,
        Section.TICKETS: True,
        Section.SETTINGS: False,
    }


def test_tickets_section_ignores_plain_tickets_key():
    assert section_has_error(Section.TICKETS, {"tickets": "x"}) is False


@pytest.mark.parametrize(
    "errors, expected",
    [
        ({"title": "x", "location": "y"}, Section.BASICS),
        ({"end_date": "x", "location": "y"}, Section.SCHEDULE),
        ({"location": "x", "tickets.0.name": "y"}, Section.LOCATION),
        ({"tickets.1.price": "x"}, Section.TICKETS),
    ],
)
def test_jump_to_first_error_follows_priority(errors, expected):
    router = SectionRouter()
    assert router.jump_to_first_error(errors) is expected
    assert router.active is expected


def test_jump_without_errors_keeps_active_section():
    router = SectionRouter(Section.SETTINGS)
    assert router.jump_to_first_error({}) is None
    assert router.active is Section.SETTINGS
