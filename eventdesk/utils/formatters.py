import textwrap
from html import escape
from typing import Callable, Mapping

from eventdesk.utils.i18n import t
from eventdesk.wizard.models import TIER_FIELDS, EventDraft, category_name
from eventdesk.wizard.sections import SECTION_ORDER, Section, section_has_error
from eventdesk.wizard.session import EventFormSession
from eventdesk.wizard.validation import ticket_error_key

Errors = Mapping[str, str]


def format_wizard_card(session: EventFormSession) -> str:
    header_key = "wizard.header_edit" if session.edit_mode else "wizard.header_create"
    lines: list[str] = [t(header_key)]
    if session.draft_restored and not session.edit_mode:
        lines.append(t("wizard.draft_restored"))

    section = session.router.active
    errors = session.errors
    lines.append("")
    lines.append(t("wizard.section_title", section=section_label(section)))
    lines.extend(_SECTION_RENDERERS[section](session.draft, errors))

    failing = [section_label(item) for item in SECTION_ORDER if item is not section and section_has_error(item, errors)]
    if failing:
        lines.append("")
        lines.append(t("wizard.errors_in", sections=", ".join(failing)))
    return "\n".join(lines)


def section_label(section: Section) -> str:
    return t(f"wizard.section.{section.value}")


def _render_media(draft: EventDraft, errors: Errors) -> list[str]:
    return [t("wizard.cover_set") if draft.cover_image else t("wizard.cover_missing")]


def _render_basics(draft: EventDraft, errors: Errors) -> list[str]:
    lines = _field_line("title", draft.title, errors.get("title"))
    lines.extend(_field_line("description", _shorten(draft.description), errors.get("description")))
    lines.append(t("wizard.field_value", label=t("field.category"), value=escape(category_name(draft.category))))
    tags = ", ".join(escape(tag) for tag in draft.tags) if draft.tags else t("wizard.empty")
    lines.append(t("wizard.field_value", label=t("field.tags"), value=tags))
    return lines


def _render_schedule(draft: EventDraft, errors: Errors) -> list[str]:
    lines: list[str] = []
    for name in ("start_date", "start_time", "end_date", "end_time"):
        lines.extend(_field_line(name, getattr(draft, name), errors.get(name)))
    return lines


def _render_location(draft: EventDraft, errors: Errors) -> list[str]:
    lines = [t("wizard.online") if draft.is_online else t("wizard.in_person")]
    label = "location_online" if draft.is_online else "location"
    lines.extend(_field_line(label, draft.location, errors.get("location")))
    return lines


def _render_tickets(draft: EventDraft, errors: Errors) -> list[str]:
    if not draft.is_paid:
        return [t("wizard.tickets_free")]
    if not draft.tickets:
        return [t("wizard.tickets_paid"), t("wizard.tickets_empty")]
    lines = [t("wizard.tickets_paid")]
    for index, tier in enumerate(draft.tickets):
        lines.append("")
        lines.append(t("wizard.ticket_header", number=index + 1))
        for name in TIER_FIELDS:
            value = getattr(tier, name)
            error = errors.get(ticket_error_key(index, name))
            if not str(value) and error is None and name not in ("name", "price", "quantity"):
                continue
            lines.extend(_field_line(f"ticket_{name}", value, error))
    return lines


def _render_settings(draft: EventDraft, errors: Errors) -> list[str]:
    lines = [t("wizard.private") if draft.is_private else t("wizard.public")]
    capacity = str(draft.capacity_limit).strip()
    lines.append(
        t(
            "wizard.field_value",
            label=t("field.capacity_limit"),
            value=escape(capacity) if capacity else t("wizard.capacity_unlimited"),
        )
    )
    return lines


_SECTION_RENDERERS: dict[Section, Callable[[EventDraft, Errors], list[str]]] = {
    Section.MEDIA: _render_media,
    Section.BASICS: _render_basics,
    Section.SCHEDULE: _render_schedule,
    Section.LOCATION: _render_location,
    Section.TICKETS: _render_tickets,
    Section.SETTINGS: _render_settings,
}


def _field_line(label_key: str, value, error: str | None) -> list[str]:
    text = escape(str(value)) if value not in (None, "") else t("wizard.empty")
    lines = [t("wizard.field_value", label=t(f"field.{label_key}"), value=text)]
    if error:
        lines.append(t("wizard.field_error", error=escape(error)))
    return lines


def _shorten(text: str, width: int = 120) -> str:
    return textwrap.shorten(str(text), width=width, placeholder="…") if text else ""
