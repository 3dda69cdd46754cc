from typing import Mapping

from aiogram.types import InlineKeyboardButton
from aiogram.utils.keyboard import InlineKeyboardBuilder

from eventdesk.utils.callbacks import (
    WIZARD_CANCEL,
    WIZARD_COVER_REMOVE,
    WIZARD_INPUT_CANCEL,
    WIZARD_SUBMIT,
    WIZARD_TAG_ADD,
    WIZARD_TICKET_ADD,
    wizard_category,
    wizard_field,
    wizard_section,
    wizard_tag_remove,
    wizard_ticket_field,
    wizard_ticket_remove,
    wizard_ticket_select,
    wizard_toggle,
)
from eventdesk.utils.formatters import section_label
from eventdesk.utils.i18n import t
from eventdesk.wizard.models import CATEGORIES, TIER_FIELDS
from eventdesk.wizard.sections import SECTION_ORDER, Section
from eventdesk.wizard.session import EventFormSession
from eventdesk.wizard.validation import ticket_error_key

TICKET_SELECTORS_PER_ROW = 3


def wizard_keyboard(session: EventFormSession):
    builder = InlineKeyboardBuilder()
    active = session.router.active
    flags = session.router.error_flags(session.errors)

    tabs: list[InlineKeyboardButton] = []
    for section in SECTION_ORDER:
        label = section_label(section)
        if flags[section]:
            label = t("button.tab_error", label=label)
        if section is active:
            label = t("button.tab_active", label=label)
        tabs.append(InlineKeyboardButton(text=label, callback_data=wizard_section(section.value)))
    builder.row(*tabs[:3])
    builder.row(*tabs[3:])

    for row in _section_rows(session, active):
        builder.row(*row)

    submit_key = "button.save_changes" if session.edit_mode else "button.publish"
    builder.row(
        InlineKeyboardButton(text=t(submit_key), callback_data=WIZARD_SUBMIT),
        InlineKeyboardButton(text=t("button.cancel"), callback_data=WIZARD_CANCEL),
    )
    return builder.as_markup()


def input_cancel_keyboard():
    builder = InlineKeyboardBuilder()
    builder.button(text=t("button.back"), callback_data=WIZARD_INPUT_CANCEL)
    builder.adjust(1)
    return builder.as_markup()


def _section_rows(session: EventFormSession, section: Section) -> list[list[InlineKeyboardButton]]:
    draft = session.draft
    if section is Section.MEDIA:
        if draft.cover_image:
            return [[_button("button.remove_cover", WIZARD_COVER_REMOVE)]]
        return []
    if section is Section.BASICS:
        rows = [
            [_field_button("title"), _field_button("description")],
        ]
        categories = [
            InlineKeyboardButton(
                text=t("button.selected", label=name) if key == draft.category else name,
                callback_data=wizard_category(index),
            )
            for index, (key, name) in enumerate(CATEGORIES)
        ]
        rows.extend(categories[i : i + 2] for i in range(0, len(categories), 2))
        rows.append([_button("button.add_tag", WIZARD_TAG_ADD)])
        for index, tag in enumerate(draft.tags):
            rows.append([InlineKeyboardButton(text=t("button.remove_tag", tag=tag), callback_data=wizard_tag_remove(index))])
        return rows
    if section is Section.SCHEDULE:
        return [
            [_field_button("start_date"), _field_button("start_time")],
            [_field_button("end_date"), _field_button("end_time")],
        ]
    if section is Section.LOCATION:
        return [
            [_toggle_button("is_online", draft.is_online)],
            [_field_button("location_online" if draft.is_online else "location", field="location")],
        ]
    if section is Section.TICKETS:
        rows = [[_toggle_button("is_paid", draft.is_paid)]]
        if not draft.is_paid:
            return rows
        active = session.active_ticket
        errors = session.errors
        selectors = [
            _ticket_selector(index, tier.name, index == active, _tier_has_error(index, errors))
            for index, tier in enumerate(draft.tickets)
        ]
        rows.extend(selectors[i : i + TICKET_SELECTORS_PER_ROW] for i in range(0, len(selectors), TICKET_SELECTORS_PER_ROW))
        # Edit buttons for the selected tier only.
        if active is not None:
            buttons = [
                InlineKeyboardButton(
                    text=t("button.ticket_field", number=active + 1, label=t(f"field.ticket_{name}")),
                    callback_data=wizard_ticket_field(active, name),
                )
                for name in TIER_FIELDS
            ]
            rows.extend(buttons[i : i + 3] for i in range(0, len(buttons), 3))
            rows.append(
                [
                    InlineKeyboardButton(
                        text=t("button.remove_ticket", number=active + 1),
                        callback_data=wizard_ticket_remove(active),
                    )
                ]
            )
        rows.append([_button("button.add_ticket", WIZARD_TICKET_ADD)])
        return rows
    return [
        [_toggle_button("is_private", draft.is_private)],
        [_field_button("capacity_limit")],
    ]


def _button(text_key: str, callback_data: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=t(text_key), callback_data=callback_data)


def _field_button(label_key: str, field: str | None = None) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=t(f"field.{label_key}"), callback_data=wizard_field(field or label_key))


def _toggle_button(field: str, value: bool) -> InlineKeyboardButton:
    state = t("button.on") if value else t("button.off")
    return InlineKeyboardButton(
        text=t("button.toggle", label=t(f"field.{field}"), state=state),
        callback_data=wizard_toggle(field),
    )


def _ticket_selector(index: int, name: str, active: bool, has_error: bool) -> InlineKeyboardButton:
    label = t("button.ticket_select", number=index + 1, name=str(name).strip() or t("wizard.empty"))
    if has_error:
        label = t("button.tab_error", label=label)
    if active:
        label = t("button.tab_active", label=label)
    return InlineKeyboardButton(text=label, callback_data=wizard_ticket_select(index))


def _tier_has_error(index: int, errors: Mapping[str, str]) -> bool:
    prefix = ticket_error_key(index, "")
    return any(key.startswith(prefix) for key in errors)
