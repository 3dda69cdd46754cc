from __future__ import annotations

import logging
from datetime import datetime
from html import escape

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from eventdesk.handlers.states import EventWizardState
from eventdesk.keyboards import input_cancel_keyboard, wizard_keyboard
from eventdesk.services.event_service import EventNotFoundError
from eventdesk.utils.callbacks import (
    WIZARD_CANCEL,
    WIZARD_CATEGORY_PREFIX,
    WIZARD_COVER_REMOVE,
    WIZARD_FIELD_PREFIX,
    WIZARD_INPUT_CANCEL,
    WIZARD_SECTION_PREFIX,
    WIZARD_SUBMIT,
    WIZARD_TAG_ADD,
    WIZARD_TAG_REMOVE_PREFIX,
    WIZARD_TICKET_ADD,
    WIZARD_TICKET_FIELD_PREFIX,
    WIZARD_TICKET_REMOVE_PREFIX,
    WIZARD_TICKET_SELECT_PREFIX,
    WIZARD_TOGGLE_PREFIX,
    extract_index,
    extract_index_and_field,
    extract_value,
)
from eventdesk.utils.di import get_services, is_organizer
from eventdesk.utils.formatters import format_wizard_card
from eventdesk.utils.i18n import t
from eventdesk.utils.messaging import safe_answer_callback, safe_delete, safe_delete_by_id
from eventdesk.wizard.errors import SubmitFailure, SubmitInProgressError, UnknownFieldError
from eventdesk.wizard.images import CoverFile, file_id_preview
from eventdesk.wizard.models import CATEGORIES
from eventdesk.wizard.sections import Section
from eventdesk.wizard.session import EventFormSession

logger = logging.getLogger(__name__)

router = Router()

CARD_KEY = "card_message_id"
CARD_CHAT_KEY = "card_chat_id"
PROMPT_KEY = "prompt_message_id"
INPUT_FIELD_KEY = "input_field"
INPUT_TICKET_KEY = "input_ticket_index"
CLEAR_VALUE = "-"


@router.message(Command("new_event"))
async def start_create_event(message: Message, state: FSMContext) -> None:
    start_time = datetime.now()
    user_id = message.from_user.id if message.from_user else 0
    logger.info(f"[start_create_event] START: user_id={user_id}")
    if not is_organizer(user_id):
        await message.answer(t("wizard.not_allowed"))
        return
    session = await get_services().wizard.open_create(user_id)
    await _reset_state(message, state)
    await _show_card(message, state, session)
    await safe_delete(message)
    total_time = (datetime.now() - start_time).total_seconds()
    logger.info(
        f"[start_create_event] COMPLETED: user_id={user_id} draft_restored={session.draft_restored} "
        f"total_elapsed={total_time:.3f}s"
    )


@router.message(Command("edit_event"))
async def start_edit_event(message: Message, state: FSMContext, command: CommandObject) -> None:
    user_id = message.from_user.id if message.from_user else 0
    logger.info(f"[start_edit_event] START: user_id={user_id} args={command.args}")
    if not is_organizer(user_id):
        await message.answer(t("wizard.not_allowed"))
        return
    raw_id = (command.args or "").strip()
    if not raw_id.isdigit():
        await message.answer(t("wizard.edit_usage"))
        return
    event_id = int(raw_id)
    try:
        session = await get_services().wizard.open_edit(user_id, event_id)
    except EventNotFoundError:
        await message.answer(t("wizard.event_not_found", event_id=event_id))
        return
    await _reset_state(message, state)
    await _show_card(message, state, session)
    await safe_delete(message)


@router.callback_query(F.data.startswith(WIZARD_SECTION_PREFIX))
async def select_section(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    try:
        session.router.select(extract_value(callback.data, WIZARD_SECTION_PREFIX))
    except ValueError:
        await safe_answer_callback(callback)
        return
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data.startswith(WIZARD_FIELD_PREFIX))
async def ask_field_value(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    field = extract_value(callback.data, WIZARD_FIELD_PREFIX)
    prompt_key = "prompt.location_online" if field == "location" and session.draft.is_online else f"prompt.{field}"
    await state.set_state(EventWizardState.value_input)
    await state.update_data({INPUT_FIELD_KEY: field, INPUT_TICKET_KEY: None})
    await _send_prompt(callback.message, state, t(prompt_key))
    await safe_answer_callback(callback)


@router.callback_query(F.data.startswith(WIZARD_TICKET_FIELD_PREFIX))
async def ask_ticket_value(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    index, field = extract_index_and_field(callback.data, WIZARD_TICKET_FIELD_PREFIX)
    await state.set_state(EventWizardState.value_input)
    await state.update_data({INPUT_FIELD_KEY: field, INPUT_TICKET_KEY: index})
    await _send_prompt(callback.message, state, t(f"prompt.ticket_{field}", number=index + 1))
    await safe_answer_callback(callback)


@router.message(EventWizardState.value_input, F.text)
async def process_field_value(message: Message, state: FSMContext) -> None:
    user_id = message.from_user.id if message.from_user else 0
    session = get_services().wizard.get(user_id)
    if session is None:
        await state.clear()
        await message.answer(t("wizard.no_session"))
        return
    data = await state.get_data()
    field = data.get(INPUT_FIELD_KEY)
    ticket_index = data.get(INPUT_TICKET_KEY)
    value = "" if message.text.strip() == CLEAR_VALUE else message.text
    try:
        if ticket_index is not None:
            session.store.update_ticket(ticket_index, field, value)
        else:
            session.store.set_field(field, value)
    except UnknownFieldError as e:
        logger.warning(f"[process_field_value] Rejected field: user_id={user_id} field={e.field}")
    await state.set_state(EventWizardState.browsing)
    await _show_card(message, state, session)
    await safe_delete(message)


@router.callback_query(F.data.startswith(WIZARD_TOGGLE_PREFIX))
async def toggle_field(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    field = extract_value(callback.data, WIZARD_TOGGLE_PREFIX)
    try:
        session.store.toggle(field)
    except UnknownFieldError:
        logger.warning(f"[toggle_field] Unknown toggle: field={field}")
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data.startswith(WIZARD_CATEGORY_PREFIX))
async def choose_category(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    index = extract_index(callback.data, WIZARD_CATEGORY_PREFIX)
    if 0 <= index < len(CATEGORIES):
        session.store.set_field("category", CATEGORIES[index][0])
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data == WIZARD_TAG_ADD)
async def ask_tag(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    await state.set_state(EventWizardState.tag_input)
    await _send_prompt(callback.message, state, t("prompt.tag"), clearable=False)
    await safe_answer_callback(callback)


@router.message(EventWizardState.tag_input, F.text)
async def process_tag(message: Message, state: FSMContext) -> None:
    user_id = message.from_user.id if message.from_user else 0
    session = get_services().wizard.get(user_id)
    if session is None:
        await state.clear()
        await message.answer(t("wizard.no_session"))
        return
    notice = None
    if not session.store.add_tag(message.text or ""):
        notice = t("wizard.tag_rejected")
    await state.set_state(EventWizardState.browsing)
    await _show_card(message, state, session, notice=notice)
    await safe_delete(message)


@router.callback_query(F.data.startswith(WIZARD_TAG_REMOVE_PREFIX))
async def remove_tag(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    index = extract_index(callback.data, WIZARD_TAG_REMOVE_PREFIX)
    tags = session.draft.tags
    if 0 <= index < len(tags):
        session.store.remove_tag(tags[index])
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data == WIZARD_TICKET_ADD)
async def add_ticket(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    session.select_ticket(session.store.add_ticket())
    session.router.select(Section.TICKETS)
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data.startswith(WIZARD_TICKET_SELECT_PREFIX))
async def select_ticket(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    index = extract_index(callback.data, WIZARD_TICKET_SELECT_PREFIX)
    # A second tap on the selected tier collapses it.
    session.select_ticket(None if index == session.active_ticket else index)
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data.startswith(WIZARD_TICKET_REMOVE_PREFIX))
async def remove_ticket(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    session.store.remove_ticket(extract_index(callback.data, WIZARD_TICKET_REMOVE_PREFIX))
    session.select_ticket(None)
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.message(EventWizardState.browsing, F.photo)
async def process_cover_photo(message: Message, state: FSMContext) -> None:
    user_id = message.from_user.id if message.from_user else 0
    session = get_services().wizard.get(user_id)
    if session is None:
        return
    photo = message.photo[-1]
    content = await message.bot.download(photo.file_id)
    cover = CoverFile(
        filename=f"{photo.file_unique_id}.jpg",
        content=content.getvalue() if content else b"",
        file_id=photo.file_id,
    )
    if await session.select_cover_image(cover, loader=file_id_preview):
        logger.info(f"[process_cover_photo] Cover selected: user_id={user_id} size={len(cover.content)}")
    session.router.select(Section.MEDIA)
    await _show_card(message, state, session)
    await safe_delete(message)


@router.callback_query(F.data == WIZARD_COVER_REMOVE)
async def remove_cover(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    session.remove_cover_image()
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data == WIZARD_INPUT_CANCEL)
async def cancel_input(callback: CallbackQuery, state: FSMContext) -> None:
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    await state.set_state(EventWizardState.browsing)
    await _show_card(callback.message, state, session)
    await safe_answer_callback(callback)


@router.callback_query(F.data == WIZARD_SUBMIT)
async def submit_event(callback: CallbackQuery, state: FSMContext) -> None:
    start_time = datetime.now()
    user_id = callback.from_user.id if callback.from_user else 0
    logger.info(f"[submit_event] START: user_id={user_id}")
    session = await _session_for_callback(callback)
    if session is None or callback.message is None:
        return
    if session.busy:
        await safe_answer_callback(callback, t("wizard.busy"), show_alert=True)
        return
    await safe_answer_callback(callback, t("wizard.saving"))
    try:
        result = await session.submit()
    except SubmitInProgressError:
        return
    except SubmitFailure as e:
        await _show_card(callback.message, state, session, notice=t("wizard.submit_failed", error=escape(e.message)))
        return
    if not result.submitted:
        await _show_card(callback.message, state, session, notice=t("wizard.fix_errors", count=len(result.errors)))
        return

    get_services().wizard.close(user_id)
    await _remove_card(callback.message, state)
    await state.clear()
    done_key = "wizard.saved" if session.edit_mode else "wizard.published"
    await callback.message.answer(t(done_key, title=escape(session.draft.title.strip())))
    total_time = (datetime.now() - start_time).total_seconds()
    logger.info(f"[submit_event] COMPLETED: user_id={user_id} total_elapsed={total_time:.3f}s")


@router.callback_query(F.data == WIZARD_CANCEL)
async def cancel_wizard(callback: CallbackQuery, state: FSMContext) -> None:
    user_id = callback.from_user.id if callback.from_user else 0
    logger.info(f"[cancel_wizard] user_id={user_id}")
    get_services().wizard.close(user_id)
    if callback.message:
        await _remove_card(callback.message, state)
        await callback.message.answer(t("wizard.cancelled"))
    await state.clear()
    await safe_answer_callback(callback)


async def _session_for_callback(callback: CallbackQuery) -> EventFormSession | None:
    session = get_services().wizard.get(callback.from_user.id)
    if session is None:
        await safe_answer_callback(callback, t("wizard.no_session"), show_alert=True)
    return session


async def _reset_state(message: Message, state: FSMContext) -> None:
    await _remove_card(message, state)
    await state.clear()
    await state.set_state(EventWizardState.browsing)


async def _remove_card(message: Message, state: FSMContext) -> None:
    data = await state.get_data()
    chat_id = data.get(CARD_CHAT_KEY)
    await safe_delete_by_id(message.bot, chat_id, data.get(PROMPT_KEY))
    await safe_delete_by_id(message.bot, chat_id, data.get(CARD_KEY))
    await state.update_data({CARD_KEY: None, PROMPT_KEY: None})


async def _show_card(message: Message, state: FSMContext, session: EventFormSession, notice: str | None = None) -> None:
    await _remove_card(message, state)
    text = format_wizard_card(session)
    if notice:
        text = f"{notice}\n\n{text}"
    sent = await message.answer(text, reply_markup=wizard_keyboard(session))
    await state.update_data({CARD_KEY: sent.message_id, CARD_CHAT_KEY: sent.chat.id})


async def _send_prompt(message: Message, state: FSMContext, text: str, clearable: bool = True) -> None:
    data = await state.get_data()
    if clearable:
        text = f"{text}\n\n{t('prompt.clear_hint')}"
    await safe_delete_by_id(message.bot, data.get(CARD_CHAT_KEY), data.get(PROMPT_KEY))
    sent = await message.answer(text, reply_markup=input_cancel_keyboard())
    await state.update_data({PROMPT_KEY: sent.message_id, CARD_CHAT_KEY: sent.chat.id})
