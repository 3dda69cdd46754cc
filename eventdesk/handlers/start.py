from html import escape

from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message

from eventdesk.utils.di import is_organizer
from eventdesk.utils.i18n import t

router = Router()


@router.message(CommandStart())
async def handle_start(message: Message) -> None:
    tg_user = message.from_user
    if tg_user is None:
        return
    raw_name = (tg_user.full_name or tg_user.username or "").strip()
    display_name = escape(raw_name) if raw_name else t("start.fallback_name")
    if is_organizer(tg_user.id):
        await message.answer(t("start.organizer", name=display_name))
    else:
        await message.answer(t("start.guest", name=display_name))
