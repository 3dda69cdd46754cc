import logging

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import CallbackQuery, Message

logger = logging.getLogger(__name__)

# Callback answers fail with these once Telegram has dropped the query.
_STALE_CALLBACK_MARKERS = ("too old", "timeout expired", "query id is invalid")


async def safe_delete(message: Message) -> None:
    try:
        await message.delete()
    except TelegramAPIError as e:
        logger.debug(f"Message not deleted: chat_id={message.chat.id} message_id={message.message_id} error={e}")


async def safe_delete_by_id(bot: Bot, chat_id: int | None, message_id: int | None) -> None:
    if not chat_id or not message_id:
        return
    try:
        await bot.delete_message(chat_id=chat_id, message_id=message_id)
    except TelegramAPIError as e:
        logger.debug(f"Message not deleted: chat_id={chat_id} message_id={message_id} error={e}")


async def safe_answer_callback(callback: CallbackQuery, text: str | None = None, show_alert: bool = False) -> None:
    try:
        await callback.answer(text=text, show_alert=show_alert)
    except TelegramBadRequest as e:
        if not any(marker in str(e).lower() for marker in _STALE_CALLBACK_MARKERS):
            raise
