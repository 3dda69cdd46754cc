import asyncio
import logging
from datetime import timezone

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from config import load_config
from eventdesk.database import close_pool, init_pool, run_schema_setup
from eventdesk.handlers import setup as setup_handlers
from eventdesk.services.container import build_services
from eventdesk.utils.di import set_config, set_services


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = load_config()
    set_config(config)
    await init_pool(config.database.dsn)
    await run_schema_setup()
    # Runs the debounced draft autosave jobs of open form sessions.
    scheduler = AsyncIOScheduler(timezone=timezone.utc)
    services = build_services(config, scheduler)
    set_services(services)
    bot = Bot(token=config.bot.token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()
    setup_handlers(dp)

    try:
        scheduler.start()
        await dp.start_polling(bot)
    finally:
        services.wizard.close_all()
        if scheduler.running:
            scheduler.shutdown(wait=False)
        await close_pool()
        await bot.session.close()


if __name__ == "__main__":
    asyncio.run(main())
