from aiogram import Dispatcher

from . import start, wizard


def setup(dp: Dispatcher) -> None:
    dp.include_router(start.router)
    dp.include_router(wizard.router)
