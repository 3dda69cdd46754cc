from aiogram.fsm.state import State, StatesGroup


class EventWizardState(StatesGroup):
    browsing = State()
    value_input = State()
    tag_input = State()
