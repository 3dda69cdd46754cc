from .wizard import input_cancel_keyboard, wizard_keyboard

__all__ = [
    "input_cancel_keyboard",
    "wizard_keyboard",
]
