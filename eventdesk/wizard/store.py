from typing import Any, Callable

from eventdesk.wizard.errors import UnknownFieldError
from eventdesk.wizard.models import BOOLEAN_FIELDS, SETTABLE_FIELDS, EventDraft
from eventdesk.wizard.tickets import TicketTierCollection
from eventdesk.wizard.validation import ticket_error_key, validate_draft

MutationListener = Callable[[str], None]


# Edits drop the displayed error of the touched path; only validate() rebuilds the map.
class FormStateStore:
    def __init__(self, draft: EventDraft | None = None) -> None:
        self._draft = draft or EventDraft()
        self._errors: dict[str, str] = {}
        self._listeners: list[MutationListener] = []
        self.tickets = TicketTierCollection(self._draft.tickets)

    @property
    def draft(self) -> EventDraft:
        return self._draft

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def error_for(self, path: str) -> str | None:
        return self._errors.get(path)

    def subscribe(self, listener: MutationListener) -> None:
        self._listeners.append(listener)

    def validate(self) -> dict[str, str]:
        self._errors = validate_draft(self._draft)
        return dict(self._errors)

    def set_field(self, path: str, value: Any) -> None:
        if path not in SETTABLE_FIELDS:
            raise UnknownFieldError(path)
        setattr(self._draft, path, value)
        self._changed(path)

    def toggle(self, field: str) -> bool:
        if field not in BOOLEAN_FIELDS:
            raise UnknownFieldError(field)
        value = not getattr(self._draft, field)
        setattr(self._draft, field, value)
        self._changed(field)
        return value

    def add_tag(self, tag: str) -> bool:
        tag = tag.strip()
        if not tag or tag in self._draft.tags:
            return False
        self._draft.tags.append(tag)
        self._changed("tags")
        return True

    def remove_tag(self, tag: str) -> bool:
        if tag not in self._draft.tags:
            return False
        self._draft.tags.remove(tag)
        self._changed("tags")
        return True

    def add_ticket(self) -> int:
        index = self.tickets.append()
        self._changed("tickets")
        return index

    def update_ticket(self, index: int, field: str, value: str) -> bool:
        if not self.tickets.update(index, field, value):
            return False
        self._changed(ticket_error_key(index, field))
        return True

    def remove_ticket(self, index: int) -> bool:
        if self.tickets.remove(index) is None:
            return False
        # Error keys are positional; rebuild the map instead of shifting keys.
        # An empty map stays empty: edits never add errors, only validate() does.
        if self._errors:
            self._errors = validate_draft(self._draft)
        self._notify("tickets")
        return True

    def _changed(self, path: str) -> None:
        self._errors.pop(path, None)
        self._notify(path)

    def _notify(self, path: str) -> None:
        for listener in list(self._listeners):
            listener(path)
