from enum import Enum
from typing import Mapping

from eventdesk.wizard.validation import SCHEDULE_FIELDS, TICKETS_PREFIX


class Section(str, Enum):
    MEDIA = "media"
    BASICS = "basics"
    SCHEDULE = "schedule"
    LOCATION = "location"
    TICKETS = "tickets"
    SETTINGS = "settings"


SECTION_ORDER: tuple[Section, ...] = tuple(Section)

SECTION_FIELDS: dict[Section, tuple[str, ...]] = {
    Section.MEDIA: (),
    Section.BASICS: ("title", "description"),
    Section.SCHEDULE: SCHEDULE_FIELDS,
    Section.LOCATION: ("location",),
    Section.TICKETS: (),
    Section.SETTINGS: (),
}

# Sections searched, in order, after a blocked submit.
ERROR_PRIORITY: tuple[Section, ...] = (
    Section.BASICS,
    Section.SCHEDULE,
    Section.LOCATION,
    Section.TICKETS,
)


def section_has_error(section: Section, errors: Mapping[str, str]) -> bool:
    if section is Section.TICKETS:
        return any(key.startswith(TICKETS_PREFIX) for key in errors)
    return any(name in errors for name in SECTION_FIELDS[section])


class SectionRouter:
    def __init__(self, active: Section = Section.MEDIA) -> None:
        self._active = active

    @property
    def active(self) -> Section:
        return self._active

    def select(self, section: Section | str) -> Section:
        self._active = Section(section)
        return self._active

    def error_flags(self, errors: Mapping[str, str]) -> dict[Section, bool]:
        return {section: section_has_error(section, errors) for section in SECTION_ORDER}

    def jump_to_first_error(self, errors: Mapping[str, str]) -> Section | None:
        for section in ERROR_PRIORITY:
            if section_has_error(section, errors):
                self._active = section
                return section
        return None
