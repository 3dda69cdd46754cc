from dataclasses import dataclass

from apscheduler.schedulers.base import BaseScheduler

from config import Config
from .draft_service import DraftService, build_draft_service
from .event_service import EventService, build_event_service
from .wizard_service import WizardService, build_wizard_service


@dataclass(frozen=True)
class ServiceContainer:
    events: EventService
    drafts: DraftService
    wizard: WizardService


def build_services(config: Config, scheduler: BaseScheduler) -> ServiceContainer:
    events = build_event_service()
    drafts = build_draft_service(config.wizard.draft_slot_key)
    wizard = build_wizard_service(events, drafts, scheduler, config.wizard.autosave_seconds)
    return ServiceContainer(
        events=events,
        drafts=drafts,
        wizard=wizard,
    )
