import logging

from apscheduler.schedulers.base import BaseScheduler

from eventdesk.services.draft_service import DraftService
from eventdesk.services.event_service import EventService
from eventdesk.wizard.images import CoverFile
from eventdesk.wizard.models import EventDraft
from eventdesk.wizard.persistence import DEFAULT_QUIET_INTERVAL
from eventdesk.wizard.session import EventFormSession

logger = logging.getLogger(__name__)


class WizardService:
    def __init__(
        self,
        events: EventService,
        drafts: DraftService,
        scheduler: BaseScheduler,
        quiet_interval: float = DEFAULT_QUIET_INTERVAL,
    ) -> None:
        self._events = events
        self._drafts = drafts
        self._scheduler = scheduler
        self._quiet_interval = quiet_interval
        self._sessions: dict[int, EventFormSession] = {}

    def get(self, organizer_id: int) -> EventFormSession | None:
        return self._sessions.get(organizer_id)

    async def open_create(self, organizer_id: int) -> EventFormSession:
        self.close(organizer_id)

        async def submit(draft: EventDraft, cover: CoverFile | None) -> None:
            await self._events.create_event(organizer_id, draft, cover)

        session = await EventFormSession.open(
            slot=self._drafts.slot_for(organizer_id),
            scheduler=self._scheduler,
            submit_handler=submit,
            quiet_interval=self._quiet_interval,
        )
        self._sessions[organizer_id] = session
        return session

    async def open_edit(self, organizer_id: int, event_id: int) -> EventFormSession:
        initial_data = await self._events.load_form_data(organizer_id, event_id)
        self.close(organizer_id)

        async def submit(draft: EventDraft, cover: CoverFile | None) -> None:
            await self._events.update_event(organizer_id, event_id, draft, cover)

        session = await EventFormSession.open(
            slot=self._drafts.slot_for(organizer_id),
            scheduler=self._scheduler,
            submit_handler=submit,
            initial_data=initial_data,
            edit_mode=True,
            quiet_interval=self._quiet_interval,
        )
        self._sessions[organizer_id] = session
        return session

    def close(self, organizer_id: int) -> None:
        session = self._sessions.pop(organizer_id, None)
        if session is not None:
            session.close()

    def close_all(self) -> None:
        for organizer_id in list(self._sessions):
            self.close(organizer_id)
        logger.info("All form sessions closed")


def build_wizard_service(
    events: EventService,
    drafts: DraftService,
    scheduler: BaseScheduler,
    quiet_interval: float,
) -> WizardService:
    return WizardService(events, drafts, scheduler, quiet_interval)
