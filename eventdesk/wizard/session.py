import logging
from typing import Any, Mapping

from apscheduler.schedulers.base import BaseScheduler

from eventdesk.wizard.images import CoverFile, PreviewLoader, data_url_preview
from eventdesk.wizard.models import EventDraft
from eventdesk.wizard.persistence import DEFAULT_QUIET_INTERVAL, DraftPersistenceManager, DraftSlot
from eventdesk.wizard.sections import SectionRouter
from eventdesk.wizard.store import FormStateStore
from eventdesk.wizard.submit import SubmitCoordinator, SubmitHandler, SubmitResult

logger = logging.getLogger(__name__)


class EventFormSession:
    def __init__(
        self,
        draft: EventDraft,
        *,
        persistence: DraftPersistenceManager,
        submit_handler: SubmitHandler,
        edit_mode: bool = False,
        draft_restored: bool = False,
    ) -> None:
        self.edit_mode = edit_mode
        self.draft_restored = draft_restored
        self.store = FormStateStore(draft)
        self.router = SectionRouter()
        self.persistence = persistence
        self.coordinator = SubmitCoordinator(
            self.store,
            self.router,
            submit_handler,
            on_success=self._on_submitted,
        )
        self._cover_file: CoverFile | None = None
        self._cover_request = 0
        self._active_ticket: int | None = None
        self._closed = False
        self.store.subscribe(self._on_mutation)

    @classmethod
    async def open(
        cls,
        *,
        slot: DraftSlot,
        scheduler: BaseScheduler,
        submit_handler: SubmitHandler,
        initial_data: EventDraft | Mapping[str, Any] | None = None,
        edit_mode: bool = False,
        quiet_interval: float = DEFAULT_QUIET_INTERVAL,
    ) -> "EventFormSession":
        persistence = DraftPersistenceManager(
            slot,
            scheduler,
            enabled=not edit_mode,
            quiet_interval=quiet_interval,
        )
        draft = EventDraft()
        restored = False
        if isinstance(initial_data, EventDraft):
            draft = initial_data.copy()
        elif initial_data is not None:
            draft = EventDraft.from_dict(initial_data)
        elif not edit_mode:
            stored = await persistence.restore()
            if stored is not None:
                draft = stored
                restored = True
        logger.info(f"Form session opened: edit_mode={edit_mode} draft_restored={restored}")
        return cls(
            draft,
            persistence=persistence,
            submit_handler=submit_handler,
            edit_mode=edit_mode,
            draft_restored=restored,
        )

    @property
    def draft(self) -> EventDraft:
        return self.store.draft

    @property
    def errors(self) -> dict[str, str]:
        return self.store.errors

    @property
    def busy(self) -> bool:
        return self.coordinator.busy

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active_ticket(self) -> int | None:
        if self._active_ticket is not None and 0 <= self._active_ticket < len(self.draft.tickets):
            return self._active_ticket
        return None

    def select_ticket(self, index: int | None) -> int | None:
        self._active_ticket = index
        return self.active_ticket

    @property
    def cover_file(self) -> CoverFile | None:
        return self._cover_file

    async def select_cover_image(self, file: CoverFile, loader: PreviewLoader = data_url_preview) -> bool:
        self._cover_request += 1
        request = self._cover_request
        preview = await loader(file)
        # A newer selection or removal finished first.
        if self._closed or request != self._cover_request:
            return False
        self._cover_file = file
        self.store.set_field("cover_image", preview)
        return True

    def remove_cover_image(self) -> None:
        self._cover_request += 1
        self._cover_file = None
        self.store.set_field("cover_image", None)

    async def submit(self) -> SubmitResult:
        return await self.coordinator.submit(self._cover_file)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.persistence.shutdown()
        logger.info(f"Form session closed: edit_mode={self.edit_mode}")

    async def _on_submitted(self) -> None:
        if not self.edit_mode:
            await self.persistence.clear()

    def _on_mutation(self, path: str) -> None:
        self.persistence.schedule(self.store.draft)
