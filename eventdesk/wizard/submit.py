import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from eventdesk.utils.i18n import t
from eventdesk.wizard.errors import SubmitFailure, SubmitInProgressError
from eventdesk.wizard.images import CoverFile
from eventdesk.wizard.models import EventDraft
from eventdesk.wizard.sections import Section, SectionRouter
from eventdesk.wizard.store import FormStateStore

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[EventDraft, CoverFile | None], Awaitable[None]]
SuccessHook = Callable[[], Awaitable[None]]


class SubmitState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUBMIT_SUCCEEDED = "submit_succeeded"
    SUBMIT_FAILED = "submit_failed"


@dataclass(frozen=True)
class SubmitResult:
    submitted: bool
    errors: dict[str, str] = field(default_factory=dict)
    section: Section | None = None


class SubmitCoordinator:
    def __init__(
        self,
        store: FormStateStore,
        router: SectionRouter,
        submit_handler: SubmitHandler,
        *,
        on_success: SuccessHook | None = None,
    ) -> None:
        self._store = store
        self._router = router
        self._submit_handler = submit_handler
        self._on_success = on_success
        self._state = SubmitState.EDITING
        self._busy = False
        store.subscribe(self._on_edit)

    @property
    def state(self) -> SubmitState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(self, cover_file: CoverFile | None = None) -> SubmitResult:
        if self._busy:
            raise SubmitInProgressError("A submission is already in progress")

        self._state = SubmitState.VALIDATING
        errors = self._store.validate()
        if errors:
            section = self._router.jump_to_first_error(errors)
            self._state = SubmitState.EDITING
            logger.info(f"Submit blocked by validation: errors={len(errors)} section={section}")
            return SubmitResult(submitted=False, errors=errors, section=section)

        self._busy = True
        self._state = SubmitState.SUBMITTING
        try:
            await self._submit_handler(self._store.draft.copy(), cover_file)
        except SubmitFailure as e:
            self._state = SubmitState.SUBMIT_FAILED
            logger.error(f"Submit failed: {e.message}", exc_info=True)
            raise
        except Exception as e:
            self._state = SubmitState.SUBMIT_FAILED
            logger.exception("Submit handler raised an unexpected error")
            raise SubmitFailure(t("submit.failed")) from e
        finally:
            self._busy = False

        self._state = SubmitState.SUBMIT_SUCCEEDED
        if self._on_success is not None:
            await self._on_success()
        return SubmitResult(submitted=True)

    def _on_edit(self, path: str) -> None:
        if self._state is SubmitState.SUBMIT_FAILED:
            self._state = SubmitState.EDITING
