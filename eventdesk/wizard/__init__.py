from eventdesk.wizard.errors import DraftLoadCorruption, SubmitFailure, SubmitInProgressError, UnknownFieldError, WizardError
from eventdesk.wizard.images import CoverFile
from eventdesk.wizard.models import CATEGORIES, EventDraft, TicketTier
from eventdesk.wizard.persistence import DraftPersistenceManager, DraftSlot, MemoryDraftSlot
from eventdesk.wizard.sections import Section, SectionRouter
from eventdesk.wizard.session import EventFormSession
from eventdesk.wizard.store import FormStateStore
from eventdesk.wizard.submit import SubmitCoordinator, SubmitResult, SubmitState
from eventdesk.wizard.tickets import TicketTierCollection
from eventdesk.wizard.validation import validate_draft

__all__ = [
    "CATEGORIES",
    "CoverFile",
    "DraftLoadCorruption",
    "DraftPersistenceManager",
    "DraftSlot",
    "EventDraft",
    "EventFormSession",
    "FormStateStore",
    "MemoryDraftSlot",
    "Section",
    "SectionRouter",
    "SubmitCoordinator",
    "SubmitFailure",
    "SubmitInProgressError",
    "SubmitResult",
    "SubmitState",
    "TicketTier",
    "TicketTierCollection",
    "UnknownFieldError",
    "WizardError",
    "validate_draft",
]
