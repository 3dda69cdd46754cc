import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler

from eventdesk.wizard.errors import DraftLoadCorruption
from eventdesk.wizard.models import EventDraft

logger = logging.getLogger(__name__)

DEFAULT_QUIET_INTERVAL = 1.0
DEFAULT_SLOT_KEY = "event_draft"


class DraftSlot(ABC):
    key: str

    # None when never written or unparseable.
    @abstractmethod
    async def get(self) -> dict[str, Any] | None:
        ...

    @abstractmethod
    async def set(self, snapshot: dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def clear(self) -> None:
        ...


class MemoryDraftSlot(DraftSlot):
    def __init__(self, key: str = DEFAULT_SLOT_KEY, payload: str | None = None) -> None:
        self.key = key
        self.payload = payload

    async def get(self) -> dict[str, Any] | None:
        return decode_snapshot(self.payload)

    async def set(self, snapshot: dict[str, Any]) -> None:
        self.payload = encode_snapshot(snapshot)

    async def clear(self) -> None:
        self.payload = None


def encode_snapshot(snapshot: dict[str, Any]) -> str:
    return json.dumps(snapshot, ensure_ascii=False)


def decode_snapshot(payload: str | None) -> dict[str, Any] | None:
    if not payload:
        return None
    try:
        data = json.loads(payload)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data


# At most one autosave job is pending per session; each schedule() replaces it.
class DraftPersistenceManager:
    def __init__(
        self,
        slot: DraftSlot,
        scheduler: BaseScheduler,
        *,
        enabled: bool = True,
        quiet_interval: float = DEFAULT_QUIET_INTERVAL,
    ) -> None:
        self._slot = slot
        self._scheduler = scheduler
        self._enabled = enabled
        self._quiet_interval = quiet_interval
        self._job_id = f"draft-autosave:{uuid4().hex}"

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def pending(self) -> bool:
        return self._scheduler.get_job(self._job_id) is not None

    async def restore(self) -> EventDraft | None:
        try:
            snapshot = await self._slot.get()
        except Exception as e:
            logger.warning(f"Draft slot read failed, starting from defaults: key={self._slot.key} error={e}")
            return None
        if snapshot is None:
            return None
        try:
            return EventDraft.from_dict(snapshot)
        except DraftLoadCorruption as e:
            logger.warning(f"Discarding corrupt draft: key={self._slot.key} error={e}")
            await self._clear_slot()
            return None

    def schedule(self, draft: EventDraft) -> None:
        self.cancel()
        if not self._enabled or not draft.title:
            return
        run_at = datetime.now(timezone.utc) + timedelta(seconds=self._quiet_interval)
        self._scheduler.add_job(
            self._write,
            trigger="date",
            run_date=run_at,
            args=[draft.to_dict()],
            id=self._job_id,
            replace_existing=True,
            misfire_grace_time=None,
        )

    def cancel(self) -> None:
        try:
            self._scheduler.remove_job(self._job_id)
        except JobLookupError:
            pass

    def shutdown(self) -> None:
        self._enabled = False
        self.cancel()

    async def clear(self) -> None:
        self.cancel()
        await self._clear_slot()

    async def _write(self, snapshot: dict[str, Any]) -> None:
        try:
            await self._slot.set(snapshot)
            logger.debug(f"Draft autosaved: key={self._slot.key}")
        except Exception as e:
            logger.warning(f"Draft autosave failed: key={self._slot.key} error={e}")

    async def _clear_slot(self) -> None:
        try:
            await self._slot.clear()
        except Exception as e:
            logger.warning(f"Draft slot clear failed: key={self._slot.key} error={e}")
