from typing import Any

from eventdesk.database.pool import get_pool
from eventdesk.database.repositories.drafts import DraftRepository
from eventdesk.wizard.persistence import DEFAULT_SLOT_KEY, DraftSlot, MemoryDraftSlot, decode_snapshot, encode_snapshot


class RepositoryDraftSlot(DraftSlot):
    def __init__(self, repository: DraftRepository, key: str) -> None:
        self._repository = repository
        self.key = key

    async def get(self) -> dict[str, Any] | None:
        payload = await self._repository.get(self.key)
        return decode_snapshot(payload)

    async def set(self, snapshot: dict[str, Any]) -> None:
        await self._repository.save(self.key, encode_snapshot(snapshot))

    async def clear(self) -> None:
        await self._repository.delete(self.key)


class DraftService:
    def __init__(self, repository: DraftRepository, key_prefix: str = DEFAULT_SLOT_KEY) -> None:
        self._repository = repository
        self._key_prefix = key_prefix

    def slot_key(self, owner_id: int) -> str:
        return f"{self._key_prefix}:{owner_id}"

    def slot_for(self, owner_id: int) -> DraftSlot:
        return RepositoryDraftSlot(self._repository, self.slot_key(owner_id))


class MemoryDraftService(DraftService):
    def __init__(self, key_prefix: str = DEFAULT_SLOT_KEY) -> None:
        self._key_prefix = key_prefix
        self._slots: dict[str, MemoryDraftSlot] = {}

    def slot_for(self, owner_id: int) -> DraftSlot:
        key = self.slot_key(owner_id)
        return self._slots.setdefault(key, MemoryDraftSlot(key))


def build_draft_service(key_prefix: str) -> DraftService:
    pool = get_pool()
    repository = DraftRepository(pool)
    return DraftService(repository, key_prefix)
