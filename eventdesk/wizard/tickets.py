import logging
from dataclasses import replace
from typing import Iterator

from eventdesk.wizard.errors import UnknownFieldError
from eventdesk.wizard.models import TIER_FIELDS, TicketTier

logger = logging.getLogger(__name__)


class TicketTierCollection:
    def __init__(self, tiers: list[TicketTier]) -> None:
        self._tiers = tiers

    def __len__(self) -> int:
        return len(self._tiers)

    def __iter__(self) -> Iterator[TicketTier]:
        return iter(self._tiers)

    def __getitem__(self, index: int) -> TicketTier:
        return self._tiers[index]

    def append(self) -> int:
        self._tiers.append(TicketTier())
        return len(self._tiers) - 1

    def update(self, index: int, field: str, value: str) -> bool:
        if field not in TIER_FIELDS:
            raise UnknownFieldError(f"tickets.{field}")
        if not self._in_range(index):
            logger.warning(f"Ignoring update of missing ticket tier: index={index} size={len(self._tiers)}")
            return False
        self._tiers[index] = replace(self._tiers[index], **{field: value})
        return True

    def remove(self, index: int) -> TicketTier | None:
        if not self._in_range(index):
            logger.warning(f"Ignoring removal of missing ticket tier: index={index} size={len(self._tiers)}")
            return None
        return self._tiers.pop(index)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._tiers)
