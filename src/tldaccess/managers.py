"""Manager registry: soft-deletable records of administrative accounts.

Records are created once per address and never removed. ``freeze`` only
clears the ``enabled`` flag, so a later ``admit`` restores the account with
its original name and creation time.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Iterator, Optional

from .addresses import normalize_address, require_address
from .events import AccessEvent, EventBus, EventKind
from .exceptions import UnknownManagerError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerRecord:
    """A single manager account.

    ``created_at`` is a Unix timestamp; ``0`` means the record does not exist.
    Records are immutable snapshots; only :class:`ManagerRegistry` replaces them.
    """

    address: str
    created_at: float = 0.0
    enabled: bool = False
    name: str = ""

    @property
    def exists(self) -> bool:
        return self.created_at != 0


class ManagerRegistry:
    """Tracks manager accounts as freeze/unfreeze records.

    Args:
        events: Bus receiving ``MANAGER_*`` notifications.
        clock: Source of ``created_at`` timestamps (default: ``time.time``).
    """

    def __init__(
        self,
        events: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._records: dict[str, ManagerRecord] = {}
        self._events = events or EventBus()
        self._clock = clock

    def admit(self, address: str, name: Optional[str] = None) -> ManagerRecord:
        """Create or re-enable a manager.

        An existing record keeps its stored name whatever ``name`` is passed.
        The ``MANAGER_ADDED`` event carries the stored name.

        Raises:
            InvalidAddressError: null or malformed address.
        """
        who = require_address(address)
        record = self._records.get(who)
        if record is None:
            record = ManagerRecord(address=who, created_at=self._clock(), enabled=True, name=name or "")
            self._records[who] = record
            logger.info("Manager created: %s name=%r", who, record.name)
        else:
            record = replace(record, enabled=True)
            self._records[who] = record
            logger.info("Manager enabled: %s name=%r", who, record.name)

        self._events.publish(AccessEvent(kind=EventKind.MANAGER_ADDED, address=who, name=record.name))
        return record

    def freeze(self, address: str) -> None:
        """Disable a manager; notifies even when no record exists.

        Raises:
            InvalidAddressError: null or malformed address.
        """
        who = require_address(address)
        record = self._records.get(who)
        if record is not None:
            self._records[who] = replace(record, enabled=False)
            logger.info("Manager frozen: %s", who)
        else:
            logger.debug("Freeze of unknown manager: %s", who)

        self._events.publish(AccessEvent(kind=EventKind.MANAGER_REMOVED, address=who))

    def rename(self, address: str, name: str) -> ManagerRecord:
        """Replace the stored display name of an existing record.

        Raises:
            InvalidAddressError: null or malformed address.
            UnknownManagerError: no record was ever created for the address.
        """
        who = require_address(address)
        record = self._records.get(who)
        if record is None:
            raise UnknownManagerError(f"No manager record for {who}", address=who)
        record = replace(record, name=name)
        self._records[who] = record
        logger.info("Manager renamed: %s name=%r", who, name)
        self._events.publish(AccessEvent(kind=EventKind.MANAGER_RENAMED, address=who, name=name))
        return record

    def is_manager(self, address: Optional[str]) -> bool:
        who = normalize_address(address)
        if who is None:
            return False
        record = self._records.get(who)
        return record is not None and record.enabled

    def get(self, address: Optional[str]) -> Optional[ManagerRecord]:
        who = normalize_address(address)
        return self._records.get(who) if who else None

    def enumerate(self) -> tuple[str, ...]:
        """Every address ever admitted, in admission order, frozen ones included."""
        return tuple(self._records)

    def active(self) -> tuple[str, ...]:
        return tuple(who for who, record in self._records.items() if record.enabled)

    def __iter__(self) -> Iterator[ManagerRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)


__all__ = [
    "ManagerRecord",
    "ManagerRegistry",
]
