"""Default groups: accounts whose membership applies across every TLD.

Each group keeps an append-only enumeration list and a flag map. Removing a
member flips its flag; the address stays in the list so the group's history
remains enumerable. Callers wanting the current members must filter with
:meth:`DefaultGroup.is_member` or use :meth:`DefaultGroup.active`.
"""

from __future__ import annotations

import logging
from typing import Optional

from .addresses import normalize_address, require_address
from .events import AccessEvent, EventBus, EventKind, GroupKind

logger = logging.getLogger(__name__)


class DefaultGroup:
    """One toggleable membership set.

    Does not check the manager precondition; that is done once, on first
    admission, by :class:`~tldaccess.access.AccessControl`.
    """

    def __init__(self, kind: GroupKind, events: Optional[EventBus] = None) -> None:
        self.kind = kind
        self._events = events or EventBus()
        self._members: dict[str, bool] = {}
        self._listed: list[str] = []
        self._listed_set: set[str] = set()

    def set_member(self, address: str, enabled: bool) -> None:
        """Enable or disable membership.

        The first ``enabled=True`` call for an address appends it to the
        enumeration list; later calls only flip the flag.

        Raises:
            InvalidAddressError: null or malformed address.
        """
        who = require_address(address)
        if enabled and who not in self._listed_set:
            self._listed.append(who)
            self._listed_set.add(who)
        self._members[who] = enabled

        kind = EventKind.DEFAULT_MEMBER_ADDED if enabled else EventKind.DEFAULT_MEMBER_REMOVED
        logger.info("Default %s %s: %s", self.kind.value, "enabled" if enabled else "disabled", who)
        self._events.publish(AccessEvent(kind=kind, address=who, group=self.kind))

    def is_member(self, address: Optional[str]) -> bool:
        who = normalize_address(address)
        return bool(who) and self._members.get(who, False)

    def is_listed(self, address: Optional[str]) -> bool:
        """True once the address has ever been enabled in this group."""
        who = normalize_address(address)
        return who is not None and who in self._listed_set

    def enumerate(self) -> tuple[str, ...]:
        """Every address ever enabled, in first-admission order, disabled ones included."""
        return tuple(self._listed)

    def active(self) -> tuple[str, ...]:
        return tuple(who for who in self._listed if self._members.get(who, False))

    def __len__(self) -> int:
        return len(self._listed)


class DefaultGroupRegistry:
    """The two default groups: domain registrants and TLD managers."""

    def __init__(self, events: Optional[EventBus] = None) -> None:
        self.domain_registrants = DefaultGroup(GroupKind.DOMAIN_REGISTRANTS, events)
        self.tld_managers = DefaultGroup(GroupKind.TLD_MANAGERS, events)

    def __getitem__(self, kind: GroupKind) -> DefaultGroup:
        if kind == GroupKind.DOMAIN_REGISTRANTS:
            return self.domain_registrants
        if kind == GroupKind.TLD_MANAGERS:
            return self.tld_managers
        raise KeyError(kind)


__all__ = [
    "DefaultGroup",
    "DefaultGroupRegistry",
]
