"""Admin notifications for external audit consumers.

Every manager admission, freeze and rename, and every default-group toggle
publishes an :class:`AccessEvent` on an :class:`EventBus`. Listeners are
plain callables invoked synchronously, in subscription order, after the
state change has been applied.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    MANAGER_ADDED = "manager_added"
    MANAGER_REMOVED = "manager_removed"
    MANAGER_RENAMED = "manager_renamed"
    DEFAULT_MEMBER_ADDED = "default_member_added"
    DEFAULT_MEMBER_REMOVED = "default_member_removed"


class GroupKind(str, Enum):
    """The two default groups; both apply across all TLDs."""

    DOMAIN_REGISTRANTS = "domain_registrants"
    TLD_MANAGERS = "tld_managers"


class AccessEvent(BaseModel):
    """A single Added/Removed notification.

    ``name`` is set for manager events and carries the name actually stored,
    which may differ from the one supplied by the caller. ``group`` is set for
    default-group events.
    """

    model_config = {"frozen": True}

    kind: EventKind
    address: str
    name: Optional[str] = None
    group: Optional[GroupKind] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


Listener = Callable[[AccessEvent], None]


class EventBus:
    """Synchronous fan-out of :class:`AccessEvent` to listeners.

    Args:
        history_size: How many recent events to retain for :meth:`history`.
            ``0`` disables retention.
    """

    def __init__(self, history_size: int = 0) -> None:
        self._listeners: list[Listener] = []
        self._history: deque[AccessEvent] = deque(maxlen=history_size or None)
        self._retain = history_size > 0

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, event: AccessEvent) -> None:
        """Deliver to every listener.

        A listener that raises is logged and skipped; the state change that
        produced the event is already committed and stays committed.
        """
        if self._retain:
            self._history.append(event)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener %r failed on %s", listener, event.kind.value)

    def history(self, kind: Optional[EventKind] = None) -> list[AccessEvent]:
        """Retained events, oldest first, optionally filtered by kind."""
        if kind is None:
            return list(self._history)
        return [e for e in self._history if e.kind == kind]


__all__ = [
    "AccessEvent",
    "EventBus",
    "EventKind",
    "GroupKind",
    "Listener",
]
