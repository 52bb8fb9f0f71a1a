"""Shared fixtures for tldaccess tests."""

from __future__ import annotations

import pytest

from tldaccess import AccessControl, EventBus


def addr(n: int) -> str:
    """Deterministic non-zero test address."""
    return "0x" + f"{n:040x}"


ALICE = addr(0xA11CE)
BOB = addr(0xB0B)
CAROL = addr(0xCA201)
TLD = 7
OTHER_TLD = 8


@pytest.fixture
def events() -> EventBus:
    return EventBus(history_size=100)


@pytest.fixture
def access(events: EventBus) -> AccessControl:
    return AccessControl(events=events, clock=lambda: 1_700_000_000.0)
