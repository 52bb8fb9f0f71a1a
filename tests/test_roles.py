"""Tests for role identifiers, domain actions and override values."""

from __future__ import annotations

import hashlib

import pytest

from tldaccess import (
    DOMAIN_REGISTRANT_ROLE,
    TLD_MANAGER_ROLE,
    TLDS_MANAGER_ROLE,
    DomainAction,
    RequiredActions,
    Role,
    TLDPermissionOverride,
    role_id,
)
from tldaccess.permissions import ROLE_PRECEDENCE


class TestRoleIds:
    def test_stable_hash(self) -> None:
        expected = "0x" + hashlib.sha3_256(b"TLD_MANAGER_ROLE").hexdigest()
        assert role_id("TLD_MANAGER_ROLE") == expected
        assert TLD_MANAGER_ROLE == expected

    def test_format(self) -> None:
        for rid in (DOMAIN_REGISTRANT_ROLE, TLD_MANAGER_ROLE, TLDS_MANAGER_ROLE):
            assert rid.startswith("0x")
            assert len(rid) == 66

    def test_unique(self) -> None:
        assert len({DOMAIN_REGISTRANT_ROLE, TLD_MANAGER_ROLE, TLDS_MANAGER_ROLE}) == 3

    def test_empty_label_rejected(self) -> None:
        with pytest.raises(ValueError):
            role_id("")


class TestRole:
    def test_ordering(self) -> None:
        assert Role.TLDS_MANAGER > Role.TLD_MANAGER > Role.DOMAIN_REGISTRANT
        assert ROLE_PRECEDENCE == (Role.TLDS_MANAGER, Role.TLD_MANAGER, Role.DOMAIN_REGISTRANT)

    def test_ids_and_labels(self) -> None:
        assert Role.TLD_MANAGER.id == TLD_MANAGER_ROLE
        assert Role.TLDS_MANAGER.label == "TLDS_MANAGER_ROLE"
        assert Role.from_id(DOMAIN_REGISTRANT_ROLE) is Role.DOMAIN_REGISTRANT

    def test_unknown_id(self) -> None:
        with pytest.raises(ValueError):
            Role.from_id(role_id("SOMETHING_ELSE"))


class TestRequiredActions:
    def test_of(self) -> None:
        actions = RequiredActions.of(DomainAction.ADD, DomainAction.TRANSFER)
        assert actions.as_flags() == (True, False, True)

    def test_everything(self) -> None:
        assert RequiredActions.everything().as_flags() == (True, True, True)

    def test_unknown_action(self) -> None:
        with pytest.raises(ValueError, match="Unknown domain action"):
            RequiredActions.of("delete")


class TestTLDPermissionOverride:
    def test_unset(self) -> None:
        unset = TLDPermissionOverride.unset()
        assert tuple(unset) == (False, False, False, False)
        assert unset == TLDPermissionOverride()

    def test_permits(self) -> None:
        override = TLDPermissionOverride.allow(add=False, release=True, transfer=True)
        assert override.permits(True, False, False) is False
        assert override.permits(False, True, False) is True
        assert override.permits(False, True, True) is True
        assert override.permits(False, False, False) is True

    def test_frozen(self) -> None:
        with pytest.raises(Exception):
            TLDPermissionOverride.unset().can_add = True  # type: ignore[misc]
