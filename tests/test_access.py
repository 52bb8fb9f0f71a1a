"""Tests for the AccessControl facade."""

from __future__ import annotations

import threading
from typing import Callable, Optional
from unittest.mock import MagicMock, patch

import pytest

from conftest import ALICE, BOB, TLD
from tldaccess import (
    DOMAIN_REGISTRANT_ROLE,
    TLD_MANAGER_ROLE,
    TLDS_MANAGER_ROLE,
    AccessConfig,
    AccessControl,
    ConfigurationError,
    EventKind,
    PermissionDeniedError,
    TLDPermissionOverride,
)
from tldaccess.stores import (
    InMemoryPermissionOverrideStore,
    InMemoryRoleStore,
    PermissionOverrideStore,
    RedisPermissionOverrideStore,
    RedisRoleStore,
    RoleMembershipStore,
    TLDOwnershipStore,
)


class TestConvenienceQueries:
    def test_domain_actions(self, access: AccessControl) -> None:
        access.grant_role(DOMAIN_REGISTRANT_ROLE, ALICE)
        access.set_override(TLD, ALICE, add=True, release=False, transfer=True)
        assert access.can_add_domain(TLD, ALICE) is True
        assert access.can_release_domain(TLD, ALICE) is False
        assert access.can_transfer_domain(TLD, ALICE) is True

    def test_tlds_manager_bypasses_domain_actions(self, access: AccessControl) -> None:
        access.grant_role(TLDS_MANAGER_ROLE, BOB)
        assert access.can_add_domain(TLD, BOB) is True
        assert access.can_release_domain(TLD, BOB) is True
        assert access.can_transfer_domain(TLD, BOB) is True
        assert access.can_administer_tld(TLD, BOB) is True

    def test_is_manager(self, access: AccessControl) -> None:
        access.admit_manager(ALICE, "Alice")
        assert access.is_manager(ALICE) is True
        access.freeze_manager(ALICE)
        assert access.is_manager(ALICE) is False


class TestGuards:
    def test_require_domain_action_denied(self, access: AccessControl) -> None:
        with pytest.raises(PermissionDeniedError) as exc_info:
            access.require_domain_action(TLD, ALICE, add=True)
        assert exc_info.value.code == "PERMISSION_DENIED"
        assert exc_info.value.details["tld"] == TLD
        assert exc_info.value.details["add"] is True

    def test_require_domain_action_allowed(self, access: AccessControl) -> None:
        access.grant_role(DOMAIN_REGISTRANT_ROLE, ALICE)
        access.set_override(TLD, ALICE, add=True, release=True, transfer=True)
        access.require_domain_action(TLD, ALICE, add=True, release=True, transfer=True)

    def test_require_tld_admin(self, access: AccessControl) -> None:
        with pytest.raises(PermissionDeniedError):
            access.require_tld_admin(TLD, ALICE)
        access.grant_role(TLD_MANAGER_ROLE, ALICE)
        access.set_tld_manager(TLD, ALICE, True)
        access.require_tld_admin(TLD, ALICE)

    def test_require_tlds_manager(self, access: AccessControl) -> None:
        with pytest.raises(PermissionDeniedError):
            access.require_tlds_manager(None)
        access.grant_role(TLDS_MANAGER_ROLE, ALICE)
        access.require_tlds_manager(ALICE)


class TestEvents:
    def test_admin_actions_publish_in_order(self, access: AccessControl) -> None:
        seen = []
        access.events.subscribe(lambda e: seen.append((e.kind, e.address)))
        access.admit_manager(ALICE, "Alice")
        access.set_default_registrant(ALICE, True)
        access.set_default_registrant(ALICE, False)
        access.freeze_manager(ALICE)
        assert seen == [
            (EventKind.MANAGER_ADDED, ALICE),
            (EventKind.DEFAULT_MEMBER_ADDED, ALICE),
            (EventKind.DEFAULT_MEMBER_REMOVED, ALICE),
            (EventKind.MANAGER_REMOVED, ALICE),
        ]


class _WriterStartingOverrideStore(InMemoryPermissionOverrideStore):
    """Override store that launches a concurrent write from inside a lookup."""

    def __init__(self) -> None:
        super().__init__()
        self.write: Optional[Callable[[], None]] = None
        self.writer: Optional[threading.Thread] = None
        self.finished_during_lookup: Optional[bool] = None

    def has_explicit_tld_permission(self, tld: int, address: str) -> TLDPermissionOverride:
        if self.write is not None and self.writer is None:
            self.writer = threading.Thread(target=self.write)
            self.writer.start()
            self.writer.join(timeout=0.2)
            self.finished_during_lookup = not self.writer.is_alive()
        return super().has_explicit_tld_permission(tld, address)


class TestSerialization:
    @pytest.mark.parametrize(
        "write",
        [
            lambda access: access.revoke_role(DOMAIN_REGISTRANT_ROLE, ALICE),
            lambda access: access.grant_role(TLDS_MANAGER_ROLE, BOB),
            lambda access: access.set_tld_manager(TLD, BOB, True),
            lambda access: access.set_override(TLD, ALICE, add=False, release=False, transfer=False),
            lambda access: access.clear_override(TLD, ALICE),
        ],
    )
    def test_store_write_waits_for_running_query(self, write) -> None:
        """A store write issued mid-query only lands after the query returns."""
        overrides = _WriterStartingOverrideStore()
        access = AccessControl(overrides=overrides)
        access.grant_role(DOMAIN_REGISTRANT_ROLE, ALICE)
        access.set_override(TLD, ALICE, add=True, release=False, transfer=False)
        overrides.write = lambda: write(access)

        assert access.is_domain_registrant(TLD, ALICE, require_add=True) is True

        overrides.writer.join(timeout=5)
        assert overrides.finished_during_lookup is False
        assert not overrides.writer.is_alive()

    def test_revoke_applies_after_query(self) -> None:
        overrides = _WriterStartingOverrideStore()
        access = AccessControl(overrides=overrides)
        access.grant_role(DOMAIN_REGISTRANT_ROLE, ALICE)
        access.set_override(TLD, ALICE, add=True, release=False, transfer=False)
        overrides.write = lambda: access.revoke_role(DOMAIN_REGISTRANT_ROLE, ALICE)

        assert access.is_domain_registrant(TLD, ALICE, require_add=True) is True
        overrides.writer.join(timeout=5)
        assert access.is_domain_registrant(TLD, ALICE, require_add=True) is False

    def test_concurrent_admissions(self, access: AccessControl) -> None:
        """Parallel admin actions leave consistent, duplicate-free state."""
        from conftest import addr

        addresses = [addr(i) for i in range(1, 41)]

        def _work(who: str) -> None:
            access.admit_manager(who)
            access.set_default_registrant(who, True)
            access.set_default_registrant(who, False)
            access.set_default_registrant(who, True)

        threads = [threading.Thread(target=_work, args=(who,)) for who in addresses]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        listed = access.defaults.domain_registrants.enumerate()
        assert sorted(listed) == sorted(addresses)
        assert all(access.defaults.domain_registrants.is_member(who) for who in addresses)


class TestFromConfig:
    def test_memory_backend(self) -> None:
        access = AccessControl.from_config(AccessConfig())
        assert isinstance(access.roles, InMemoryRoleStore)
        assert isinstance(access.roles, RoleMembershipStore)
        assert isinstance(access.ownership, TLDOwnershipStore)
        assert isinstance(access.overrides, PermissionOverrideStore)

    def test_event_history_size(self) -> None:
        access = AccessControl.from_config(AccessConfig(event_history_size=1))
        access.admit_manager(ALICE)
        access.admit_manager(BOB)
        assert [e.address for e in access.events.history()] == [BOB]

    def test_redis_backend_requires_url(self) -> None:
        with pytest.raises(ConfigurationError):
            AccessControl.from_config(AccessConfig(store_backend="redis"))

    def test_redis_backend_with_client(self) -> None:
        client = MagicMock()
        client.sismember.return_value = True
        client.hget.return_value = None
        access = AccessControl.from_config(
            AccessConfig(store_backend="redis", key_prefix="reg"),
            redis_client=client,
        )
        assert isinstance(access.roles, RedisRoleStore)
        assert isinstance(access.overrides, RedisPermissionOverrideStore)
        assert access.is_tlds_manager(ALICE) is True
        client.sismember.assert_called_with(f"reg:roles:{TLDS_MANAGER_ROLE}", ALICE)

    def test_redis_backend_from_url(self) -> None:
        client = MagicMock()
        with patch("redis.from_url", return_value=client) as from_url:
            access = AccessControl.from_config(
                AccessConfig(store_backend="redis", redis_url="redis://localhost:6379/0"),
            )
        from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
        assert isinstance(access.roles, RedisRoleStore)
