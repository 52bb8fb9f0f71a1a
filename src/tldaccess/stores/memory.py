"""Process-local store implementations."""

from __future__ import annotations

import logging
from collections import defaultdict

from ..addresses import normalize_address, require_address
from ..permissions.override import TLDPermissionOverride

logger = logging.getLogger(__name__)


class InMemoryRoleStore:
    def __init__(self) -> None:
        self._members: defaultdict[str, set[str]] = defaultdict(set)

    def has_role(self, role: str, address: str) -> bool:
        who = normalize_address(address)
        return who is not None and who in self._members.get(role, ())

    def grant_role(self, role: str, address: str) -> None:
        who = require_address(address)
        self._members[role].add(who)
        logger.info("Role granted: %s -> %s", role[:10], who)

    def revoke_role(self, role: str, address: str) -> None:
        who = require_address(address)
        self._members[role].discard(who)
        logger.info("Role revoked: %s -> %s", role[:10], who)

    def members(self, role: str) -> frozenset[str]:
        return frozenset(self._members.get(role, ()))


class InMemoryTLDOwnershipStore:
    def __init__(self) -> None:
        self._managers: defaultdict[int, set[str]] = defaultdict(set)

    def manages_the_tld(self, tld: int, address: str) -> bool:
        who = normalize_address(address)
        return who is not None and who in self._managers.get(tld, ())

    def set_tld_manager(self, tld: int, address: str, enabled: bool) -> None:
        who = require_address(address)
        if enabled:
            self._managers[tld].add(who)
        else:
            self._managers[tld].discard(who)
        logger.info("TLD %s manager %s: %s", tld, "assigned" if enabled else "unassigned", who)

    def managers(self, tld: int) -> frozenset[str]:
        return frozenset(self._managers.get(tld, ()))


class InMemoryPermissionOverrideStore:
    def __init__(self) -> None:
        self._overrides: dict[tuple[int, str], TLDPermissionOverride] = {}

    def has_explicit_tld_permission(self, tld: int, address: str) -> TLDPermissionOverride:
        who = normalize_address(address)
        if who is None:
            return TLDPermissionOverride.unset()
        return self._overrides.get((tld, who), TLDPermissionOverride.unset())

    def set_override(
        self,
        tld: int,
        address: str,
        *,
        add: bool,
        release: bool,
        transfer: bool,
    ) -> TLDPermissionOverride:
        who = require_address(address)
        override = TLDPermissionOverride.allow(add=add, release=release, transfer=transfer)
        self._overrides[(tld, who)] = override
        logger.info("Override set on TLD %s for %s: add=%s release=%s transfer=%s", tld, who, add, release, transfer)
        return override

    def clear_override(self, tld: int, address: str) -> None:
        who = require_address(address)
        self._overrides.pop((tld, who), None)
        logger.info("Override cleared on TLD %s for %s", tld, who)


__all__ = [
    "InMemoryPermissionOverrideStore",
    "InMemoryRoleStore",
    "InMemoryTLDOwnershipStore",
]
