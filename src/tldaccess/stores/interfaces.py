"""Store interfaces consumed by the resolver.

The resolver only reads. Writes go through the concrete implementations
(:mod:`tldaccess.stores.memory`, :mod:`tldaccess.stores.redis_store`), driven
by whoever owns role grants, TLD assignment and overrides in the registry.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..permissions.override import TLDPermissionOverride


@runtime_checkable
class RoleMembershipStore(Protocol):
    """Does an account hold a role (by hashed role id)."""

    def has_role(self, role: str, address: str) -> bool: ...


@runtime_checkable
class TLDOwnershipStore(Protocol):
    """Is an account assigned as manager of a specific TLD."""

    def manages_the_tld(self, tld: int, address: str) -> bool: ...


@runtime_checkable
class PermissionOverrideStore(Protocol):
    """Explicit per-(TLD, account) add/release/transfer flags."""

    def has_explicit_tld_permission(self, tld: int, address: str) -> TLDPermissionOverride: ...


__all__ = [
    "PermissionOverrideStore",
    "RoleMembershipStore",
    "TLDOwnershipStore",
]
