"""AccessControl: one entry point for registry operations.

Wires the manager registry, the default groups, the external stores and the
resolver, and serializes every query and mutation behind a single re-entrant
lock. A query therefore never observes a half-applied admin action, and no
two admin actions interleave. Store writes (role grants, TLD assignments,
overrides) go through the facade methods so they take the same lock; the
``roles``, ``ownership`` and ``overrides`` attributes are for wiring and
inspection only.

Usage::

    access = AccessControl.from_config(load_access_config_from_env())

    access.admit_manager(alice, "Alice")
    access.set_default_registrant(alice, True)
    access.grant_role(DOMAIN_REGISTRANT_ROLE, alice)
    access.set_override(tld, alice, add=True, release=False, transfer=False)

    access.require_domain_action(tld, alice, add=True)  # raises PermissionDeniedError
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from .addresses import require_address
from .config import AccessConfig, StoreBackend
from .defaults import DefaultGroup, DefaultGroupRegistry
from .events import EventBus
from .exceptions import ConfigurationError, NotAManagerError, PermissionDeniedError
from .managers import ManagerRecord, ManagerRegistry
from .permissions.actions import RequiredActions
from .permissions.override import TLDPermissionOverride
from .permissions.policy import can_administer_tld, can_override_owner, can_perform_domain_action
from .permissions.resolver import PermissionResolver
from .stores.memory import (
    InMemoryPermissionOverrideStore,
    InMemoryRoleStore,
    InMemoryTLDOwnershipStore,
)
from .stores.redis_store import (
    RedisPermissionOverrideStore,
    RedisRoleStore,
    RedisTLDOwnershipStore,
    connect,
)

logger = logging.getLogger(__name__)


class AccessControl:
    """Serialized facade over the access-control components.

    Args:
        roles: Role membership store (default: in-memory).
        ownership: TLD ownership store (default: in-memory).
        overrides: Permission override store (default: in-memory).
        events: Notification bus shared by managers and default groups.
        clock: Timestamp source for manager records.
    """

    def __init__(
        self,
        roles: Any = None,
        ownership: Any = None,
        overrides: Any = None,
        *,
        events: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._lock = threading.RLock()
        self.events = events or EventBus()
        self.roles = roles if roles is not None else InMemoryRoleStore()
        self.ownership = ownership if ownership is not None else InMemoryTLDOwnershipStore()
        self.overrides = overrides if overrides is not None else InMemoryPermissionOverrideStore()
        self.managers = ManagerRegistry(self.events, clock=clock)
        self.defaults = DefaultGroupRegistry(self.events)
        self.resolver = PermissionResolver(self.roles, self.defaults, self.ownership, self.overrides)

    @classmethod
    def from_config(cls, config: AccessConfig, *, redis_client: Any = None) -> "AccessControl":
        """Build with the store backend selected by ``config``.

        Args:
            config: Access configuration.
            redis_client: Pre-built Redis client (default: opened from ``config.redis_url``).

        Raises:
            ConfigurationError: redis backend selected without a Redis URL or client.
        """
        events = EventBus(history_size=config.event_history_size)

        if config.store_backend == StoreBackend.REDIS:
            if redis_client is None:
                if not config.redis_url:
                    raise ConfigurationError(
                        "store_backend=redis requires REDIS_URL",
                        store_backend=str(config.store_backend),
                    )
                redis_client = connect(config.redis_url)

            logger.info("AccessControl using Redis stores (prefix=%s)", config.key_prefix)
            return cls(
                roles=RedisRoleStore(redis_client, config.key_prefix),
                ownership=RedisTLDOwnershipStore(redis_client, config.key_prefix),
                overrides=RedisPermissionOverrideStore(redis_client, config.key_prefix),
                events=events,
            )

        logger.info("AccessControl using in-memory stores")
        return cls(events=events)

    # ── Queries ──────────────────────────────────────────────

    def is_tlds_manager(self, who: Optional[str]) -> bool:
        with self._lock:
            return self.resolver.is_tlds_manager(who)

    def is_tld_manager(self, tld: int, who: Optional[str]) -> bool:
        with self._lock:
            return self.resolver.is_tld_manager(tld, who)

    def is_domain_registrant(
        self,
        tld: int,
        who: Optional[str],
        require_add: bool = False,
        require_release: bool = False,
        require_transfer: bool = False,
    ) -> bool:
        with self._lock:
            return self.resolver.is_domain_registrant(tld, who, require_add, require_release, require_transfer)

    def has_explicit_tld_permission(self, tld: int, who: Optional[str]) -> TLDPermissionOverride:
        with self._lock:
            return self.resolver.has_explicit_tld_permission(tld, who)

    def is_manager(self, who: Optional[str]) -> bool:
        with self._lock:
            return self.managers.is_manager(who)

    def can_add_domain(self, tld: int, who: Optional[str]) -> bool:
        return self._can(tld, who, RequiredActions(add=True))

    def can_release_domain(self, tld: int, who: Optional[str]) -> bool:
        return self._can(tld, who, RequiredActions(release=True))

    def can_transfer_domain(self, tld: int, who: Optional[str]) -> bool:
        return self._can(tld, who, RequiredActions(transfer=True))

    def can_administer_tld(self, tld: int, who: Optional[str]) -> bool:
        with self._lock:
            return can_administer_tld(self.resolver, tld, who)

    def can_override_owner(self, tld: int, actor: Optional[str], owner: Optional[str]) -> bool:
        with self._lock:
            return can_override_owner(self.resolver, tld, actor, owner)

    def _can(self, tld: int, who: Optional[str], actions: RequiredActions) -> bool:
        with self._lock:
            return can_perform_domain_action(self.resolver, tld, who, actions)

    # ── Admin mutations ──────────────────────────────────────

    def admit_manager(self, address: str, name: Optional[str] = None) -> ManagerRecord:
        with self._lock:
            return self.managers.admit(address, name)

    def freeze_manager(self, address: str) -> None:
        with self._lock:
            self.managers.freeze(address)

    def rename_manager(self, address: str, name: str) -> ManagerRecord:
        with self._lock:
            return self.managers.rename(address, name)

    def set_default_registrant(self, address: str, enabled: bool) -> None:
        """Toggle default domain-registrant membership (all TLDs)."""
        self._set_default(self.defaults.domain_registrants, address, enabled)

    def set_default_tld_manager(self, address: str, enabled: bool) -> None:
        """Toggle default TLD-manager membership (all TLDs)."""
        self._set_default(self.defaults.tld_managers, address, enabled)

    def _set_default(self, group: DefaultGroup, address: str, enabled: bool) -> None:
        # Only the first admission to a group is checked against the manager registry.
        with self._lock:
            who = require_address(address)
            if enabled and not group.is_listed(who) and not self.managers.is_manager(who):
                raise NotAManagerError(
                    f"{who} must be an enabled manager before joining {group.kind.value}",
                    address=who,
                    group=group.kind.value,
                )
            group.set_member(who, enabled)

    # ── Store mutations ──────────────────────────────────────

    def grant_role(self, role: str, address: str) -> None:
        with self._lock:
            self.roles.grant_role(role, address)

    def revoke_role(self, role: str, address: str) -> None:
        with self._lock:
            self.roles.revoke_role(role, address)

    def set_tld_manager(self, tld: int, address: str, enabled: bool) -> None:
        """Assign or unassign ``address`` as a manager of one TLD."""
        with self._lock:
            self.ownership.set_tld_manager(tld, address, enabled)

    def set_override(
        self,
        tld: int,
        address: str,
        *,
        add: bool,
        release: bool,
        transfer: bool,
    ) -> TLDPermissionOverride:
        """Store an explicit per-TLD override; it replaces default membership for ``address``."""
        with self._lock:
            return self.overrides.set_override(tld, address, add=add, release=release, transfer=transfer)

    def clear_override(self, tld: int, address: str) -> None:
        with self._lock:
            self.overrides.clear_override(tld, address)

    # ── Guards ───────────────────────────────────────────────

    def require_tlds_manager(self, who: Optional[str]) -> None:
        """Raises PermissionDeniedError unless ``who`` manages every TLD."""
        if not self.is_tlds_manager(who):
            self._deny("tlds_manager", who)

    def require_tld_admin(self, tld: int, who: Optional[str]) -> None:
        """Raises PermissionDeniedError unless ``who`` may administer ``tld``."""
        if not self.can_administer_tld(tld, who):
            self._deny("tld_admin", who, tld=tld)

    def require_domain_action(
        self,
        tld: int,
        who: Optional[str],
        *,
        add: bool = False,
        release: bool = False,
        transfer: bool = False,
    ) -> None:
        """Raises PermissionDeniedError unless ``who`` may perform the actions under ``tld``."""
        actions = RequiredActions(add=add, release=release, transfer=transfer)
        if not self._can(tld, who, actions):
            self._deny("domain_action", who, tld=tld, add=add, release=release, transfer=transfer)

    def _deny(self, check: str, who: Optional[str], **details: Any) -> None:
        logger.warning("Access denied: check=%s who=%s details=%s", check, who, details)
        raise PermissionDeniedError(f"{who} is not authorized ({check})", check=check, address=who, **details)


__all__ = ["AccessControl"]
