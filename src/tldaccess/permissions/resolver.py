"""Permission resolver: the three authorization queries of the registry.

Combines role membership, default-group membership, TLD ownership and
explicit per-TLD overrides into boolean decisions. The resolver holds no
state of its own and caches nothing: the same store contents always give the
same answers.

Precedence for domain actions:

1. no domain-registrant role → denied
2. explicit override on the TLD → the override flags alone decide
3. otherwise → default domain-registrant membership decides all actions

The all-TLDs-manager bypass is NOT applied by :meth:`is_tld_manager` or
:meth:`is_domain_registrant`; callers check :meth:`is_tlds_manager` first
(see :mod:`tldaccess.permissions.policy`).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..addresses import normalize_address
from .override import TLDPermissionOverride
from .roles import DOMAIN_REGISTRANT_ROLE, TLD_MANAGER_ROLE, TLDS_MANAGER_ROLE

if TYPE_CHECKING:
    from ..defaults import DefaultGroupRegistry
    from ..stores.interfaces import (
        PermissionOverrideStore,
        RoleMembershipStore,
        TLDOwnershipStore,
    )

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Read-only decision functions over the four stores.

    Args:
        roles: Role membership store.
        defaults: The two default groups.
        ownership: Per-TLD manager assignments.
        overrides: Explicit per-TLD permission overrides.
    """

    def __init__(
        self,
        roles: RoleMembershipStore,
        defaults: DefaultGroupRegistry,
        ownership: TLDOwnershipStore,
        overrides: PermissionOverrideStore,
    ) -> None:
        self._roles = roles
        self._defaults = defaults
        self._ownership = ownership
        self._overrides = overrides

    def is_tlds_manager(self, who: Optional[str]) -> bool:
        """Account manages every TLD."""
        address = normalize_address(who)
        if address is None:
            return False
        return self._roles.has_role(TLDS_MANAGER_ROLE, address)

    def is_tld_manager(self, tld: int, who: Optional[str]) -> bool:
        """Account manages ``tld``.

        Requires the TLD-manager role AND either default TLD-manager
        membership or an assignment to this specific TLD. Removing the role
        denies every TLD regardless of assignments.
        """
        address = normalize_address(who)
        if address is None:
            return False
        if not self._roles.has_role(TLD_MANAGER_ROLE, address):
            return False
        allowed = self._defaults.tld_managers.is_member(address) or self._ownership.manages_the_tld(tld, address)
        logger.debug("is_tld_manager tld=%s who=%s -> %s", tld, address, allowed)
        return allowed

    def is_domain_registrant(
        self,
        tld: int,
        who: Optional[str],
        require_add: bool = False,
        require_release: bool = False,
        require_transfer: bool = False,
    ) -> bool:
        """Account may perform the required domain actions under ``tld``.

        An explicit override is authoritative for the TLD: default-group
        membership is not consulted. Every required action must be permitted
        by its flag; actions not required are ignored. Without an override,
        default membership grants all three actions alike.

        Example::

            store.set_override(7, who, add=False, release=True, transfer=True)
            resolver.is_domain_registrant(7, who, require_add=True)      # False
            resolver.is_domain_registrant(7, who, require_release=True)  # True
        """
        address = normalize_address(who)
        if address is None:
            return False
        if not self._roles.has_role(DOMAIN_REGISTRANT_ROLE, address):
            return False

        override = self._overrides.has_explicit_tld_permission(tld, address)
        if override.explicit:
            allowed = override.permits(require_add, require_release, require_transfer)
            source = "override"
        else:
            allowed = self._defaults.domain_registrants.is_member(address)
            source = "default"

        logger.debug(
            "is_domain_registrant tld=%s who=%s add=%s release=%s transfer=%s -> %s (%s)",
            tld,
            address,
            require_add,
            require_release,
            require_transfer,
            allowed,
            source,
        )
        return allowed

    def has_explicit_tld_permission(self, tld: int, who: Optional[str]) -> TLDPermissionOverride:
        """Raw override lookup; ``explicit=False`` means no override is set."""
        address = normalize_address(who)
        if address is None:
            return TLDPermissionOverride.unset()
        return self._overrides.has_explicit_tld_permission(tld, address)


__all__ = ["PermissionResolver"]
