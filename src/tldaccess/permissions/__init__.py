"""Role identifiers, domain actions, overrides and the permission resolver.

Defines:
- Role ids: hashed labels for the three recognized roles
- DomainAction / RequiredActions: add, release, transfer
- TLDPermissionOverride: explicit per-TLD flags for one account
- PermissionResolver: the authorization queries
- Policy helpers: all-TLDs-manager bypass and owner override
"""

from .actions import DomainAction, RequiredActions
from .override import TLDPermissionOverride
from .policy import (
    can_administer_tld,
    can_override_owner,
    can_perform_domain_action,
    effective_role,
)
from .resolver import PermissionResolver
from .roles import (
    DOMAIN_REGISTRANT_ROLE,
    ROLE_PRECEDENCE,
    TLD_MANAGER_ROLE,
    TLDS_MANAGER_ROLE,
    Role,
    role_id,
)

__all__ = [
    "DOMAIN_REGISTRANT_ROLE",
    "ROLE_PRECEDENCE",
    "TLDS_MANAGER_ROLE",
    "TLD_MANAGER_ROLE",
    "DomainAction",
    "PermissionResolver",
    "RequiredActions",
    "Role",
    "TLDPermissionOverride",
    "can_administer_tld",
    "can_override_owner",
    "can_perform_domain_action",
    "effective_role",
    "role_id",
]
