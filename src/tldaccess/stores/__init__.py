"""Role membership, TLD ownership and permission override stores.

- ``interfaces``: the protocols the resolver reads through.
- ``memory``: process-local implementations.
- ``redis_store``: shared Redis implementations.
"""

from .interfaces import (
    PermissionOverrideStore,
    RoleMembershipStore,
    TLDOwnershipStore,
)
from .memory import (
    InMemoryPermissionOverrideStore,
    InMemoryRoleStore,
    InMemoryTLDOwnershipStore,
)
from .redis_store import (
    RedisPermissionOverrideStore,
    RedisRoleStore,
    RedisTLDOwnershipStore,
)

__all__ = [
    "InMemoryPermissionOverrideStore",
    "InMemoryRoleStore",
    "InMemoryTLDOwnershipStore",
    "PermissionOverrideStore",
    "RedisPermissionOverrideStore",
    "RedisRoleStore",
    "RedisTLDOwnershipStore",
    "RoleMembershipStore",
    "TLDOwnershipStore",
]
