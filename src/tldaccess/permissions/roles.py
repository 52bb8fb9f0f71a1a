"""Role identifiers and the role hierarchy.

Role identifiers are derived by hashing a human-readable label, so every
store and every service agrees on the same opaque id without a shared table::

    role_id("TLD_MANAGER_ROLE")  # "0x…" (64 hex digits)

Hierarchy (by convention of whoever grants roles, NOT enforced by stores):
``TLDS_MANAGER`` > ``TLD_MANAGER`` > ``DOMAIN_REGISTRANT``.
"""

from __future__ import annotations

import hashlib
from enum import IntEnum


def role_id(label: str) -> str:
    """Stable identifier for a role label (SHA3-256 over UTF-8, hex encoded)."""
    if not label:
        raise ValueError("Role label must be a non-empty string")
    return "0x" + hashlib.sha3_256(label.encode("utf-8")).hexdigest()


DOMAIN_REGISTRANT_LABEL = "DOMAIN_REGISTRANT_ROLE"
TLD_MANAGER_LABEL = "TLD_MANAGER_ROLE"
TLDS_MANAGER_LABEL = "TLDS_MANAGER_ROLE"

DOMAIN_REGISTRANT_ROLE = role_id(DOMAIN_REGISTRANT_LABEL)
TLD_MANAGER_ROLE = role_id(TLD_MANAGER_LABEL)
TLDS_MANAGER_ROLE = role_id(TLDS_MANAGER_LABEL)


class Role(IntEnum):
    """Recognized roles with numeric ordering.

    Higher values are meant to imply lower ones. Gaps allow future role
    insertion without renumbering.
    """

    DOMAIN_REGISTRANT = 10
    TLD_MANAGER = 20
    TLDS_MANAGER = 30

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def id(self) -> str:
        return _IDS[self]

    @classmethod
    def from_id(cls, value: str) -> "Role":
        """Look up a role by its hashed identifier.

        Raises:
            ValueError: identifier does not belong to a recognized role.
        """
        for role, rid in _IDS.items():
            if rid == value:
                return role
        raise ValueError(f"Unknown role id: {value}")


_LABELS = {
    Role.DOMAIN_REGISTRANT: DOMAIN_REGISTRANT_LABEL,
    Role.TLD_MANAGER: TLD_MANAGER_LABEL,
    Role.TLDS_MANAGER: TLDS_MANAGER_LABEL,
}

_IDS = {
    Role.DOMAIN_REGISTRANT: DOMAIN_REGISTRANT_ROLE,
    Role.TLD_MANAGER: TLD_MANAGER_ROLE,
    Role.TLDS_MANAGER: TLDS_MANAGER_ROLE,
}

# Highest first; effective-role checks short-circuit in this order.
ROLE_PRECEDENCE: tuple[Role, ...] = tuple(sorted(Role, reverse=True))


__all__ = [
    "DOMAIN_REGISTRANT_LABEL",
    "DOMAIN_REGISTRANT_ROLE",
    "ROLE_PRECEDENCE",
    "Role",
    "TLDS_MANAGER_LABEL",
    "TLDS_MANAGER_ROLE",
    "TLD_MANAGER_LABEL",
    "TLD_MANAGER_ROLE",
    "role_id",
]
