"""Per-TLD explicit permission override for a single account."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TLDPermissionOverride:
    """Explicit add/release/transfer flags for one (TLD, account) pair.

    When ``explicit`` is False the three flags carry no meaning and the
    resolver falls back to default-group membership.

    Unpacks like the store's 4-tuple::

        explicit, can_add, can_release, can_transfer = override
    """

    explicit: bool = False
    can_add: bool = False
    can_release: bool = False
    can_transfer: bool = False

    @classmethod
    def unset(cls) -> "TLDPermissionOverride":
        return _UNSET

    @classmethod
    def allow(
        cls,
        *,
        add: bool = False,
        release: bool = False,
        transfer: bool = False,
    ) -> "TLDPermissionOverride":
        """Explicit override with the given flags."""
        return cls(explicit=True, can_add=add, can_release=release, can_transfer=transfer)

    def permits(self, require_add: bool, require_release: bool, require_transfer: bool) -> bool:
        """Every required action must be permitted; unrequired actions are ignored.

        Only meaningful for explicit overrides.
        """
        return (
            (not require_add or self.can_add)
            and (not require_release or self.can_release)
            and (not require_transfer or self.can_transfer)
        )

    def __iter__(self) -> Iterator[bool]:
        return iter((self.explicit, self.can_add, self.can_release, self.can_transfer))


_UNSET = TLDPermissionOverride()


__all__ = ["TLDPermissionOverride"]
