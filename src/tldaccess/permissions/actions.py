"""Domain actions gated by the registrant check.

Provides:
- ``DomainAction``: action name constants (add / release / transfer).
- ``RequiredActions``: which actions a caller needs, as three flags.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainAction:
    """Actions a registrant may perform on a domain under a TLD."""

    ADD = "add"  # Register a new domain
    RELEASE = "release"  # Give a domain back to the registry
    TRANSFER = "transfer"  # Move a domain to another account

    ALL = ("add", "release", "transfer")


@dataclass(frozen=True)
class RequiredActions:
    """Flags passed to ``is_domain_registrant``.

    All three may be False; the check then reduces to the role/override gate.
    """

    add: bool = False
    release: bool = False
    transfer: bool = False

    @classmethod
    def of(cls, *actions: str) -> "RequiredActions":
        """Build from action names.

        Example::

            RequiredActions.of(DomainAction.ADD, DomainAction.TRANSFER)

        Raises:
            ValueError: on an unknown action name.
        """
        unknown = set(actions) - set(DomainAction.ALL)
        if unknown:
            raise ValueError(f"Unknown domain action(s): {sorted(unknown)}")
        return cls(
            add=DomainAction.ADD in actions,
            release=DomainAction.RELEASE in actions,
            transfer=DomainAction.TRANSFER in actions,
        )

    @classmethod
    def everything(cls) -> "RequiredActions":
        return cls(add=True, release=True, transfer=True)

    def as_flags(self) -> tuple[bool, bool, bool]:
        return self.add, self.release, self.transfer


__all__ = [
    "DomainAction",
    "RequiredActions",
]
