"""Caller-side policy built on top of the resolver.

The resolver's narrower queries do not apply the all-TLDs-manager bypass.
These helpers are what registry operations call: they check the highest
role first and short-circuit.

Provides:
- ``can_perform_domain_action()``: add / release / transfer under a TLD.
- ``can_administer_tld()``: edit a TLD's configuration.
- ``can_override_owner()``: act on a domain owned by another account.
- ``effective_role()``: highest role that is effective on a TLD.
"""

from __future__ import annotations

from typing import Optional

from ..addresses import normalize_address
from .actions import RequiredActions
from .resolver import PermissionResolver
from .roles import ROLE_PRECEDENCE, Role


def can_perform_domain_action(
    resolver: PermissionResolver,
    tld: int,
    who: Optional[str],
    actions: RequiredActions,
) -> bool:
    """Check if an account may perform the given domain actions under ``tld``.

    Checks in order:
    1. all-TLDs manager → allowed
    2. ``is_domain_registrant`` with the required action flags

    Example::

        can_perform_domain_action(resolver, 7, who, RequiredActions(add=True))
    """
    if resolver.is_tlds_manager(who):
        return True
    return resolver.is_domain_registrant(tld, who, *actions.as_flags())


def can_administer_tld(resolver: PermissionResolver, tld: int, who: Optional[str]) -> bool:
    """Check if an account may edit the configuration of ``tld``.

    Checks in order:
    1. all-TLDs manager → allowed
    2. ``is_tld_manager`` (role AND default membership or TLD assignment)
    """
    return resolver.is_tlds_manager(who) or resolver.is_tld_manager(tld, who)


def can_override_owner(
    resolver: PermissionResolver,
    tld: int,
    actor: Optional[str],
    owner: Optional[str],
) -> bool:
    """Check if ``actor`` may act on a domain that ``owner`` holds under ``tld``.

    - The owner itself always may.
    - An all-TLDs manager always may.
    - A TLD manager may, unless the owner is also a manager of that TLD
      (or an all-TLDs manager).
    - Nobody else may.
    """
    actor_address = normalize_address(actor)
    if actor_address is None:
        return False
    if actor_address == normalize_address(owner):
        return True
    if resolver.is_tlds_manager(actor_address):
        return True
    if not resolver.is_tld_manager(tld, actor_address):
        return False
    return not (resolver.is_tlds_manager(owner) or resolver.is_tld_manager(tld, owner))


def effective_role(resolver: PermissionResolver, tld: int, who: Optional[str]) -> Optional[Role]:
    """Highest role that currently takes effect for ``who`` on ``tld``.

    A domain registrant counts as effective when at least the role/override
    gate passes with no actions required.

    Returns:
        The role, or None if no role is effective.
    """
    checks = {
        Role.TLDS_MANAGER: lambda: resolver.is_tlds_manager(who),
        Role.TLD_MANAGER: lambda: resolver.is_tld_manager(tld, who),
        Role.DOMAIN_REGISTRANT: lambda: resolver.is_domain_registrant(tld, who),
    }
    for role in ROLE_PRECEDENCE:
        if checks[role]():
            return role
    return None


__all__ = [
    "can_administer_tld",
    "can_override_owner",
    "can_perform_domain_action",
    "effective_role",
]
