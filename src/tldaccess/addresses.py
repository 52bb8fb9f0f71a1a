"""Account address helpers.

Addresses are ``0x``-prefixed, 40 hex digit strings, compared in lowercase.
The zero address and ``None`` are both treated as "no account" and are
never authorized.
"""

from __future__ import annotations

import re
from typing import Optional

from .exceptions import InvalidAddressError

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


def normalize_address(address: Optional[str]) -> Optional[str]:
    """Return the canonical lowercase form, or None for null/malformed input."""
    if not isinstance(address, str):
        return None
    candidate = address.strip().lower()
    if not _ADDRESS_RE.match(candidate) or candidate == ZERO_ADDRESS:
        return None
    return candidate



def require_address(address: Optional[str]) -> str:
    """Normalize an address for a mutating operation.

    Raises:
        InvalidAddressError: address is None, zero, or malformed.
    """
    normalized = normalize_address(address)
    if normalized is None:
        raise InvalidAddressError(f"Invalid account address: {address!r}", address=address)
    return normalized


def short_address(address: Optional[str]) -> str:
    """Compact form for log lines: ``0x1234…abcd``."""
    if not address:
        return "<null>"
    if len(address) <= 12:
        return address
    return f"{address[:6]}…{address[-4:]}"


__all__ = [
    "ZERO_ADDRESS",
    "normalize_address",
    "require_address",
    "short_address",
]
