"""Redis-backed store implementations.

Shared by every registry process that talks to the same Redis, so a role
grant or override written by one service is seen by all resolvers.

Key layout (``prefix`` defaults to ``tldaccess``)::

    {prefix}:roles:{role_id}          SET   member addresses
    {prefix}:tld:{tld}:managers       SET   addresses assigned to the TLD
    {prefix}:tld:{tld}:overrides      HASH  address -> {"add","release","transfer"} JSON

Redis failures raise :class:`~tldaccess.exceptions.StoreUnavailableError`
or :class:`~tldaccess.exceptions.StoreError`; they never turn into a
positive authorization decision.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ..addresses import normalize_address, require_address
from ..exceptions import StoreError, StoreUnavailableError
from ..permissions.override import TLDPermissionOverride

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "tldaccess"


def connect(redis_url: str) -> Any:
    """Open a sync client with string responses."""
    return redis.from_url(redis_url, decode_responses=True)


def _flag(data: Any, key: str) -> bool:
    """Read one override flag; only JSON booleans are accepted."""
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"override flag {key!r} must be a boolean, got {value!r}")
    return value


class _RedisStore:
    def __init__(self, client: Any, prefix: str = DEFAULT_PREFIX) -> None:
        self._r = client
        self._prefix = prefix

    def _call(self, op: str, fn, *args: Any) -> Any:
        try:
            return fn(*args)
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.error("Redis %s failed: %s", op, e)
            raise StoreUnavailableError(f"Redis unavailable during {op}: {e}", operation=op) from e
        except RedisError as e:
            logger.error("Redis %s failed: %s", op, e)
            raise StoreError(f"Redis error during {op}: {e}", operation=op) from e


class RedisRoleStore(_RedisStore):
    def _key(self, role: str) -> str:
        return f"{self._prefix}:roles:{role}"

    def has_role(self, role: str, address: str) -> bool:
        who = normalize_address(address)
        if who is None:
            return False
        return bool(self._call("has_role", self._r.sismember, self._key(role), who))

    def grant_role(self, role: str, address: str) -> None:
        who = require_address(address)
        self._call("grant_role", self._r.sadd, self._key(role), who)
        logger.info("Role granted: %s -> %s", role[:10], who)

    def revoke_role(self, role: str, address: str) -> None:
        who = require_address(address)
        self._call("revoke_role", self._r.srem, self._key(role), who)
        logger.info("Role revoked: %s -> %s", role[:10], who)

    def members(self, role: str) -> frozenset[str]:
        return frozenset(self._call("members", self._r.smembers, self._key(role)) or ())


class RedisTLDOwnershipStore(_RedisStore):
    def _key(self, tld: int) -> str:
        return f"{self._prefix}:tld:{tld}:managers"

    def manages_the_tld(self, tld: int, address: str) -> bool:
        who = normalize_address(address)
        if who is None:
            return False
        return bool(self._call("manages_the_tld", self._r.sismember, self._key(tld), who))

    def set_tld_manager(self, tld: int, address: str, enabled: bool) -> None:
        who = require_address(address)
        if enabled:
            self._call("set_tld_manager", self._r.sadd, self._key(tld), who)
        else:
            self._call("set_tld_manager", self._r.srem, self._key(tld), who)
        logger.info("TLD %s manager %s: %s", tld, "assigned" if enabled else "unassigned", who)

    def managers(self, tld: int) -> frozenset[str]:
        return frozenset(self._call("managers", self._r.smembers, self._key(tld)) or ())


class RedisPermissionOverrideStore(_RedisStore):
    def _key(self, tld: int) -> str:
        return f"{self._prefix}:tld:{tld}:overrides"

    def has_explicit_tld_permission(self, tld: int, address: str) -> TLDPermissionOverride:
        who = normalize_address(address)
        if who is None:
            return TLDPermissionOverride.unset()
        raw: Optional[str] = self._call("has_explicit_tld_permission", self._r.hget, self._key(tld), who)
        if not raw:
            return TLDPermissionOverride.unset()
        try:
            data = json.loads(raw)
            return TLDPermissionOverride.allow(
                add=_flag(data, "add"),
                release=_flag(data, "release"),
                transfer=_flag(data, "transfer"),
            )
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            # Corrupt entry: deny everything explicitly rather than fall back to defaults.
            logger.warning("Invalid override data for TLD %s / %s: %s", tld, who, e)
            return TLDPermissionOverride.allow()

    def set_override(
        self,
        tld: int,
        address: str,
        *,
        add: bool,
        release: bool,
        transfer: bool,
    ) -> TLDPermissionOverride:
        who = require_address(address)
        value = json.dumps({"add": add, "release": release, "transfer": transfer})
        self._call("set_override", self._r.hset, self._key(tld), who, value)
        logger.info("Override set on TLD %s for %s: add=%s release=%s transfer=%s", tld, who, add, release, transfer)
        return TLDPermissionOverride.allow(add=add, release=release, transfer=transfer)

    def clear_override(self, tld: int, address: str) -> None:
        who = require_address(address)
        self._call("clear_override", self._r.hdel, self._key(tld), who)
        logger.info("Override cleared on TLD %s for %s", tld, who)


__all__ = [
    "DEFAULT_PREFIX",
    "RedisPermissionOverrideStore",
    "RedisRoleStore",
    "RedisTLDOwnershipStore",
    "connect",
]
