"""Configuration contract for tldaccess.

Pydantic-validated settings for logging, the store backend, and the audit
event history. Direct os.environ/os.getenv usage is limited to
:func:`load_access_config_from_env`; everything else takes an
:class:`AccessConfig` instance.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreBackend(str, Enum):
    """Where role, TLD ownership and override data live.

    - MEMORY: process-local dictionaries (tests, single-process tools)
    - REDIS: shared Redis instance (the registry service deployment)
    """

    MEMORY = "memory"
    REDIS = "redis"


_TRUTHY = ("true", "1", "yes", "on")


class AccessConfig(BaseModel):
    """Settings for an :class:`~tldaccess.access.AccessControl` instance.

    Environment variables (see :func:`load_access_config_from_env`):
        LOG_LEVEL                    DEBUG | INFO | WARNING | ERROR | CRITICAL
        LOG_JSON                     JSON log output (true/false)
        TLDACCESS_STORE_BACKEND      memory | redis
        REDIS_URL                    Redis connection URL (redis backend)
        TLDACCESS_KEY_PREFIX         Redis key namespace
        TLDACCESS_EVENT_HISTORY_SIZE retained audit events (0 = none)
        TLDACCESS_SERVICE_NAME       logger name of the embedding service
    """

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    store_backend: StoreBackend = Field(
        default=StoreBackend.MEMORY,
        description="Backend for role membership, TLD ownership and overrides",
    )
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (e.g., redis://localhost:6379/0)",
    )
    key_prefix: str = Field(
        default="tldaccess",
        min_length=1,
        description="Namespace for all Redis keys",
    )

    event_history_size: int = Field(
        default=1000,
        ge=0,
        description="Number of admin notifications retained in memory for audit readers",
    )

    service_name: Optional[str] = Field(
        default=None,
        description="Service name used as the top-level logger (e.g. 'registry-api')",
    )

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Redis URL format."""
        if v is None:
            return v
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("Redis URL must start with redis://, rediss://, or unix://")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_access_config_from_env() -> AccessConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Returns:
        AccessConfig instance with values from environment or defaults.
    """
    import os

    return AccessConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in _TRUTHY,
        store_backend=os.getenv("TLDACCESS_STORE_BACKEND", "memory").lower(),
        redis_url=os.getenv("REDIS_URL"),
        key_prefix=os.getenv("TLDACCESS_KEY_PREFIX", "tldaccess"),
        event_history_size=int(os.getenv("TLDACCESS_EVENT_HISTORY_SIZE", "1000")),
        service_name=os.getenv("TLDACCESS_SERVICE_NAME"),
    )


__all__ = [
    "AccessConfig",
    "LogLevel",
    "StoreBackend",
    "load_access_config_from_env",
]
