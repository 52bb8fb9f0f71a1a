"""Centralized logging utilities for tldaccess.

This module provides:
- Logging configuration from AccessConfig
- Safe preview utilities for log values
- Structured logging with TLD / account context
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .addresses import short_address
from .config import AccessConfig, LogLevel


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a safe, length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "tld", "address",
    }
)


class AccessLogFormatter(logging.Formatter):
    """Formatter that includes tld/address context and optional JSON output."""

    def __init__(
        self,
        json_format: bool = True,
        shorten_addresses: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        """Initialize the formatter.

        Args:
            json_format: Whether to output JSON (True) or plain text (False)
            shorten_addresses: Render addresses as ``0x1234…abcd``
        """
        super().__init__(*args, **kwargs)
        self.json_format = json_format
        self.shorten_addresses = shorten_addresses

    def format(self, record: logging.LogRecord) -> str:
        tld = getattr(record, "tld", None)
        address = getattr(record, "address", None)
        if address and self.shorten_addresses:
            address = short_address(address)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if tld is not None:
            log_data["tld"] = tld
        if address:
            log_data["address"] = address

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if tld is not None:
            parts.append(f"tld={tld}")
        if address:
            parts.append(f"address={address}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class AccessLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds tld and address to log records.

    Usage:
        logger = get_access_logger(__name__, tld=7)
        logger.info("Override set", address=who)
    """

    def __init__(
        self,
        logger: logging.Logger,
        tld: Optional[int] = None,
        address: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.tld = tld
        self.address = address

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        tld = kwargs.pop("tld", self.tld)
        address = kwargs.pop("address", self.address)

        extra = kwargs.get("extra", {})
        if tld is not None:
            extra["tld"] = tld
        if address:
            extra["address"] = address
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[AccessConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure root logging for a process embedding tldaccess.

    Args:
        config: AccessConfig instance (if None, loads from environment)
        json_format: Overrides ``config.log_json`` when given
    """
    if config is None:
        from .config import load_access_config_from_env

        config = load_access_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    use_json = config.log_json if json_format is None else json_format

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(AccessLogFormatter(json_format=use_json))
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_access_logger(
    name: str,
    tld: Optional[int] = None,
    address: Optional[str] = None,
) -> AccessLoggerAdapter:
    """Get a logger adapter bound to an optional TLD and address.

    Example:
        logger = get_access_logger(__name__)
        logger.info("Manager admitted", address=who)
    """
    return AccessLoggerAdapter(logging.getLogger(name), tld=tld, address=address)


__all__ = [
    "AccessLogFormatter",
    "AccessLoggerAdapter",
    "get_access_logger",
    "safe_preview",
    "setup_logging",
]
