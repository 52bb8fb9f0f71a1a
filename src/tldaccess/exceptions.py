"""Unified exception hierarchy for tldaccess.

Resolver queries never raise: a malformed or null address is simply "not
authorized". Exceptions are reserved for mutating admin operations, the
facade guards, configuration, and store backends.

This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for protocol mapping
- gRPC error handler decorator for registry services exposing the resolver

Usage in services:
    from tldaccess.exceptions import (
        PermissionDeniedError,
        grpc_error_handler,
    )
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar, cast

__all__ = [
    "RegistryAccessError",
    "ConfigurationError",
    "InvalidAddressError",
    "PermissionDeniedError",
    "NotAManagerError",
    "UnknownManagerError",
    "StoreError",
    "StoreUnavailableError",
    "ErrorRegistry",
    "error_registry",
    "register_error",
    "get_grpc_status_code",
    "grpc_error_handler",
]

logger = logging.getLogger(__name__)


# ---- Exception Hierarchy ----------------------------------------------------


class RegistryAccessError(Exception):
    """Base exception for tldaccess.

    Attributes:
        code: Stable error code string for protocol mapping (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(RegistryAccessError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class InvalidAddressError(RegistryAccessError):
    """Malformed or null address passed to a mutating operation."""

    code: str = "INVALID_ADDRESS"
    message: str = "Invalid account address"


class PermissionDeniedError(RegistryAccessError):
    """Caller is not authorized for the requested action."""

    code: str = "PERMISSION_DENIED"
    message: str = "Permission denied"


class NotAManagerError(RegistryAccessError):
    """Address must be an enabled manager before joining a default group."""

    code: str = "NOT_A_MANAGER"
    message: str = "Address is not an enabled manager"


class UnknownManagerError(RegistryAccessError):
    """No manager record exists for the address."""

    code: str = "UNKNOWN_MANAGER"
    message: str = "No manager record for address"


class StoreError(RegistryAccessError):
    """Backing store failure."""

    code: str = "STORE_ERROR"
    message: str = "Store operation failed"


class StoreUnavailableError(StoreError):
    """Backing store could not be reached."""

    code: str = "STORE_UNAVAILABLE"
    message: str = "Store is unavailable"


# ---- Error Registry for Protocol Mapping ------------------------------------

_E = TypeVar("_E", bound=type[RegistryAccessError])


class ErrorRegistry:
    """Registry for mapping internal errors to external protocol codes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[RegistryAccessError]] = {}

    def register(self, code: str, error_cls: type[RegistryAccessError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[RegistryAccessError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[RegistryAccessError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("TLD_LOCKED")
        class TLDLockedError(RegistryAccessError):
            code = "TLD_LOCKED"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("INTERNAL_ERROR", RegistryAccessError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("INVALID_ADDRESS", InvalidAddressError)
error_registry.register("PERMISSION_DENIED", PermissionDeniedError)
error_registry.register("NOT_A_MANAGER", NotAManagerError)
error_registry.register("UNKNOWN_MANAGER", UnknownManagerError)
error_registry.register("STORE_ERROR", StoreError)
error_registry.register("STORE_UNAVAILABLE", StoreUnavailableError)


# ---- gRPC Error Handling Utilities ------------------------------------------


def get_grpc_status_code(error: RegistryAccessError) -> Any:
    """Map RegistryAccessError to gRPC status code.

    grpc is imported on first use so that importing the error classes does
    not load the gRPC runtime.
    """
    import grpc

    error_to_status = {
        "PERMISSION_DENIED": grpc.StatusCode.PERMISSION_DENIED,
        "CONFIGURATION_ERROR": grpc.StatusCode.FAILED_PRECONDITION,
        "INVALID_ADDRESS": grpc.StatusCode.INVALID_ARGUMENT,
        "NOT_A_MANAGER": grpc.StatusCode.FAILED_PRECONDITION,
        "UNKNOWN_MANAGER": grpc.StatusCode.NOT_FOUND,
        "STORE_ERROR": grpc.StatusCode.INTERNAL,
        "STORE_UNAVAILABLE": grpc.StatusCode.UNAVAILABLE,
    }
    return error_to_status.get(error.code, grpc.StatusCode.INTERNAL)


def grpc_error_handler(method):
    """Decorator for unary gRPC service methods of a registry service.

    Catches RegistryAccessError and aborts with the mapped gRPC status code.

    Usage:
        @grpc_error_handler
        async def AddDomain(self, request, context):
            access.require_domain_action(request.tld, request.sender, add=True)
            ...
    """

    @functools.wraps(method)
    async def wrapper(self, request, context):
        try:
            return await method(self, request, context)
        except RegistryAccessError as e:
            status_code = get_grpc_status_code(e)
            error_message = f"[{e.code}] {e.message}"

            logger.error(
                "%s failed: %s",
                method.__name__,
                error_message,
                extra={
                    "error_code": e.code,
                    "error_details": e.details,
                },
            )

            context.set_trailing_metadata([("error-code", e.code)])
            await context.abort(status_code, error_message)
            return

        except Exception as e:
            import grpc

            logger.exception("%s unexpected error: %s", method.__name__, e)
            await context.abort(
                grpc.StatusCode.INTERNAL,
                f"Unexpected {type(e)}: {e}",
            )
            return

    return wrapper
