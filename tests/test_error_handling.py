"""Tests for the exception hierarchy and gRPC error mapping."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import grpc
import pytest

from tldaccess import (
    InvalidAddressError,
    NotAManagerError,
    PermissionDeniedError,
    RegistryAccessError,
    StoreError,
    StoreUnavailableError,
)
from tldaccess.exceptions import error_registry, get_grpc_status_code, grpc_error_handler, register_error


class TestHierarchy:
    def test_codes(self) -> None:
        assert PermissionDeniedError().code == "PERMISSION_DENIED"
        assert InvalidAddressError().code == "INVALID_ADDRESS"
        assert StoreUnavailableError().code == "STORE_UNAVAILABLE"

    def test_subclassing(self) -> None:
        assert issubclass(StoreUnavailableError, StoreError)
        assert issubclass(NotAManagerError, RegistryAccessError)

    def test_message_and_details(self) -> None:
        err = PermissionDeniedError("nope", tld=7)
        assert str(err) == "nope"
        assert err.details == {"tld": 7}

    def test_default_message(self) -> None:
        assert PermissionDeniedError().message == "Permission denied"


class TestErrorRegistry:
    def test_base_errors_registered(self) -> None:
        assert error_registry.get("PERMISSION_DENIED") is PermissionDeniedError
        assert error_registry.get("NOT_A_MANAGER") is NotAManagerError

    def test_register_custom(self) -> None:
        @register_error("TLD_LOCKED")
        class TLDLockedError(RegistryAccessError):
            code = "TLD_LOCKED"

        assert error_registry.get("TLD_LOCKED") is TLDLockedError


class TestGrpcMapping:
    def test_status_codes(self) -> None:
        assert get_grpc_status_code(PermissionDeniedError()) == grpc.StatusCode.PERMISSION_DENIED
        assert get_grpc_status_code(InvalidAddressError()) == grpc.StatusCode.INVALID_ARGUMENT
        assert get_grpc_status_code(StoreUnavailableError()) == grpc.StatusCode.UNAVAILABLE
        assert get_grpc_status_code(RegistryAccessError()) == grpc.StatusCode.INTERNAL


class _Service:
    @grpc_error_handler
    async def AddDomain(self, request, context):
        if request == "deny":
            raise PermissionDeniedError("not a registrant")
        if request == "boom":
            raise RuntimeError("boom")
        return "ok"


def _context() -> MagicMock:
    context = MagicMock()
    context.abort = AsyncMock()
    return context


class TestGrpcErrorHandler:
    @pytest.mark.asyncio
    async def test_passes_through(self) -> None:
        context = _context()
        assert await _Service().AddDomain("ok", context) == "ok"
        context.abort.assert_not_called()

    @pytest.mark.asyncio
    async def test_registry_error_aborts_with_mapped_status(self) -> None:
        context = _context()
        result = await _Service().AddDomain("deny", context)
        assert result is None
        context.set_trailing_metadata.assert_called_once_with([("error-code", "PERMISSION_DENIED")])
        context.abort.assert_awaited_once_with(
            grpc.StatusCode.PERMISSION_DENIED,
            "[PERMISSION_DENIED] not a registrant",
        )

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self) -> None:
        context = _context()
        await _Service().AddDomain("boom", context)
        status, message = context.abort.await_args.args
        assert status == grpc.StatusCode.INTERNAL
        assert "boom" in message
