"""
Application-level exceptions.

Per-signature failures (TransactionFetchFailed) are caught by the export loop;
everything else aborts the request and surfaces as HTTP 500.
"""

from __future__ import annotations

from enum import Enum


class TxExportError(Exception):
    """Base class for all export errors."""


class ConfigError(TxExportError):
    """Missing or malformed setting; raised at startup."""


class InvalidAddress(TxExportError):
    """Wallet address is not a valid Solana public key."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid wallet address: {address!r}")
        self.address = address


class SignatureFetchFailed(TxExportError):
    """getSignaturesForAddress failed; the whole export is aborted."""


class TransactionFetchFailed(TxExportError):
    """A single transaction could not be fetched for a non-transient reason."""

    def __init__(self, signature: str, message: str) -> None:
        super().__init__(f"Failed to fetch transaction {signature}: {message}")
        self.signature = signature


class PersistenceFailure(TxExportError):
    """Writing the result file failed."""


class RpcErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    UNSUPPORTED_VERSION = "unsupported_version"
    TRANSPORT = "transport"
    RPC = "rpc"


class RpcError(TxExportError):
    """
    Error returned by the Solana RPC client.

    kind is set by the client from the HTTP status, JSON-RPC error code and
    message, so callers never have to inspect message text.
    """

    def __init__(
        self,
        message: str,
        kind: RpcErrorKind = RpcErrorKind.RPC,
        *,
        status_code: int | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.code = code

    @property
    def is_transient(self) -> bool:
        return self.kind in (RpcErrorKind.RATE_LIMITED, RpcErrorKind.UNSUPPORTED_VERSION)
