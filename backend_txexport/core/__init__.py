"""
Core utilities — exceptions and cross-cutting concerns shared by the RPC client,
exporter, and API server.
"""

from backend_txexport.core.exceptions import (
    ConfigError,
    InvalidAddress,
    PersistenceFailure,
    RpcError,
    RpcErrorKind,
    SignatureFetchFailed,
    TransactionFetchFailed,
    TxExportError,
)

__all__ = [
    "ConfigError",
    "InvalidAddress",
    "PersistenceFailure",
    "RpcError",
    "RpcErrorKind",
    "SignatureFetchFailed",
    "TransactionFetchFailed",
    "TxExportError",
]
