"""
Solana RPC package.

JSON-RPC client for signature listing and transaction lookup, plus the
signature model it returns.
"""

from backend_txexport.solana_rpc.client import SolanaRpcClient, classify_rpc_error
from backend_txexport.solana_rpc.models import SignatureInfo

__all__ = [
    "SignatureInfo",
    "SolanaRpcClient",
    "classify_rpc_error",
]
