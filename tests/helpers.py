"""
Shared test data and fakes: valid wallets, raw RPC payloads, a fake RPC client, recording sleep.
"""

from __future__ import annotations

from typing import Any

from backend_txexport.core.exceptions import RpcError, RpcErrorKind
from backend_txexport.solana_rpc.models import SignatureInfo

# Valid Solana pubkeys (base58, 32 bytes)
VALID_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
VALID_WALLET_2 = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

UNSUPPORTED_VERSION_MESSAGE = (
    "failed to get transaction: Transaction version (0) is not supported by the requesting client. "
    "Please try the request again with the following configuration parameter: "
    "\"maxSupportedTransactionVersion\": 0"
)

CONFIG_ENV_KEYS = (
    "SOLANA_RPC_URL",
    "END_POINT",
    "API_HOST",
    "API_PORT",
    "OUTPUT_DIR",
    "RPC_TIMEOUT_SEC",
    "BACKOFF_BASE_MS",
    "BACKOFF_MAX_MS",
    "MAX_FETCH_ATTEMPTS",
    "MAX_TRANSACTIONS",
)


def unsupported_version_error() -> RpcError:
    return RpcError(
        f"Solana RPC error: {UNSUPPORTED_VERSION_MESSAGE} (code=-32015)",
        RpcErrorKind.UNSUPPORTED_VERSION,
        code=-32015,
    )


def rate_limited_error() -> RpcError:
    return RpcError(
        "getTransaction: server responded with 429 Too Many Requests",
        RpcErrorKind.RATE_LIMITED,
        status_code=429,
    )


def make_signature_item(signature: str, slot: int = 1, block_time: int | None = 1700000000) -> dict[str, Any]:
    return {
        "signature": signature,
        "slot": slot,
        "err": None,
        "blockTime": block_time,
        "memo": None,
        "confirmationStatus": "finalized",
    }


def make_raw_tx(
    signature: str,
    *,
    block_time: int | None = 1700000000,
    fee: int | None = 5000,
    compute_units: int | None = 150,
    instruction_type: str | None = "transfer",
    pre_token_balances: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Minimal jsonParsed getTransaction result."""
    instructions: list[dict[str, Any]] = []
    if instruction_type is not None:
        instructions.append(
            {
                "program": "system",
                "programId": "11111111111111111111111111111111",
                "parsed": {"type": instruction_type, "info": {}},
            }
        )
    meta: dict[str, Any] = {
        "err": None,
        "preTokenBalances": pre_token_balances or [],
        "postTokenBalances": [],
    }
    if fee is not None:
        meta["fee"] = fee
    if compute_units is not None:
        meta["computeUnitsConsumed"] = compute_units
    raw: dict[str, Any] = {
        "slot": 1,
        "meta": meta,
        "transaction": {"signatures": [signature], "message": {"instructions": instructions}},
        "version": 0,
    }
    if block_time is not None:
        raw["blockTime"] = block_time
    return raw


class FakeRpcClient:
    """
    In-memory stand-in for SolanaRpcClient.

    transactions maps signature -> list of outcomes consumed one per call
    (dict/None returned, Exception raised). The last outcome repeats.
    Signatures with no entry get a default raw transaction.
    """

    def __init__(
        self,
        signatures: list[str] | None = None,
        transactions: dict[str, list[Any]] | None = None,
        signature_error: Exception | None = None,
    ) -> None:
        self.signatures = list(signatures or [])
        self.transactions = transactions or {}
        self.signature_error = signature_error
        self.calls: list[tuple[str, str]] = []
        self.versions: list[int] = []

    async def __aenter__(self) -> "FakeRpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    def tx_calls(self) -> list[str]:
        return [sig for method, sig in self.calls if method == "getTransaction"]

    async def get_signatures_for_address(self, address: str) -> list[SignatureInfo]:
        self.calls.append(("getSignaturesForAddress", address))
        if self.signature_error is not None:
            raise self.signature_error
        return [SignatureInfo.from_rpc_item(make_signature_item(s, slot=i)) for i, s in enumerate(self.signatures)]

    async def get_parsed_transaction(
        self,
        signature: str,
        *,
        max_supported_transaction_version: int = 0,
    ) -> dict[str, Any] | None:
        self.calls.append(("getTransaction", signature))
        self.versions.append(max_supported_transaction_version)
        outcomes = self.transactions.get(signature)
        if outcomes is None:
            return make_raw_tx(signature)
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Async sleep replacement that records requested delays (seconds) and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def delays_ms(self) -> list[int]:
        return [round(d * 1000) for d in self.delays]


