"""
Transaction normalizer — jsonParsed getTransaction payloads to export records.

Purely structural: picks fee, compute units, block time, first instruction
type and first pre-token balance out of the raw payload. Token name, symbol
and display decimals are fixed placeholders; no token registry lookup.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from backend_txexport.solana_rpc.models import SignatureInfo

NETWORK_NAME = "Solana"
PLACEHOLDER_TOKEN_NAME = "solana"
PLACEHOLDER_TOKEN_SYMBOL = "sol"
PLACEHOLDER_DISPLAY_DECIMALS = 2
UNKNOWN_TYPE = "unknown"


@dataclass(frozen=True)
class Token:
    uuid: str | None
    network: str
    contract_address: str | None
    name: str
    symbol: str
    decimals: int
    display_decimals: int


@dataclass(frozen=True)
class SimplifiedTransaction:
    """One exported transaction. network is always NETWORK_NAME; timestamp is None iff blockTime is absent."""

    uuid: str
    network: str
    fee: int
    compute_units_consumed: int
    timestamp: str | None
    type: str
    wallet_address: str
    transaction_hash: str
    token: Token

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def format_block_time(block_time: int | float | None) -> str | None:
    """
    Unix seconds to ISO-8601 UTC with milliseconds, e.g. 2024-01-01T00:00:00.000Z.

    A missing or zero blockTime means the node did not record one: None.
    """
    if not block_time:
        return None
    dt = datetime.fromtimestamp(block_time, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _first_instruction_type(raw: dict[str, Any]) -> str:
    message = (raw.get("transaction") or {}).get("message") or {}
    instructions = message.get("instructions") or []
    if not instructions or not isinstance(instructions[0], dict):
        return UNKNOWN_TYPE
    parsed = instructions[0].get("parsed")
    # Some programs (e.g. Memo) return parsed as a plain string
    if isinstance(parsed, dict) and parsed.get("type"):
        return str(parsed["type"])
    return UNKNOWN_TYPE


def _first_signature(raw: dict[str, Any]) -> str | None:
    sigs = (raw.get("transaction") or {}).get("signatures") or []
    return sigs[0] if sigs else None


def _build_token(meta: dict[str, Any]) -> Token:
    balances = meta.get("preTokenBalances") or []
    first = balances[0] if balances and isinstance(balances[0], dict) else {}
    mint = first.get("mint") or None
    decimals = (first.get("uiTokenAmount") or {}).get("decimals") or 0
    return Token(
        uuid=mint,
        network=NETWORK_NAME,
        contract_address=mint,
        name=PLACEHOLDER_TOKEN_NAME,
        symbol=PLACEHOLDER_TOKEN_SYMBOL,
        decimals=int(decimals),
        display_decimals=PLACEHOLDER_DISPLAY_DECIMALS,
    )


def normalize(
    raw: dict[str, Any],
    wallet_address: str,
    signature_info: SignatureInfo,
) -> SimplifiedTransaction:
    """Map one raw transaction to a SimplifiedTransaction."""
    meta = raw.get("meta") or {}
    return SimplifiedTransaction(
        uuid=_first_signature(raw) or signature_info.signature,
        network=NETWORK_NAME,
        fee=int(meta.get("fee") or 0),
        compute_units_consumed=int(meta.get("computeUnitsConsumed") or 0),
        timestamp=format_block_time(raw.get("blockTime")),
        type=_first_instruction_type(raw),
        wallet_address=wallet_address,
        transaction_hash=signature_info.signature,
        token=_build_token(meta),
    )
