"""
Data models for Solana RPC responses.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SignatureInfo:
    """
    Transaction signature info from getSignaturesForAddress.

    Mirrors Solana RPC response fields; consumed once by the transaction
    fetcher and never persisted on its own.
    """

    signature: str
    slot: int
    err: Any  # None if success; dict/object from RPC if failed
    block_time: int | None  # Unix timestamp; None if not available
    memo: str | None
    confirmation_status: str | None  # processed | confirmed | finalized

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "SignatureInfo":
        """Build from a single getSignaturesForAddress result item."""
        return cls(
            signature=item["signature"],
            slot=int(item.get("slot") or 0),
            err=item.get("err"),
            block_time=item.get("blockTime"),
            memo=item.get("memo"),
            confirmation_status=item.get("confirmationStatus"),
        )
