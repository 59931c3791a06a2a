"""
Wallet transaction export: validate → list signatures → fetch each with backoff
→ normalize → write JSON file.

Signatures are processed strictly in listing order, one at a time. A failure
on one signature is logged and skipped; failures in listing or writing abort
the export. Fetching stops once max_transactions records are collected.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from backend_txexport.core.exceptions import (
    InvalidAddress,
    RpcError,
    SignatureFetchFailed,
    TransactionFetchFailed,
)
from backend_txexport.exporter.backoff import DEFAULT_BACKOFF, BackoffPolicy, SleepFn, fetch_with_backoff
from backend_txexport.exporter.normalizer import SimplifiedTransaction, normalize
from backend_txexport.exporter.sink import JsonFileSink
from backend_txexport.solana_rpc.models import SignatureInfo
from backend_txexport.txexport_logging import bind_wallet
from backend_txexport.utils.wallet_utils import is_valid_wallet

DEFAULT_MAX_TRANSACTIONS = 100


@dataclass(frozen=True)
class ExportResult:
    wallet_address: str
    file_path: str
    record_count: int
    signature_count: int
    skipped_count: int


class TransactionExporter:
    """
    Per-request export pipeline. Holds no per-request state, so one instance
    can serve concurrent requests.

    Args:
        client: Solana RPC client (get_signatures_for_address / get_parsed_transaction).
        sink: Where finished result sets are written.
        policy: Backoff schedule for transient transaction fetch failures.
        max_transactions: Cap on records per export; fetching stops when reached.
        sleep: Awaitable sleep used between retries.
    """

    def __init__(
        self,
        client: Any,
        sink: JsonFileSink,
        *,
        policy: BackoffPolicy = DEFAULT_BACKOFF,
        max_transactions: int = DEFAULT_MAX_TRANSACTIONS,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if max_transactions < 1:
            raise ValueError("max_transactions must be positive")
        self._client = client
        self._sink = sink
        self._policy = policy
        self._max_transactions = max_transactions
        self._sleep = sleep

    @property
    def sink(self) -> JsonFileSink:
        return self._sink

    async def list_signatures(self, wallet_address: str) -> list[SignatureInfo]:
        """Validate the address, then fetch the default signature page (no retry)."""
        if not is_valid_wallet(wallet_address):
            raise InvalidAddress(wallet_address)
        log = bind_wallet(wallet_address)
        try:
            signatures = await self._client.get_signatures_for_address(wallet_address)
        except RpcError as e:
            log.error("signature_fetch_failed", error=str(e), kind=e.kind.value)
            raise SignatureFetchFailed("Failed to fetch signatures") from e
        log.info("signatures_fetched", signature_count=len(signatures))
        return signatures

    async def get_transactions(self, wallet_address: str) -> tuple[list[SimplifiedTransaction], int]:
        """
        Return (records, signature_count) for wallet_address.

        Raises:
            InvalidAddress: address is not a Solana public key; no RPC call is made.
            SignatureFetchFailed: the listing call failed.
        """
        signatures = await self.list_signatures(wallet_address)
        log = bind_wallet(wallet_address)
        records: list[SimplifiedTransaction] = []

        for info in signatures:
            try:
                raw = await fetch_with_backoff(self._client, info.signature, self._policy, sleep=self._sleep)
                if raw is None:
                    continue
                records.append(normalize(raw, wallet_address, info))
            except TransactionFetchFailed as e:
                log.error("tx_fetch_failed", signature=info.signature, error=str(e))
                continue
            except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
                log.error("tx_normalize_failed", signature=info.signature, error=repr(e))
                continue
            if len(records) >= self._max_transactions:
                log.info("tx_limit_reached", max_transactions=self._max_transactions)
                break

        return records, len(signatures)

    async def export(self, wallet_address: str) -> ExportResult:
        """Fetch, normalize and write the wallet's transactions; return where they went."""
        records, signature_count = await self.get_transactions(wallet_address)
        file_path = await self._sink.write(wallet_address, records)
        result = ExportResult(
            wallet_address=wallet_address,
            file_path=file_path,
            record_count=len(records),
            signature_count=signature_count,
            skipped_count=max(signature_count - len(records), 0),
        )
        bind_wallet(wallet_address).info(
            "tx_export_complete",
            path=file_path,
            record_count=result.record_count,
            signature_count=signature_count,
        )
        return result
