"""
Resilient transaction fetch: bounded exponential backoff around getTransaction.

Only two failure kinds are retried: rate limiting (HTTP/RPC 429) and
"transaction version not supported". Every other RPC error is raised as
TransactionFetchFailed on the first occurrence. After max_attempts transient
failures the signature is skipped (None), which is not an error.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from backend_txexport.core.exceptions import RpcError, RpcErrorKind, TransactionFetchFailed
from backend_txexport.solana_rpc.client import DEFAULT_MAX_SUPPORTED_TRANSACTION_VERSION
from backend_txexport.txexport_logging import get_logger

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class BackoffPolicy:
    """Delay schedule: base_ms doubling per attempt, capped at max_ms, at most max_attempts fetches."""

    base_ms: int = 500
    max_ms: int = 16_000
    max_attempts: int = 10

    def __post_init__(self) -> None:
        if self.base_ms < 0 or self.max_ms < 0:
            raise ValueError("backoff delays must be non-negative")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def delay_ms(self, attempt: int) -> int:
        """Delay after the given 1-based attempt fails."""
        return min(self.base_ms * 2 ** (attempt - 1), self.max_ms)


DEFAULT_BACKOFF = BackoffPolicy()

_RETRY_REASONS = {
    RpcErrorKind.UNSUPPORTED_VERSION: "Transaction version not supported",
    RpcErrorKind.RATE_LIMITED: "Server responded with 429 Too Many Requests",
}


async def fetch_with_backoff(
    client: Any,
    signature: str,
    policy: BackoffPolicy = DEFAULT_BACKOFF,
    *,
    sleep: SleepFn = asyncio.sleep,
) -> dict[str, Any] | None:
    """
    Fetch one parsed transaction, retrying transient RPC failures.

    Args:
        client: Object with async get_parsed_transaction(signature, *, max_supported_transaction_version).
        signature: Transaction signature (base58).
        policy: Backoff schedule and attempt ceiling.
        sleep: Awaitable sleep taking seconds; injectable for tests.

    Returns:
        The jsonParsed transaction dict, or None when the node has no such
        transaction or every attempt hit a transient failure.

    Raises:
        TransactionFetchFailed: on any non-transient RPC error (no retry).
    """
    for attempt in range(1, policy.max_attempts + 1):
        delay_ms = policy.delay_ms(attempt)
        try:
            return await client.get_parsed_transaction(
                signature,
                max_supported_transaction_version=DEFAULT_MAX_SUPPORTED_TRANSACTION_VERSION,
            )
        except RpcError as e:
            if not e.is_transient:
                raise TransactionFetchFailed(signature, str(e)) from e
            logger.warning(
                "tx_fetch_retry",
                signature=signature,
                attempt=attempt,
                max_attempts=policy.max_attempts,
                delay_ms=delay_ms,
                reason=_RETRY_REASONS[e.kind],
                error=str(e),
            )
            await sleep(delay_ms / 1000.0)

    logger.warning(
        "tx_fetch_retries_exhausted",
        signature=signature,
        max_attempts=policy.max_attempts,
    )
    return None
