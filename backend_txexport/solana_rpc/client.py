"""
Async Solana JSON-RPC client.

Responsibilities:
- getSignaturesForAddress (default page, no cursor) and getTransaction
  (jsonParsed, maxSupportedTransactionVersion) over one shared httpx.AsyncClient.
- Turn every transport, HTTP and JSON-RPC failure into an RpcError whose kind
  tells callers whether the failure is transient (rate limited, unsupported
  transaction version) without parsing messages themselves.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from backend_txexport.core.exceptions import RpcError, RpcErrorKind
from backend_txexport.solana_rpc.models import SignatureInfo
from backend_txexport.txexport_logging import get_logger

logger = get_logger(__name__)

# JSON-RPC error code for "Transaction version (N) is not supported by the requesting client"
UNSUPPORTED_VERSION_CODE = -32015
UNSUPPORTED_VERSION_MARKER = "is not supported"
DEFAULT_MAX_SUPPORTED_TRANSACTION_VERSION = 0


def classify_rpc_error(code: int | None, message: str) -> RpcErrorKind:
    """Map a JSON-RPC error (code + message) to an RpcErrorKind."""
    if code == UNSUPPORTED_VERSION_CODE or (
        "Transaction version" in message and UNSUPPORTED_VERSION_MARKER in message
    ):
        return RpcErrorKind.UNSUPPORTED_VERSION
    if code == 429 or "429" in message:
        return RpcErrorKind.RATE_LIMITED
    return RpcErrorKind.RPC


class SolanaRpcClient:
    """
    Thin JSON-RPC client for the two calls the exporter needs.

    Create once at application startup and pass it explicitly; pass http_client
    (e.g. one built on httpx.MockTransport) to substitute the network in tests.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout_sec: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.strip()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_sec))
        self._ids = itertools.count(1)

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Perform one JSON-RPC call; raise RpcError on transport, HTTP or RPC error."""
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            resp = await self._client.post(self._rpc_url, json=body)
        except httpx.HTTPError as e:
            raise RpcError(f"{method} transport error: {e}", RpcErrorKind.TRANSPORT) from e

        if resp.status_code == 429:
            raise RpcError(
                f"{method}: server responded with 429 Too Many Requests",
                RpcErrorKind.RATE_LIMITED,
                status_code=429,
            )
        if resp.status_code >= 400:
            raise RpcError(
                f"{method}: HTTP {resp.status_code}: {resp.text[:200]}",
                RpcErrorKind.TRANSPORT,
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise RpcError(f"{method}: invalid JSON response", RpcErrorKind.RPC) from e

        err = data.get("error") if isinstance(data, dict) else None
        if err:
            code = err.get("code") if isinstance(err, dict) else None
            message = str(err.get("message", err)) if isinstance(err, dict) else str(err)
            raise RpcError(
                f"Solana RPC error: {message} (code={code})",
                classify_rpc_error(code, message),
                status_code=resp.status_code,
                code=code,
            )
        if not isinstance(data, dict) or "result" not in data:
            raise RpcError(f"{method}: Solana RPC returned no result", RpcErrorKind.RPC)
        return data["result"]

    async def get_signatures_for_address(self, address: str) -> list[SignatureInfo]:
        """Most recent signatures for address, newest first, in the node's default page size."""
        result = await self._call("getSignaturesForAddress", [address])
        if not isinstance(result, list):
            raise RpcError("getSignaturesForAddress: result is not a list", RpcErrorKind.RPC)
        infos: list[SignatureInfo] = []
        for item in result:
            if not isinstance(item, dict) or "signature" not in item:
                logger.debug("rpc_signature_item_skipped", item=str(item)[:100])
                continue
            infos.append(SignatureInfo.from_rpc_item(item))
        return infos

    async def get_parsed_transaction(
        self,
        signature: str,
        *,
        max_supported_transaction_version: int = DEFAULT_MAX_SUPPORTED_TRANSACTION_VERSION,
    ) -> dict[str, Any] | None:
        """getTransaction with jsonParsed encoding; None when the node does not know the signature."""
        result = await self._call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": max_supported_transaction_version,
                },
            ],
        )
        if result is not None and not isinstance(result, dict):
            raise RpcError("getTransaction: result is not an object", RpcErrorKind.RPC)
        return result
