"""
One-shot export without the HTTP server.

    python -m backend_txexport <wallet> [--output-dir DIR]

Exit code 0 on success, 1 on any failure (bad config, invalid address,
listing or write failure).
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from backend_txexport.config import get_settings
from backend_txexport.core.exceptions import TxExportError
from backend_txexport.exporter import BackoffPolicy, JsonFileSink, TransactionExporter
from backend_txexport.solana_rpc import SolanaRpcClient
from backend_txexport.txexport_logging import get_logger

logger = get_logger("backend_txexport.cli")


async def _run(wallet: str, output_dir: Path | None) -> int:
    settings = get_settings()
    async with SolanaRpcClient(settings.solana_rpc_url, timeout_sec=settings.rpc_timeout_sec) as client:
        exporter = TransactionExporter(
            client,
            JsonFileSink(output_dir or settings.output_dir),
            policy=BackoffPolicy(
                base_ms=settings.backoff_base_ms,
                max_ms=settings.backoff_max_ms,
                max_attempts=settings.max_fetch_attempts,
            ),
            max_transactions=settings.max_transactions,
        )
        result = await exporter.export(wallet)
    print(f"Saved {result.record_count} transactions -> {result.file_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export a Solana wallet's recent transactions to JSON.")
    parser.add_argument("wallet", help="Wallet address (base58)")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for the JSON file. Default: OUTPUT_DIR or '.'")
    args = parser.parse_args(argv)

    try:
        return asyncio.run(_run(args.wallet, args.output_dir))
    except TxExportError as e:
        logger.error("cli_export_failed", wallet_id=args.wallet, error=str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
