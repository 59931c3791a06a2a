"""
Environment variable loading for TxExport.

- SOLANA_RPC_URL: RPC endpoint (legacy name END_POINT is also read)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_txexport/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"


def load_txexport_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


def get_solana_rpc_url() -> str:
    """Resolve RPC URL. Order: SOLANA_RPC_URL > END_POINT. Empty string if neither is set."""
    load_txexport_env()
    return env_str("SOLANA_RPC_URL") or env_str("END_POINT")


def mask_rpc_url(url: str) -> str:
    """Hide API keys embedded in provider URLs before logging them."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
