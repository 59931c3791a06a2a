"""
Application settings.

Reads the environment (after loading .env) into a frozen Settings dataclass.
The RPC URL is the only required value; a missing or malformed URL is a
startup error, never a per-request one.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from backend_txexport.config.env import (
    env_float,
    env_int,
    env_str,
    get_solana_rpc_url,
    load_txexport_env,
)
from backend_txexport.core.exceptions import ConfigError

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 3001
DEFAULT_RPC_TIMEOUT_SEC = 30.0
DEFAULT_BACKOFF_BASE_MS = 500
DEFAULT_BACKOFF_MAX_MS = 16_000
DEFAULT_MAX_FETCH_ATTEMPTS = 10
DEFAULT_MAX_TRANSACTIONS = 100


@dataclass(frozen=True)
class Settings:
    solana_rpc_url: str
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    output_dir: Path = Path(".")
    rpc_timeout_sec: float = DEFAULT_RPC_TIMEOUT_SEC
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS
    backoff_max_ms: int = DEFAULT_BACKOFF_MAX_MS
    max_fetch_attempts: int = DEFAULT_MAX_FETCH_ATTEMPTS
    max_transactions: int = DEFAULT_MAX_TRANSACTIONS


def validate_rpc_url(url: str) -> str:
    url = (url or "").strip()
    if not url or not (url.startswith("http:") or url.startswith("https:")):
        raise ConfigError("Endpoint URL must start with `http:` or `https:`.")
    return url


def get_settings() -> Settings:
    """
    Return the current application settings.

    Raises:
        ConfigError: SOLANA_RPC_URL (or END_POINT) is missing or not http(s),
            or a numeric setting cannot be parsed or is out of range.
    """
    load_txexport_env()
    rpc_url = validate_rpc_url(get_solana_rpc_url())
    try:
        settings = Settings(
            solana_rpc_url=rpc_url,
            api_host=env_str("API_HOST", DEFAULT_API_HOST),
            api_port=env_int("API_PORT", DEFAULT_API_PORT),
            output_dir=Path(env_str("OUTPUT_DIR", ".") or "."),
            rpc_timeout_sec=env_float("RPC_TIMEOUT_SEC", DEFAULT_RPC_TIMEOUT_SEC),
            backoff_base_ms=env_int("BACKOFF_BASE_MS", DEFAULT_BACKOFF_BASE_MS),
            backoff_max_ms=env_int("BACKOFF_MAX_MS", DEFAULT_BACKOFF_MAX_MS),
            max_fetch_attempts=env_int("MAX_FETCH_ATTEMPTS", DEFAULT_MAX_FETCH_ATTEMPTS),
            max_transactions=env_int("MAX_TRANSACTIONS", DEFAULT_MAX_TRANSACTIONS),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid numeric setting: {e}") from e
    _check_ranges(settings)
    return settings


def _check_ranges(settings: Settings) -> None:
    if settings.max_fetch_attempts < 1:
        raise ConfigError("MAX_FETCH_ATTEMPTS must be at least 1")
    if settings.max_transactions < 1:
        raise ConfigError("MAX_TRANSACTIONS must be at least 1")
    if settings.backoff_base_ms < 0 or settings.backoff_max_ms < 0:
        raise ConfigError("BACKOFF_BASE_MS and BACKOFF_MAX_MS must be non-negative")
    if settings.rpc_timeout_sec <= 0:
        raise ConfigError("RPC_TIMEOUT_SEC must be positive")
    if not (0 < settings.api_port < 65536):
        raise ConfigError("API_PORT must be between 1 and 65535")
