"""
Tests for get_settings(): required RPC URL, legacy env name, defaults, numeric parsing.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from backend_txexport.config import get_settings
from backend_txexport.config.env import mask_rpc_url
from backend_txexport.core.exceptions import ConfigError


def test_missing_rpc_url_is_fatal(isolated_env):
    with pytest.raises(ConfigError, match="http:"):
        get_settings()


@pytest.mark.parametrize("url", ["ftp://node.example", "wss://node.example", "node.example", "   "])
def test_non_http_rpc_url_is_fatal(isolated_env, url):
    isolated_env.setenv("SOLANA_RPC_URL", url)
    with pytest.raises(ConfigError):
        get_settings()


def test_defaults(isolated_env):
    isolated_env.setenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")
    s = get_settings()
    assert s.solana_rpc_url == "https://api.mainnet-beta.solana.com"
    assert s.api_port == 3001
    assert s.api_host == "0.0.0.0"
    assert s.output_dir == Path(".")
    assert (s.backoff_base_ms, s.backoff_max_ms, s.max_fetch_attempts) == (500, 16000, 10)
    assert s.max_transactions == 100


def test_legacy_end_point_name(isolated_env):
    isolated_env.setenv("END_POINT", "http://localhost:8899")
    assert get_settings().solana_rpc_url == "http://localhost:8899"


def test_solana_rpc_url_wins_over_end_point(isolated_env):
    isolated_env.setenv("END_POINT", "http://legacy:8899")
    isolated_env.setenv("SOLANA_RPC_URL", "https://primary")
    assert get_settings().solana_rpc_url == "https://primary"


def test_overrides(isolated_env, tmp_path):
    isolated_env.setenv("SOLANA_RPC_URL", "https://rpc")
    isolated_env.setenv("API_PORT", "8080")
    isolated_env.setenv("OUTPUT_DIR", str(tmp_path))
    isolated_env.setenv("MAX_FETCH_ATTEMPTS", "3")
    s = get_settings()
    assert s.api_port == 8080
    assert s.output_dir == tmp_path
    assert s.max_fetch_attempts == 3


def test_bad_number_is_config_error(isolated_env):
    isolated_env.setenv("SOLANA_RPC_URL", "https://rpc")
    isolated_env.setenv("API_PORT", "eighty")
    with pytest.raises(ConfigError):
        get_settings()


def test_mask_rpc_url():
    assert mask_rpc_url("https://mainnet.helius-rpc.com/?api-key=secret") == "https://mainnet.helius-rpc.com/?api-key=***"
    assert mask_rpc_url("https://api.devnet.solana.com") == "https://api.devnet.solana.com"


@pytest.mark.parametrize(
    "key,value",
    [
        ("MAX_TRANSACTIONS", "0"),
        ("MAX_FETCH_ATTEMPTS", "0"),
        ("BACKOFF_BASE_MS", "-1"),
        ("RPC_TIMEOUT_SEC", "0"),
        ("API_PORT", "70000"),
    ],
)
def test_out_of_range_number_is_config_error(isolated_env, key, value):
    isolated_env.setenv("SOLANA_RPC_URL", "https://rpc")
    isolated_env.setenv(key, value)
    with pytest.raises(ConfigError, match=key):
        get_settings()
