"""
Pytest fixtures for TxExport tests. Recording sleep and isolated config env.
"""

from __future__ import annotations

import pytest

from tests.helpers import CONFIG_ENV_KEYS, RecordingSleep


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def isolated_env(monkeypatch):
    """Clear config env vars and stop .env from being loaded, so tests control settings."""
    for key in CONFIG_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("backend_txexport.config.env.load_txexport_env", lambda: None)
    monkeypatch.setattr("backend_txexport.config.settings.load_txexport_env", lambda: None)
    return monkeypatch
