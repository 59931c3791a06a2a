"""
JSON file sink for exported transactions.

One file per wallet at <output_dir>/transactions_<wallet>.json, rewritten in
full on every export. Writes go to a temp file in the same directory and are
moved into place with os.replace, so readers never see a partial file; writes
to the same path from concurrent requests are serialized. Last write wins.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
import weakref
from pathlib import Path
from typing import Any, Sequence

from backend_txexport.core.exceptions import PersistenceFailure
from backend_txexport.exporter.normalizer import SimplifiedTransaction
from backend_txexport.txexport_logging import get_logger

logger = get_logger(__name__)


def output_path_for(output_dir: str | Path, wallet_address: str) -> str:
    """./transactions_<wallet>.json for the default output dir."""
    return os.path.join(str(output_dir), f"transactions_{wallet_address}.json")


def write_json_atomic(path: str | Path, payload: Any) -> None:
    """Serialize payload as UTF-8 JSON (indent=2) and atomically replace path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


class JsonFileSink:
    def __init__(self, output_dir: str | Path = ".") -> None:
        self._output_dir = output_dir
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    @property
    def output_dir(self) -> str | Path:
        return self._output_dir

    def path_for(self, wallet_address: str) -> str:
        return output_path_for(self._output_dir, wallet_address)

    def _lock_for(self, path: str) -> asyncio.Lock:
        key = os.path.abspath(path)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def write(
        self,
        wallet_address: str,
        records: Sequence[SimplifiedTransaction],
    ) -> str:
        """Write records for wallet_address; return the file path. Raises PersistenceFailure."""
        path = self.path_for(wallet_address)
        payload = [r.to_dict() for r in records]
        lock = self._lock_for(path)
        async with lock:
            try:
                await asyncio.to_thread(write_json_atomic, path, payload)
            except OSError as e:
                logger.error("tx_file_write_failed", wallet_id=wallet_address, path=path, error=str(e))
                raise PersistenceFailure(f"Failed to write {path}: {e}") from e
        logger.info("tx_file_written", wallet_id=wallet_address, path=path, record_count=len(payload))
        return path
