from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any
from urllib.parse import quote

from multilingual_bot.application.ports.state_store import StateStorePort


class JsonStateStore(StateStorePort):
    def __init__(self, data_dir: str = "./data/state") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, key: str) -> threading.Lock:
        """Get or create a lock for a storage key."""
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def _get_file_path(self, key: str) -> Path:
        """Storage keys contain slashes, so they are percent-encoded into one file name."""
        return self._data_dir / f"{quote(key, safe='')}.json"

    def read(self, key: str) -> dict[str, Any] | None:
        file_path = self._get_file_path(key)
        with self._get_lock(key):
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (ValueError, OSError) as e:
                # Bad JSON or bad UTF-8: start over with empty state
                self._logger.warning(
                    "Discarding unreadable state file", extra={"reason": str(e), "path": str(file_path)}
                )
                return None
            if not isinstance(data, dict):
                self._logger.warning("Discarding non-object state file", extra={"path": str(file_path)})
                return None
            return data

    def write(self, key: str, data: dict[str, Any]) -> None:
        """Save a document to its JSON file atomically."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")

        with self._get_lock(key):
            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    temp_path.unlink(missing_ok=True)
                raise

    def delete(self, key: str) -> None:
        with self._get_lock(key):
            self._get_file_path(key).unlink(missing_ok=True)
