from __future__ import annotations

import copy
from typing import Any

from multilingual_bot.application.ports.state_store import StateStorePort


class MemoryStateStore(StateStorePort):
    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    def read(self, key: str) -> dict[str, Any] | None:
        data = self._documents.get(key)
        return copy.deepcopy(data) if data is not None else None

    def write(self, key: str, data: dict[str, Any]) -> None:
        self._documents[key] = copy.deepcopy(data)

    def delete(self, key: str) -> None:
        self._documents.pop(key, None)
