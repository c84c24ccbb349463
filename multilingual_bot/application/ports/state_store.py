from abc import ABC, abstractmethod
from typing import Any


class StateStorePort(ABC):
    @abstractmethod
    def read(self, key: str) -> dict[str, Any] | None:
        """
        Return the stored document for key, or None if nothing was written yet.
        """
        raise NotImplementedError

    @abstractmethod
    def write(self, key: str, data: dict[str, Any]) -> None:
        """
        Replace the stored document for key. Must raise on failure.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError
