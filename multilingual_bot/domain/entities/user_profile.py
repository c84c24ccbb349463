from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserProfile:
    name: str | None = None
    language_preference: str | None = None

    def merged(self, name: str | None = None, language_preference: str | None = None) -> "UserProfile":
        """Return a copy with the given fields applied; empty values never replace stored ones."""
        return UserProfile(
            name=name or self.name,
            language_preference=language_preference or self.language_preference,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "language_preference": self.language_preference}

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> "UserProfile":
        data = data or {}
        return UserProfile(
            name=data.get("name") or None,
            language_preference=data.get("language_preference") or None,
        )
