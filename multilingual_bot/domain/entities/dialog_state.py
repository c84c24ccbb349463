from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DialogInstance:
    dialog_id: str
    cursor: int = 0  # index of the next step to run
    state: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"dialog_id": self.dialog_id, "cursor": self.cursor, "state": self.state}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "DialogInstance":
        return DialogInstance(
            dialog_id=str(data.get("dialog_id", "")),
            cursor=int(data.get("cursor", 0)),
            state=dict(data.get("state") or {}),
        )


@dataclass
class DialogState:
    # innermost dialog last
    stack: list[DialogInstance] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"stack": [instance.to_dict() for instance in self.stack]}

    @staticmethod
    def from_dict(data: dict[str, Any] | None) -> "DialogState":
        data = data or {}
        return DialogState(stack=[DialogInstance.from_dict(item) for item in data.get("stack", [])])
