from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from multilingual_bot.application.dialogs.dialog_context import DialogContext


class DialogTurnStatus(str, Enum):
    EMPTY = "empty"  # no dialog was active
    WAITING = "waiting"  # the active dialog is parked until the next message
    COMPLETE = "complete"  # the outermost dialog ended this turn


@dataclass(frozen=True)
class DialogTurnResult:
    status: DialogTurnStatus
    result: Any = None


class Dialog(ABC):
    def __init__(self, dialog_id: str) -> None:
        if not dialog_id:
            raise ValueError("dialog_id must be a non-empty string")
        self.id = dialog_id

    @abstractmethod
    def begin_dialog(self, dc: "DialogContext", options: Any = None) -> DialogTurnResult:
        raise NotImplementedError

    def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        return dc.end_dialog(None)

    def resume_dialog(self, dc: "DialogContext", result: Any) -> DialogTurnResult:
        """Called when a child dialog pushed by this one ends with result."""
        return dc.end_dialog(result)
