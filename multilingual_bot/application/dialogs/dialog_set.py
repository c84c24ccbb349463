from __future__ import annotations

from multilingual_bot.application.dialogs.dialog import Dialog
from multilingual_bot.application.dialogs.dialog_context import DialogContext
from multilingual_bot.application.exceptions import DuplicateDialogIdError, UnknownDialogIdError
from multilingual_bot.application.state.bot_state import StatePropertyAccessor
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.domain.entities.dialog_state import DialogState


class DialogSet:
    """Catalog of dialogs addressable by id, bound to the property holding the dialog stack."""

    def __init__(self, dialog_state: StatePropertyAccessor) -> None:
        self._dialog_state = dialog_state
        self._dialogs: dict[str, Dialog] = {}

    def add(self, dialog: Dialog) -> "DialogSet":
        if dialog.id in self._dialogs:
            raise DuplicateDialogIdError(f"Dialog '{dialog.id}' is already registered")
        self._dialogs[dialog.id] = dialog
        return self

    def find(self, dialog_id: str) -> Dialog:
        try:
            return self._dialogs[dialog_id]
        except KeyError:
            raise UnknownDialogIdError(f"Dialog '{dialog_id}' is not registered") from None

    def create_context(self, turn_context: TurnContext) -> DialogContext:
        # absent until a dialog is first begun
        raw = self._dialog_state.get(turn_context)
        return DialogContext(self, turn_context, DialogState.from_dict(raw), self._dialog_state)
