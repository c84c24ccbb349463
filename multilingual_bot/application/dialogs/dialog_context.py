from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from multilingual_bot.application.dialogs.dialog import Dialog, DialogTurnResult, DialogTurnStatus
from multilingual_bot.application.exceptions import LostDialogStateError, UnknownDialogIdError
from multilingual_bot.application.state.bot_state import StatePropertyAccessor
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.domain.entities.dialog_state import DialogInstance, DialogState

if TYPE_CHECKING:
    from multilingual_bot.application.dialogs.dialog_set import DialogSet
    from multilingual_bot.application.dialogs.prompts import PromptOptions


class DialogContext:
    """
    Dialog stack for one conversation during one turn.

    Every operation writes the stack back into the dialogState property;
    flushing it to storage is left to the caller's save_changes().
    """

    def __init__(
        self,
        dialogs: "DialogSet",
        turn_context: TurnContext,
        state: DialogState,
        accessor: StatePropertyAccessor,
    ) -> None:
        self.dialogs = dialogs
        self.context = turn_context
        self.state = state
        self._accessor = accessor
        self._logger = logging.getLogger(__name__)

    @property
    def stack(self) -> list[DialogInstance]:
        return self.state.stack

    @property
    def active_dialog(self) -> DialogInstance | None:
        return self.state.stack[-1] if self.state.stack else None

    def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        dialog = self.dialogs.find(dialog_id)
        self.state.stack.append(DialogInstance(dialog_id=dialog_id))
        self._logger.debug(
            "Dialog begun",
            extra={"dialog_id": dialog_id, "conversation_id": self.context.activity.conversation_id},
        )
        result = dialog.begin_dialog(self, options)
        self._persist()
        return result

    def prompt(self, dialog_id: str, options: "PromptOptions") -> DialogTurnResult:
        return self.begin_dialog(dialog_id, options)

    def continue_dialog(self) -> DialogTurnResult:
        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(status=DialogTurnStatus.EMPTY)

        dialog = self._find_active(instance)
        result = dialog.continue_dialog(self)
        self._persist()
        return result

    def end_dialog(self, result: Any = None) -> DialogTurnResult:
        if self.state.stack:
            ended = self.state.stack.pop()
            self._logger.debug(
                "Dialog ended",
                extra={"dialog_id": ended.dialog_id, "conversation_id": self.context.activity.conversation_id},
            )

        parent = self.active_dialog
        if parent is not None:
            turn_result = self._find_active(parent).resume_dialog(self, result)
        else:
            turn_result = DialogTurnResult(status=DialogTurnStatus.COMPLETE, result=result)
        self._persist()
        return turn_result

    def cancel_all_dialogs(self) -> DialogTurnResult:
        self.state.stack.clear()
        self._persist()
        return DialogTurnResult(status=DialogTurnStatus.EMPTY)

    def _find_active(self, instance: DialogInstance) -> Dialog:
        try:
            return self.dialogs.find(instance.dialog_id)
        except UnknownDialogIdError as e:
            raise LostDialogStateError(
                f"Persisted dialog '{instance.dialog_id}' is not registered"
            ) from e

    def _persist(self) -> None:
        self._accessor.set(self.context, self.state.to_dict())
