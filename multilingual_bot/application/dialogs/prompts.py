from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import Any

from multilingual_bot.application.dialogs.dialog import Dialog, DialogTurnResult, DialogTurnStatus
from multilingual_bot.application.dialogs.dialog_context import DialogContext
from multilingual_bot.application.exceptions import LostDialogStateError
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.domain.entities.reply import Reply


@dataclass(frozen=True)
class PromptOptions:
    prompt: str
    choices: tuple[str, ...] = ()
    retry_prompt: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"prompt": self.prompt, "choices": list(self.choices), "retry_prompt": self.retry_prompt}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "PromptOptions":
        return PromptOptions(
            prompt=str(data.get("prompt", "")),
            choices=tuple(data.get("choices") or ()),
            retry_prompt=data.get("retry_prompt"),
        )


class PromptDialog(Dialog):
    """
    Single-question dialog: sends the prompt, then waits for a message it can recognize.
    The recognized value becomes the result handed back to the parent dialog.
    """

    def __init__(self, dialog_id: str) -> None:
        super().__init__(dialog_id)
        self._logger = logging.getLogger(__name__)

    def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        if not isinstance(options, PromptOptions):
            raise TypeError(f"{type(self).__name__} requires PromptOptions, got {type(options).__name__}")
        dc.active_dialog.state["options"] = options.to_dict()
        self.on_prompt(dc.context, options, is_retry=False)
        return DialogTurnResult(status=DialogTurnStatus.WAITING)

    def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        if not dc.context.activity.is_message:
            return DialogTurnResult(status=DialogTurnStatus.WAITING)

        raw_options = dc.active_dialog.state.get("options")
        if not isinstance(raw_options, dict):
            raise LostDialogStateError(f"Prompt '{self.id}' has no stored options")
        options = PromptOptions.from_dict(raw_options)

        recognized, value = self.on_recognize(dc.context, options)
        if recognized:
            return dc.end_dialog(value)

        self._logger.info(
            "Prompt input not recognized, asking again",
            extra={"dialog_id": self.id, "activity_id": dc.context.activity.id},
        )
        self.on_prompt(dc.context, options, is_retry=True)
        return DialogTurnResult(status=DialogTurnStatus.WAITING)

    def resume_dialog(self, dc: DialogContext, result: Any) -> DialogTurnResult:
        # Prompts never push children; if one ends on top of us, just ask again.
        raw_options = dc.active_dialog.state.get("options") or {}
        self.on_prompt(dc.context, PromptOptions.from_dict(raw_options), is_retry=False)
        return DialogTurnResult(status=DialogTurnStatus.WAITING)

    @abstractmethod
    def on_prompt(self, turn_context: TurnContext, options: PromptOptions, is_retry: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_recognize(self, turn_context: TurnContext, options: PromptOptions) -> tuple[bool, Any]:
        raise NotImplementedError


class TextPrompt(PromptDialog):
    def __init__(self, dialog_id: str, allow_blank: bool = True) -> None:
        super().__init__(dialog_id)
        self._allow_blank = allow_blank

    def on_prompt(self, turn_context: TurnContext, options: PromptOptions, is_retry: bool) -> None:
        text = options.retry_prompt if is_retry and options.retry_prompt else options.prompt
        turn_context.send_activity(Reply(text=text))

    def on_recognize(self, turn_context: TurnContext, options: PromptOptions) -> tuple[bool, Any]:
        text = turn_context.activity.text
        if text is None:
            return False, None
        if not self._allow_blank and not text.strip():
            return False, None
        return True, text


class ChoicePrompt(PromptDialog):
    """
    Offers the choices as suggested actions.

    By default any reply is accepted as the result. With validate_choices=True
    only an exact match of an offered choice is accepted and anything else re-prompts.
    """

    def __init__(self, dialog_id: str, validate_choices: bool = False) -> None:
        super().__init__(dialog_id)
        self._validate_choices = validate_choices

    def on_prompt(self, turn_context: TurnContext, options: PromptOptions, is_retry: bool) -> None:
        text = options.retry_prompt if is_retry and options.retry_prompt else options.prompt
        turn_context.send_activity(Reply(text=text, suggested_actions=tuple(options.choices)))

    def on_recognize(self, turn_context: TurnContext, options: PromptOptions) -> tuple[bool, Any]:
        text = turn_context.activity.text
        if text is None:
            return False, None
        if self._validate_choices and text not in options.choices:
            return False, None
        return True, text
