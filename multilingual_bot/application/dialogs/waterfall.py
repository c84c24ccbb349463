from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from multilingual_bot.application.dialogs.dialog import Dialog, DialogTurnResult, DialogTurnStatus
from multilingual_bot.application.dialogs.dialog_context import DialogContext
from multilingual_bot.application.dialogs.prompts import PromptOptions
from multilingual_bot.application.turn_context import TurnContext


@dataclass(frozen=True)
class StepOutcome:
    pass


@dataclass(frozen=True)
class BeginDialog(StepOutcome):
    """Push a child dialog; its final result is fed to the next step."""

    dialog_id: str
    options: Any = None


@dataclass(frozen=True)
class Prompt(BeginDialog):
    pass


@dataclass(frozen=True)
class End(StepOutcome):
    result: Any = None


@dataclass(frozen=True)
class Next(StepOutcome):
    """Park the waterfall; the next step runs on the following message."""

    result: Any = None


class WaterfallStepContext:
    def __init__(self, dc: DialogContext, index: int, result: Any, values: dict[str, Any]) -> None:
        self._dc = dc
        self.index = index
        self.result = result
        self.values = values

    @property
    def context(self) -> TurnContext:
        return self._dc.context

    def prompt(
        self,
        prompt_id: str,
        text: str,
        choices: Sequence[str] = (),
        retry_prompt: str | None = None,
    ) -> Prompt:
        options = PromptOptions(prompt=text, choices=tuple(choices), retry_prompt=retry_prompt)
        return Prompt(dialog_id=prompt_id, options=options)

    def begin_dialog(self, dialog_id: str, options: Any = None) -> BeginDialog:
        return BeginDialog(dialog_id=dialog_id, options=options)

    def end_dialog(self, result: Any = None) -> End:
        return End(result=result)

    def next(self, result: Any = None) -> Next:
        return Next(result=result)


WaterfallStep = Callable[[WaterfallStepContext], Any]


class WaterfallDialog(Dialog):
    """
    Runs its steps in order, exactly one step per turn.

    The cursor on the dialog instance always points at the next step to run and is
    advanced before the step executes, so a completed step is never run again.
    A step that returns anything other than a StepOutcome is treated as Next.
    """

    def __init__(self, dialog_id: str, steps: Sequence[WaterfallStep]) -> None:
        super().__init__(dialog_id)
        if not steps:
            raise ValueError(f"Waterfall '{dialog_id}' needs at least one step")
        self._steps = list(steps)
        self._logger = logging.getLogger(__name__)

    def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        dc.active_dialog.state["values"] = {}
        return self._run_step(dc, 0, None)

    def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        if not dc.context.activity.is_message:
            return DialogTurnResult(status=DialogTurnStatus.WAITING)
        return self._run_step(dc, dc.active_dialog.cursor, dc.context.activity.text)

    def resume_dialog(self, dc: DialogContext, result: Any) -> DialogTurnResult:
        return self._run_step(dc, dc.active_dialog.cursor, result)

    def _run_step(self, dc: DialogContext, index: int, result: Any) -> DialogTurnResult:
        instance = dc.active_dialog
        if index >= len(self._steps):
            return dc.end_dialog(result)

        instance.cursor = index + 1
        step_context = WaterfallStepContext(dc, index, result, instance.state.setdefault("values", {}))
        self._logger.debug(
            "Running waterfall step",
            extra={"dialog_id": self.id, "step": index, "activity_id": dc.context.activity.id},
        )
        outcome = self._steps[index](step_context)

        if isinstance(outcome, Prompt):
            return dc.prompt(outcome.dialog_id, outcome.options)
        if isinstance(outcome, BeginDialog):
            return dc.begin_dialog(outcome.dialog_id, outcome.options)
        if isinstance(outcome, End):
            return dc.end_dialog(outcome.result)

        value = outcome.result if isinstance(outcome, Next) else outcome
        if instance.cursor >= len(self._steps):
            return dc.end_dialog(value)
        return DialogTurnResult(status=DialogTurnStatus.WAITING)
