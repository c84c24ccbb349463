"""
Tests for the dialog engine: dialog set, waterfall stepping, prompts and nested dialogs.
"""

from __future__ import annotations

import pytest

from multilingual_bot.application.dialogs.dialog import DialogTurnStatus
from multilingual_bot.application.dialogs.dialog_set import DialogSet
from multilingual_bot.application.dialogs.prompts import ChoicePrompt, PromptOptions, TextPrompt
from multilingual_bot.application.dialogs.waterfall import WaterfallDialog
from multilingual_bot.application.exceptions import (
    DuplicateDialogIdError,
    LostDialogStateError,
    UnknownDialogIdError,
)
from multilingual_bot.application.state.bot_state import ConversationState
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.domain.entities.reply import Reply


@pytest.fixture
def dialog_state(conversation_state):
    return conversation_state.create_property("dialogState")


@pytest.fixture
def dialogs(dialog_state):
    return DialogSet(dialog_state)


@pytest.fixture
def run_turn(dialogs, conversation_state, make_turn):
    """Run one turn: begin a dialog if given, otherwise continue the active one."""

    def _run(text, begin=None, **kwargs):
        turn = make_turn(text, **kwargs)
        dc = dialogs.create_context(turn)
        result = dc.begin_dialog(begin) if begin else dc.continue_dialog()
        conversation_state.save_changes(turn)
        return result, turn.responses, len(dc.stack)

    return _run


def test_duplicate_dialog_id_is_rejected(dialogs):
    dialogs.add(TextPrompt("ask"))

    with pytest.raises(DuplicateDialogIdError):
        dialogs.add(ChoicePrompt("ask"))


def test_unknown_dialog_id(dialogs, make_turn):
    with pytest.raises(UnknownDialogIdError):
        dialogs.find("missing")
    with pytest.raises(UnknownDialogIdError):
        dialogs.create_context(make_turn("hi")).begin_dialog("missing")


def test_waterfall_requires_steps():
    with pytest.raises(ValueError):
        WaterfallDialog("empty", [])


def test_continue_without_active_dialog_is_empty(run_turn):
    result, responses, depth = run_turn("hi")

    assert result.status == DialogTurnStatus.EMPTY
    assert responses == []
    assert depth == 0


def test_one_step_per_turn_and_no_step_runs_twice(dialogs, run_turn):
    calls: list[tuple[int, object]] = []

    def step(index, outcome):
        def _step(step_context):
            calls.append((index, step_context.result))
            return outcome(step_context)

        return _step

    dialogs.add(
        WaterfallDialog(
            "three",
            [
                step(0, lambda s: s.next()),
                step(1, lambda s: s.next()),
                step(2, lambda s: s.end_dialog("done")),
            ],
        )
    )

    result, _, depth = run_turn("start", begin="three")
    assert result.status == DialogTurnStatus.WAITING
    assert calls == [(0, None)]
    assert depth == 1

    result, _, _ = run_turn("a")
    assert result.status == DialogTurnStatus.WAITING
    assert calls == [(0, None), (1, "a")]

    result, _, depth = run_turn("b")
    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == "done"
    assert calls == [(0, None), (1, "a"), (2, "b")]
    assert depth == 0

    result, _, _ = run_turn("c")
    assert result.status == DialogTurnStatus.EMPTY
    assert len(calls) == 3


def test_plain_return_value_on_last_step_ends_dialog(dialogs, run_turn):
    dialogs.add(WaterfallDialog("single", [lambda step: "value"]))

    result, _, depth = run_turn("go", begin="single")

    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == "value"
    assert depth == 0


def test_step_values_persist_between_turns(dialogs, run_turn):
    def first(step):
        step.values["first"] = "kept"
        return step.next()

    def second(step):
        return step.end_dialog(step.values.get("first"))

    dialogs.add(WaterfallDialog("values", [first, second]))

    run_turn("go", begin="values")
    result, _, _ = run_turn("next")

    assert result.result == "kept"


def test_text_prompt_resumes_waterfall_with_reply(dialogs, run_turn):
    dialogs.add(TextPrompt("text"))
    dialogs.add(
        WaterfallDialog(
            "ask",
            [
                lambda step: step.prompt("text", "What is your name?"),
                lambda step: step.end_dialog(f"hello {step.result}"),
            ],
        )
    )

    result, responses, depth = run_turn("go", begin="ask")
    assert result.status == DialogTurnStatus.WAITING
    assert responses == [Reply(text="What is your name?")]
    assert depth == 2

    result, responses, depth = run_turn("Ana")
    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == "hello Ana"
    assert responses == []
    assert depth == 0


def test_prompt_ignores_non_message_activity(dialogs, run_turn):
    dialogs.add(TextPrompt("text"))
    dialogs.add(WaterfallDialog("ask", [lambda step: step.prompt("text", "Name?"), lambda step: step.end_dialog()]))
    run_turn("go", begin="ask")

    result, responses, depth = run_turn(None, activity_type="typing")

    assert result.status == DialogTurnStatus.WAITING
    assert responses == []
    assert depth == 2


def test_choice_prompt_accepts_any_text_by_default(dialogs, run_turn):
    dialogs.add(ChoicePrompt("choice"))
    dialogs.add(
        WaterfallDialog(
            "pick",
            [
                lambda step: step.prompt("choice", "Pick one", choices=["a", "b"]),
                lambda step: step.end_dialog(step.result),
            ],
        )
    )

    _, responses, _ = run_turn("go", begin="pick")
    assert responses == [Reply(text="Pick one", suggested_actions=("a", "b"))]

    result, _, _ = run_turn("zzz")
    assert result.result == "zzz"


def test_validating_choice_prompt_reprompts_on_mismatch(dialogs, run_turn):
    dialogs.add(ChoicePrompt("choice", validate_choices=True))
    dialogs.add(
        WaterfallDialog(
            "pick",
            [
                lambda step: step.prompt("choice", "Pick one", choices=["a", "b"], retry_prompt="a or b, please"),
                lambda step: step.end_dialog(step.result),
            ],
        )
    )
    run_turn("go", begin="pick")

    result, responses, depth = run_turn("c")
    assert result.status == DialogTurnStatus.WAITING
    assert responses == [Reply(text="a or b, please", suggested_actions=("a", "b"))]
    assert depth == 2

    result, responses, depth = run_turn("b")
    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == "b"
    assert depth == 0


def test_prompt_requires_prompt_options(dialogs, make_turn):
    dialogs.add(TextPrompt("text"))
    dc = dialogs.create_context(make_turn("hi"))

    with pytest.raises(TypeError):
        dc.begin_dialog("text", {"prompt": "not options"})

    assert isinstance(PromptOptions.from_dict(PromptOptions("Name?").to_dict()), PromptOptions)


def test_ending_child_resumes_parent_with_child_result(dialogs, run_turn):
    received: list[object] = []

    def parent_record(step):
        received.append(step.result)
        return step.next()

    dialogs.add(
        WaterfallDialog(
            "parent",
            [
                lambda step: step.begin_dialog("child"),
                parent_record,
                lambda step: step.end_dialog("parent done"),
            ],
        )
    )
    dialogs.add(
        WaterfallDialog(
            "child",
            [
                lambda step: step.next(),
                lambda step: step.end_dialog(f"child:{step.result}"),
            ],
        )
    )

    result, _, depth = run_turn("go", begin="parent")
    assert result.status == DialogTurnStatus.WAITING
    assert depth == 2

    result, _, depth = run_turn("hi")
    assert received == ["child:hi"]
    assert result.status == DialogTurnStatus.WAITING
    assert depth == 1

    result, _, depth = run_turn("bye")
    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == "parent done"
    assert depth == 0


def test_unknown_dialog_on_stack_is_lost_state(dialogs, dialog_state, conversation_state, make_turn):
    turn = make_turn("seed")
    dialog_state.set(turn, {"stack": [{"dialog_id": "removed", "cursor": 1, "state": {}}]})
    conversation_state.save_changes(turn)

    dc = dialogs.create_context(make_turn("hello"))
    with pytest.raises(LostDialogStateError):
        dc.continue_dialog()

    assert dc.cancel_all_dialogs().status == DialogTurnStatus.EMPTY
    assert dc.stack == []


def test_prompt_without_stored_options_is_lost_state(dialogs, dialog_state, conversation_state, make_turn):
    dialogs.add(TextPrompt("text"))
    turn = make_turn("seed")
    dialog_state.set(turn, {"stack": [{"dialog_id": "text", "cursor": 0, "state": {}}]})
    conversation_state.save_changes(turn)

    with pytest.raises(LostDialogStateError):
        dialogs.create_context(make_turn("Ana")).continue_dialog()


def test_dialog_stack_survives_new_state_objects(dialogs, store, make_activity):
    """Only the persisted stack carries the dialog between turns."""
    dialogs.add(TextPrompt("text"))
    dialogs.add(
        WaterfallDialog(
            "ask",
            [lambda step: step.prompt("text", "Name?"), lambda step: step.end_dialog(step.result)],
        )
    )

    first_state = ConversationState(store)
    first_dialogs = DialogSet(first_state.create_property("dialogState"))
    first_dialogs.add(dialogs.find("text")).add(dialogs.find("ask"))
    first_turn = TurnContext(make_activity("go"))
    first_dialogs.create_context(first_turn).begin_dialog("ask")
    first_state.save_changes(first_turn)

    second_state = ConversationState(store)
    second_dialogs = DialogSet(second_state.create_property("dialogState"))
    second_dialogs.add(dialogs.find("text")).add(dialogs.find("ask"))
    second_turn = TurnContext(make_activity("Ana"))
    result = second_dialogs.create_context(second_turn).continue_dialog()

    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == "Ana"


def test_text_prompt_can_reject_blank_replies(dialogs, run_turn):
    dialogs.add(TextPrompt("name", allow_blank=False))
    dialogs.add(
        WaterfallDialog(
            "ask",
            [
                lambda step: step.prompt("name", "Name?", retry_prompt="Name, please?"),
                lambda step: step.end_dialog(step.result),
            ],
        )
    )
    run_turn("go", begin="ask")

    result, responses, depth = run_turn("  ")
    assert result.status == DialogTurnStatus.WAITING
    assert responses == [Reply(text="Name, please?")]
    assert depth == 2

    result, _, _ = run_turn("Ana")
    assert result.result == "Ana"
