"""Shared fixtures for the bot tests."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest

from multilingual_bot.application.state.bot_state import ConversationState, UserState
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.domain.entities.activity import Activity, ActivityType
from multilingual_bot.infrastructure.store.memory_store import MemoryStateStore


class FailingStateStore(MemoryStateStore):
    """Reads normally, fails every write."""

    def write(self, key: str, data: dict[str, Any]) -> None:
        raise OSError("disk full")


@pytest.fixture
def store():
    return MemoryStateStore()


@pytest.fixture
def failing_store():
    return FailingStateStore()


@pytest.fixture
def user_state(store):
    return UserState(store)


@pytest.fixture
def conversation_state(store):
    return ConversationState(store)


@pytest.fixture
def make_activity():
    def _make(
        text: str | None,
        user_id: str = "user-1",
        conversation_id: str | None = None,
        activity_type: str = ActivityType.MESSAGE.value,
        channel_id: str = "test",
    ) -> Activity:
        return Activity(
            id=uuid4().hex,
            type=activity_type,
            text=text,
            channel_id=channel_id,
            user_id=user_id,
            conversation_id=conversation_id or f"conv-{user_id}",
        )

    return _make


@pytest.fixture
def make_turn(make_activity):
    def _make(text: str | None, **kwargs: Any) -> TurnContext:
        return TurnContext(make_activity(text, **kwargs))

    return _make
