from __future__ import annotations

import copy
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from multilingual_bot.application.exceptions import PersistenceFailureError
from multilingual_bot.application.ports.state_store import StateStorePort
from multilingual_bot.application.turn_context import TurnContext


def _fingerprint(state: dict[str, Any]) -> str:
    return json.dumps(state, sort_keys=True, ensure_ascii=False)


@dataclass
class CachedState:
    state: dict[str, Any]
    loaded_fingerprint: str

    @property
    def is_changed(self) -> bool:
        return _fingerprint(self.state) != self.loaded_fingerprint


class BotState(ABC):
    """
    Buffered view over one state document per storage key.

    The document is read at most once per turn and cached on the TurnContext.
    Writes stay in the cache until save_changes() flushes them; anything not
    flushed before the turn ends is lost.
    """

    def __init__(self, store: StateStorePort, scope: str) -> None:
        self._store = store
        self._scope = scope
        self._cache_key = f"bot_state:{scope}"
        self._logger = logging.getLogger(__name__)

    @abstractmethod
    def get_storage_key(self, turn_context: TurnContext) -> str:
        raise NotImplementedError

    def create_property(self, name: str) -> "StatePropertyAccessor":
        return StatePropertyAccessor(self, name)

    def load(self, turn_context: TurnContext, force: bool = False) -> dict[str, Any]:
        cached = turn_context.turn_state.get(self._cache_key)
        if cached is None or force:
            key = self.get_storage_key(turn_context)
            try:
                state = self._store.read(key) or {}
            except Exception as e:
                raise PersistenceFailureError(f"Failed to load {self._scope} state for {key}") from e
            cached = CachedState(state=state, loaded_fingerprint=_fingerprint(state))
            turn_context.turn_state[self._cache_key] = cached
        return cached.state

    def save_changes(self, turn_context: TurnContext, force: bool = False) -> bool:
        """Flush the cached document. Returns True if a write happened."""
        cached: CachedState | None = turn_context.turn_state.get(self._cache_key)
        if cached is None or not (force or cached.is_changed):
            return False

        key = self.get_storage_key(turn_context)
        try:
            self._store.write(key, cached.state)
        except Exception as e:
            self._logger.error(
                "State flush failed",
                extra={
                    "activity_id": turn_context.activity.id,
                    "reason": f"{type(e).__name__}: {e}",
                },
            )
            raise PersistenceFailureError(f"Failed to save {self._scope} state for {key}") from e

        cached.loaded_fingerprint = _fingerprint(cached.state)
        return True

    def get_property_value(self, turn_context: TurnContext, name: str) -> Any:
        return self.load(turn_context).get(name)

    def set_property_value(self, turn_context: TurnContext, name: str, value: Any) -> None:
        self.load(turn_context)[name] = value

    def delete_property_value(self, turn_context: TurnContext, name: str) -> None:
        self.load(turn_context).pop(name, None)

    def has_property(self, turn_context: TurnContext, name: str) -> bool:
        return name in self.load(turn_context)


class UserState(BotState):
    def __init__(self, store: StateStorePort) -> None:
        super().__init__(store, scope="user")

    def get_storage_key(self, turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if not activity.channel_id or not activity.user_id:
            raise ValueError("UserState requires activity.channel_id and activity.user_id")
        return f"{activity.channel_id}/users/{activity.user_id}"


class ConversationState(BotState):
    def __init__(self, store: StateStorePort) -> None:
        super().__init__(store, scope="conversation")

    def get_storage_key(self, turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if not activity.channel_id or not activity.conversation_id:
            raise ValueError("ConversationState requires activity.channel_id and activity.conversation_id")
        return f"{activity.channel_id}/conversations/{activity.conversation_id}"


class StatePropertyAccessor:
    """Named property inside a BotState document."""

    def __init__(self, bot_state: BotState, name: str) -> None:
        self._bot_state = bot_state
        self.name = name

    def get(self, turn_context: TurnContext, default: Any = None) -> Any:
        """Return the stored value, storing a copy of default first if the property is absent."""
        if not self._bot_state.has_property(turn_context, self.name):
            if default is None:
                return None
            self._bot_state.set_property_value(turn_context, self.name, copy.deepcopy(default))
        return self._bot_state.get_property_value(turn_context, self.name)

    def set(self, turn_context: TurnContext, value: Any) -> None:
        self._bot_state.set_property_value(turn_context, self.name, value)

    def delete(self, turn_context: TurnContext) -> None:
        self._bot_state.delete_property_value(turn_context, self.name)
