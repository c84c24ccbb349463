from __future__ import annotations

import logging

from multilingual_bot.application.dialogs.profile_dialogs import ProfileDialogs
from multilingual_bot.application.ports.state_store import StateStorePort
from multilingual_bot.application.state.bot_state import ConversationState, UserState
from multilingual_bot.application.use_cases.handle_turn import HandleTurnUseCase
from multilingual_bot.core.config import settings
from multilingual_bot.infrastructure.store.json_store import JsonStateStore
from multilingual_bot.infrastructure.store.memory_store import MemoryStateStore

LANGUAGE_PREFERENCE_PROPERTY = "languagePreference"
USER_PROFILE_PROPERTY = "user"
DIALOG_STATE_PROPERTY = "dialogState"

_state_store: StateStorePort | None = None
_use_case: HandleTurnUseCase | None = None


def get_state_store() -> StateStorePort:
    global _state_store
    if _state_store is None:
        if settings.STATE_STORE == "json":
            _state_store = JsonStateStore(data_dir=settings.STATE_DATA_DIR)
        else:
            _state_store = MemoryStateStore()
        logging.getLogger(__name__).info("Using %s", type(_state_store).__name__)
    return _state_store


def build_handle_turn_use_case(store: StateStorePort) -> HandleTurnUseCase:
    user_state = UserState(store)
    conversation_state = ConversationState(store)

    profile_dialogs = None
    if settings.PROFILE_DIALOGS_ENABLED:
        profile_dialogs = ProfileDialogs(
            dialog_state=conversation_state.create_property(DIALOG_STATE_PROPERTY),
            user_profile=user_state.create_property(USER_PROFILE_PROPERTY),
            validate_language_choice=settings.STRICT_LANGUAGE_CHOICE,
        )

    return HandleTurnUseCase(
        user_state=user_state,
        conversation_state=conversation_state,
        language_preference=user_state.create_property(LANGUAGE_PREFERENCE_PROPERTY),
        profile_dialogs=profile_dialogs,
        default_language=settings.DEFAULT_LANGUAGE,
        profile_capture_command=settings.PROFILE_CAPTURE_COMMAND,
        profile_display_command=settings.PROFILE_DISPLAY_COMMAND,
    )


def get_handle_turn_use_case() -> HandleTurnUseCase:
    global _use_case
    if _use_case is None:
        _use_case = build_handle_turn_use_case(get_state_store())
    return _use_case


def get_container() -> dict[str, object]:
    return {
        "use_case": get_handle_turn_use_case(),
        "store": get_state_store(),
    }
