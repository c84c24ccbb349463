from __future__ import annotations

import logging
import threading

from multilingual_bot.application.dialogs.dialog import DialogTurnStatus
from multilingual_bot.application.dialogs.profile_dialogs import HELLO_USER, WHO_ARE_YOU, ProfileDialogs
from multilingual_bot.application.exceptions import LostDialogStateError
from multilingual_bot.application.state.bot_state import ConversationState, StatePropertyAccessor, UserState
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.application.utils.replies import (
    build_echo_reply,
    build_language_changed_reply,
    build_language_menu,
)
from multilingual_bot.domain.entities.activity import Activity
from multilingual_bot.domain.entities.reply import Reply
from multilingual_bot.domain.languages import (
    DEFAULT_LANGUAGE,
    is_language_change_requested,
    is_supported_language_code,
)


class HandleTurnUseCase:
    def __init__(
        self,
        user_state: UserState,
        conversation_state: ConversationState,
        language_preference: StatePropertyAccessor,
        profile_dialogs: ProfileDialogs | None = None,
        default_language: str = DEFAULT_LANGUAGE,
        profile_capture_command: str = "/whoami",
        profile_display_command: str = "/profile",
    ) -> None:
        self._user_state = user_state
        self._conversation_state = conversation_state
        self._language_preference = language_preference
        self._profile_dialogs = profile_dialogs
        self._default_language = default_language
        self._profile_capture_command = profile_capture_command
        self._profile_display_command = profile_display_command
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, conversation_id: str) -> threading.Lock:
        with self._lock_lock:
            if conversation_id not in self._locks:
                self._locks[conversation_id] = threading.Lock()
            return self._locks[conversation_id]

    def handle(self, activity: Activity) -> list[Reply]:
        """Process one activity to completion and return the replies it produced."""
        turn_context = TurnContext(activity)
        with self._get_lock(f"{activity.channel_id}/{activity.conversation_id}"):
            self.on_turn(turn_context)
        return list(turn_context.responses)

    def on_turn(self, turn_context: TurnContext) -> None:
        activity = turn_context.activity
        if not activity.is_message:
            self._logger.debug("Ignoring non-message activity", extra={"activity_id": activity.id, "reason": activity.type})
            return

        text = activity.text
        if text is None:
            self._logger.info("Message without text ignored", extra={"activity_id": activity.id})
            return

        if self._profile_dialogs is not None and self._run_profile_dialogs(turn_context):
            return

        user_language = self._language_preference.get(turn_context, self._default_language)
        if is_supported_language_code(text):
            if is_language_change_requested(text, user_language):
                # The translation middleware reads this preference on the way in and out.
                self._language_preference.set(turn_context, text)
                turn_context.send_activity(build_language_changed_reply(text))
                self._logger.info(
                    "Language preference changed",
                    extra={"activity_id": activity.id, "user_id": activity.user_id, "language": text},
                )
            else:
                turn_context.send_activity(build_language_menu())
            self._user_state.save_changes(turn_context)
        else:
            turn_context.send_activity(build_echo_reply(text))

    def _run_profile_dialogs(self, turn_context: TurnContext) -> bool:
        """Returns True when a profile dialog consumed the turn."""
        activity = turn_context.activity
        dc = self._profile_dialogs.dialogs.create_context(turn_context)

        try:
            result = dc.continue_dialog()
        except LostDialogStateError as e:
            self._logger.warning(
                "Dialog state lost; handling message as a new command",
                extra={"activity_id": activity.id, "conversation_id": activity.conversation_id, "reason": str(e)},
            )
            result = dc.cancel_all_dialogs()

        consumed = result.status != DialogTurnStatus.EMPTY
        if not consumed:
            if activity.text == self._profile_capture_command:
                dc.begin_dialog(WHO_ARE_YOU)
                consumed = True
            elif activity.text == self._profile_display_command:
                dc.begin_dialog(HELLO_USER)
                consumed = True

        if consumed:
            self._user_state.save_changes(turn_context)
        self._conversation_state.save_changes(turn_context)
        return consumed
