from __future__ import annotations

import logging

from multilingual_bot.application.dialogs.dialog_set import DialogSet
from multilingual_bot.application.dialogs.prompts import ChoicePrompt, TextPrompt
from multilingual_bot.application.dialogs.waterfall import StepOutcome, WaterfallDialog, WaterfallStepContext
from multilingual_bot.application.state.bot_state import StatePropertyAccessor
from multilingual_bot.application.turn_context import TurnContext
from multilingual_bot.domain.entities.user_profile import UserProfile
from multilingual_bot.domain.languages import SUPPORTED_LANGUAGES

WHO_ARE_YOU = "who_are_you"
HELLO_USER = "hello_user"

NAME_PROMPT = "name_prompt"
LANGUAGE_PROMPT = "language_prompt"


class ProfileDialogs:
    """
    Profile capture ("who_are_you") and display ("hello_user") dialogs.

    who_are_you: ask for a language, ask for a name, store both on the user profile.
    hello_user: read the stored profile back to the user.
    """

    def __init__(
        self,
        dialog_state: StatePropertyAccessor,
        user_profile: StatePropertyAccessor,
        validate_language_choice: bool = False,
    ) -> None:
        self._user_profile = user_profile
        self._logger = logging.getLogger(__name__)

        self.dialogs = DialogSet(dialog_state)
        self.dialogs.add(TextPrompt(NAME_PROMPT, allow_blank=False))
        self.dialogs.add(ChoicePrompt(LANGUAGE_PROMPT, validate_choices=validate_language_choice))
        self.dialogs.add(
            WaterfallDialog(
                WHO_ARE_YOU,
                [
                    self.prompt_for_language,
                    self.prompt_for_name,
                    self.capture_name,
                ],
            )
        )
        self.dialogs.add(WaterfallDialog(HELLO_USER, [self.display_profile]))

    def get_profile(self, turn_context: TurnContext) -> UserProfile:
        return UserProfile.from_dict(self._user_profile.get(turn_context, {}))

    def _save_profile(self, turn_context: TurnContext, profile: UserProfile) -> None:
        self._user_profile.set(turn_context, profile.to_dict())

    def prompt_for_language(self, step: WaterfallStepContext) -> StepOutcome:
        return step.prompt(
            LANGUAGE_PROMPT,
            "Please select a language",
            choices=SUPPORTED_LANGUAGES,
            retry_prompt=f"Please pick one of: {', '.join(SUPPORTED_LANGUAGES)}",
        )

    def prompt_for_name(self, step: WaterfallStepContext) -> StepOutcome:
        profile = self.get_profile(step.context).merged(language_preference=step.result)
        self._save_profile(step.context, profile)
        return step.prompt(NAME_PROMPT, "What is your name?", retry_prompt="Please tell me your name.")

    def capture_name(self, step: WaterfallStepContext) -> StepOutcome:
        profile = self.get_profile(step.context).merged(name=(step.result or "").strip())
        self._save_profile(step.context, profile)
        self._logger.info(
            "Profile captured",
            extra={"user_id": step.context.activity.user_id, "language": profile.language_preference},
        )
        step.context.send_activity(f"Thanks, {profile.name or 'friend'}. Your profile is saved.")
        return step.end_dialog(profile.to_dict())

    def display_profile(self, step: WaterfallStepContext) -> StepOutcome:
        profile = self.get_profile(step.context)
        step.context.send_activity(
            f"Your name is {profile.name or 'unknown'} and you chose {profile.language_preference or 'no language'}."
        )
        return step.end_dialog(profile.to_dict())
