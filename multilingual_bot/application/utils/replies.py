from __future__ import annotations

from multilingual_bot.domain.entities.reply import Reply
from multilingual_bot.domain.languages import SUPPORTED_LANGUAGES

ECHO_PREFIX = "You said: "
LANGUAGE_MENU_TEXT = "Choose your language:"


def build_language_changed_reply(language: str) -> Reply:
    return Reply(text=f"Your current language code is: {language}")


def build_language_menu() -> Reply:
    return Reply(text=LANGUAGE_MENU_TEXT, suggested_actions=SUPPORTED_LANGUAGES)


def build_echo_reply(text: str) -> Reply:
    return Reply(text=f"{ECHO_PREFIX}{text}")
