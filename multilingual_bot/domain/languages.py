from __future__ import annotations

ENGLISH_LANGUAGE = "en"
KOREAN_LANGUAGE = "ko"
SPANISH_LANGUAGE = "es"
DEFAULT_LANGUAGE = ENGLISH_LANGUAGE

# Order shown in the "choose your language" menu
SUPPORTED_LANGUAGES: tuple[str, ...] = (KOREAN_LANGUAGE, ENGLISH_LANGUAGE, SPANISH_LANGUAGE)


def is_supported_language_code(utterance: str | None) -> bool:
    if not utterance:
        return False
    return utterance in SUPPORTED_LANGUAGES


def is_language_change_requested(utterance: str | None, current_language: str) -> bool:
    """
    Language switches are requested only by sending a bare language code,
    either typed or picked from the suggested actions.
    A code equal to the current language is not a change.
    """
    if not is_supported_language_code(utterance):
        return False
    return utterance != current_language
