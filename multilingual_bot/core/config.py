from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from multilingual_bot.domain.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DEFAULT_LANGUAGE: str = DEFAULT_LANGUAGE

    STATE_STORE: str = "memory"  # "memory" | "json"
    STATE_DATA_DIR: str = "./data/state"

    PROFILE_DIALOGS_ENABLED: bool = False
    PROFILE_CAPTURE_COMMAND: str = "/whoami"
    PROFILE_DISPLAY_COMMAND: str = "/profile"
    STRICT_LANGUAGE_CHOICE: bool = False

    @field_validator("DEFAULT_LANGUAGE")
    @classmethod
    def _supported_default_language(cls, value: str) -> str:
        if value not in SUPPORTED_LANGUAGES:
            raise ValueError(f"DEFAULT_LANGUAGE must be one of {', '.join(SUPPORTED_LANGUAGES)}")
        return value

    @field_validator("STATE_STORE")
    @classmethod
    def _known_state_store(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in {"memory", "json"}:
            raise ValueError("STATE_STORE must be 'memory' or 'json'")
        return value


settings = Settings()
