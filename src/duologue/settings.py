"""Process settings loaded from the environment and ``.env``.

Variables use the ``DUOLOGUE_`` prefix, except the API key which is
read from ``GEMINI_API_KEY`` (or ``GOOGLE_API_KEY``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from duologue.errors import ConfigurationError
from duologue.models.config import (
    DEFAULT_DELAY_MS,
    DEFAULT_MAX_TURNS,
    DEFAULT_MODEL_A,
    DEFAULT_MODEL_B,
    ConversationConfig,
)

API_KEY_ENV = "GEMINI_API_KEY"


class Settings(BaseSettings):
    """Startup configuration. Conversation values here are only defaults."""

    gemini_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(API_KEY_ENV, "GOOGLE_API_KEY"),
    )
    max_turns: int = Field(default=DEFAULT_MAX_TURNS, description="0 for unlimited")
    delay_ms: int = Field(default=DEFAULT_DELAY_MS, description="Pause before each agent call")
    model_id_a: str = DEFAULT_MODEL_A
    model_id_b: str = DEFAULT_MODEL_B
    transcript_dir: Path = Path("convos")
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="DUOLOGUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("max_turns", "delay_ms", mode="before")
    @classmethod
    def _revert_invalid(cls, value: Any, info: ValidationInfo) -> Any:
        default = DEFAULT_MAX_TURNS if info.field_name == "max_turns" else DEFAULT_DELAY_MS
        try:
            number = int(value)
        except (TypeError, ValueError):
            return default
        return number if number >= 0 else default

    def require_api_key(self) -> str:
        """Return the API key or raise :class:`ConfigurationError`."""
        if self.gemini_api_key is None or not self.gemini_api_key.get_secret_value():
            raise ConfigurationError(
                f"{API_KEY_ENV} not found. Please check your .env file."
            )
        return self.gemini_api_key.get_secret_value()

    def conversation_defaults(self) -> ConversationConfig:
        return ConversationConfig.from_inputs(
            max_turns=self.max_turns,
            delay_ms=self.delay_ms,
            model_id_a=self.model_id_a,
            model_id_b=self.model_id_b,
        )
