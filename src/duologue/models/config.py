"""Immutable conversation configuration."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from duologue.models.enums import Speaker

logger = logging.getLogger("duologue.config")

DEFAULT_MAX_TURNS = 10
DEFAULT_DELAY_MS = 1000
DEFAULT_MODEL_A = "gemini-2.5-flash"
DEFAULT_MODEL_B = "gemini-2.5-pro"


def _parse_non_negative(raw: str | int | None, default: int, name: str) -> int:
    """Parse operator input, silently reverting to *default* when invalid."""
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw if raw >= 0 else default
    text = raw.strip()
    if not text:
        return default
    try:
        value = int(text)
    except ValueError:
        logger.debug("Invalid %s %r, using default %d", name, raw, default)
        return default
    if value < 0:
        logger.debug("Negative %s %r, using default %d", name, raw, default)
        return default
    return value


class ConversationConfig(BaseModel):
    """Settings for one conversation. Never mutated once a session starts.

    ``max_turns`` of 0 means unlimited.
    """

    model_config = {"frozen": True}

    max_turns: int = Field(default=DEFAULT_MAX_TURNS, ge=0)
    delay_ms: int = Field(default=DEFAULT_DELAY_MS, ge=0)
    model_id_a: str = DEFAULT_MODEL_A
    model_id_b: str = DEFAULT_MODEL_B

    @classmethod
    def from_inputs(
        cls,
        *,
        max_turns: str | int | None = None,
        delay_ms: str | int | None = None,
        model_id_a: str | None = None,
        model_id_b: str | None = None,
        defaults: ConversationConfig | None = None,
    ) -> ConversationConfig:
        """Build a config from raw operator answers.

        Blank answers keep the default; invalid numbers revert to it.
        """
        base = defaults or cls()
        return cls(
            max_turns=_parse_non_negative(max_turns, base.max_turns, "max_turns"),
            delay_ms=_parse_non_negative(delay_ms, base.delay_ms, "delay_ms"),
            model_id_a=(model_id_a or "").strip() or base.model_id_a,
            model_id_b=(model_id_b or "").strip() or base.model_id_b,
        )

    @property
    def unlimited(self) -> bool:
        return self.max_turns == 0

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000

    @property
    def turn_limit_display(self) -> str:
        return "∞" if self.unlimited else str(self.max_turns)

    def model_for(self, speaker: Speaker) -> str:
        if speaker is Speaker.AGENT_A:
            return self.model_id_a
        if speaker is Speaker.AGENT_B:
            return self.model_id_b
        raise ValueError(f"Speaker {speaker} has no model")

    def label_for(self, speaker: Speaker) -> str:
        """Display label, e.g. ``(AI1) gemini-2.5-flash``."""
        if speaker is Speaker.AGENT_A:
            return f"(AI1) {self.model_id_a}"
        if speaker is Speaker.AGENT_B:
            return f"(AI2) {self.model_id_b}"
        return "USER"
