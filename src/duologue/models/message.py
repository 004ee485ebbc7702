"""Conversation messages and artifact references."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from duologue.models.enums import Speaker


class Message(BaseModel):
    """One displayed line of the conversation.

    Failed agent responses still produce a Message; its ``text`` carries
    the diagnostic placeholder so transcript continuity is preserved.
    """

    model_config = {"frozen": True}

    speaker: Speaker
    text: str
    produced_at: int = Field(ge=0, description="Ordinal turn index")
    label: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ArtifactRef(BaseModel):
    """A file uploaded once and referenced by URI in later calls."""

    model_config = {"frozen": True}

    uri: str
    mime_type: str
    display_name: str | None = None
