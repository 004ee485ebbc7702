"""Data models for duologue."""

from duologue.models.config import (
    DEFAULT_DELAY_MS,
    DEFAULT_MAX_TURNS,
    DEFAULT_MODEL_A,
    DEFAULT_MODEL_B,
    ConversationConfig,
)
from duologue.models.enums import (
    ConversationMode,
    CoordinatorState,
    OperatorAction,
    Speaker,
    TerminationReason,
)
from duologue.models.message import ArtifactRef, Message

__all__ = [
    "DEFAULT_DELAY_MS",
    "DEFAULT_MAX_TURNS",
    "DEFAULT_MODEL_A",
    "DEFAULT_MODEL_B",
    "ArtifactRef",
    "ConversationConfig",
    "ConversationMode",
    "CoordinatorState",
    "Message",
    "OperatorAction",
    "Speaker",
    "TerminationReason",
]
