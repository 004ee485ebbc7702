"""Conversation orchestration: the turn coordinator and mode strategies."""

from duologue.orchestration.coordinator import ConversationResult, TurnCoordinator
from duologue.orchestration.modes import (
    MODE_STRATEGIES,
    ChatRoomMode,
    CooperativeMode,
    ModeStrategy,
    ObserverMode,
    get_strategy,
)

__all__ = [
    "MODE_STRATEGIES",
    "ChatRoomMode",
    "ConversationResult",
    "CooperativeMode",
    "ModeStrategy",
    "ObserverMode",
    "TurnCoordinator",
    "get_strategy",
]
