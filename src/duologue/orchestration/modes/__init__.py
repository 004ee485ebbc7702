"""Mode strategies: one per interaction mode, selected by ConversationMode."""

from __future__ import annotations

from duologue.models.enums import ConversationMode
from duologue.orchestration.modes.base import ModeStrategy
from duologue.orchestration.modes.chat_room import ChatRoomMode
from duologue.orchestration.modes.cooperative import CooperativeMode
from duologue.orchestration.modes.observer import ObserverMode

MODE_STRATEGIES: dict[ConversationMode, type[ModeStrategy]] = {
    ConversationMode.OBSERVER: ObserverMode,
    ConversationMode.CHAT_ROOM: ChatRoomMode,
    ConversationMode.COOPERATIVE: CooperativeMode,
}


def get_strategy(mode: ConversationMode) -> ModeStrategy:
    """Instantiate the strategy for *mode*."""
    return MODE_STRATEGIES[mode]()


__all__ = [
    "MODE_STRATEGIES",
    "ChatRoomMode",
    "CooperativeMode",
    "ModeStrategy",
    "ObserverMode",
    "get_strategy",
]
