"""All string enums for duologue."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class Speaker(StrEnum):
    AGENT_A = "agent_a"
    AGENT_B = "agent_b"
    HUMAN = "human"

    @property
    def is_agent(self) -> bool:
        return self is not Speaker.HUMAN


@unique
class ConversationMode(StrEnum):
    """The closed set of interaction modes.

    The menu number shown to the operator maps onto these via
    :meth:`from_choice`.
    """

    OBSERVER = "observer"
    CHAT_ROOM = "chat-room"
    COOPERATIVE = "cooperative"

    @classmethod
    def from_choice(cls, choice: str) -> ConversationMode | None:
        """Resolve a menu number (``"1"``) or mode name; ``None`` if unknown."""
        value = choice.strip().lower()
        by_number = {"1": cls.OBSERVER, "2": cls.CHAT_ROOM, "3": cls.COOPERATIVE}
        if value in by_number:
            return by_number[value]
        try:
            return cls(value)
        except ValueError:
            return None


@unique
class CoordinatorState(StrEnum):
    AWAIT_OPENING = "await_opening"
    ROUND = "round"
    TERMINATED = "terminated"


@unique
class TerminationReason(StrEnum):
    TURN_LIMIT = "turn_limit"
    OPERATOR_QUIT = "operator_quit"
    SETUP_FAILED = "setup_failed"


@unique
class OperatorAction(StrEnum):
    ADVANCE = "advance"
    QUIT = "quit"
    OVERRIDE = "override"
