"""Observer mode: two agents relay to each other while the human watches."""

from __future__ import annotations

from typing import TYPE_CHECKING

from duologue.agents.session import IncrementalSession
from duologue.models.enums import ConversationMode, OperatorAction, Speaker, TerminationReason
from duologue.orchestration.modes.base import ModeStrategy

if TYPE_CHECKING:
    from duologue.orchestration.coordinator import TurnCoordinator

OPENING_PROMPT = "You may begin when ready."


class ObserverMode(ModeStrategy):
    """A1 opens, then each round B answers the last message and A answers B.

    Each agent is fed only the single latest message. A human override
    replaces the message forwarded to B for that round.
    """

    mode = ConversationMode.OBSERVER

    async def run(self, coordinator: TurnCoordinator) -> TerminationReason:
        agent_a = IncrementalSession(
            Speaker.AGENT_A,
            coordinator.provider_for(Speaker.AGENT_A),
            coordinator.label_for(Speaker.AGENT_A),
        )
        agent_b = IncrementalSession(
            Speaker.AGENT_B,
            coordinator.provider_for(Speaker.AGENT_B),
            coordinator.label_for(Speaker.AGENT_B),
        )

        coordinator.display.notice("\n--- STARTING OBSERVER MODE ---")
        coordinator.display.notice("Waiting for AI1 to initiate...")

        coordinator.begin_opening()
        last_message = await coordinator.invoke(agent_a, OPENING_PROMPT)
        coordinator.emit(Speaker.AGENT_A, last_message)

        while coordinator.should_continue():
            action, text = await coordinator.ask_between_rounds()
            if action is OperatorAction.QUIT:
                return TerminationReason.OPERATOR_QUIT

            coordinator.begin_round()
            if action is OperatorAction.OVERRIDE:
                last_message = text
                coordinator.emit(Speaker.HUMAN, text)

            await coordinator.pace()
            last_message = await coordinator.invoke(agent_b, last_message)
            coordinator.emit(Speaker.AGENT_B, last_message)

            await coordinator.pace()
            last_message = await coordinator.invoke(agent_a, last_message)
            coordinator.emit(Speaker.AGENT_A, last_message)

        return TerminationReason.TURN_LIMIT
