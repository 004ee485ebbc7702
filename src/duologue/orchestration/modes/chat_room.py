"""Chat-room mode: a three-way chat between the human and both agents."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from duologue.agents.session import IncrementalSession
from duologue.console import parse_operator_input
from duologue.models.enums import ConversationMode, OperatorAction, Speaker, TerminationReason
from duologue.orchestration.modes.base import ModeStrategy

if TYPE_CHECKING:
    from duologue.orchestration.coordinator import TurnCoordinator

MESSAGE_PROMPT = "\nYour message: "


def context_sync_message(other_reply: str) -> str:
    return f'(For context, the other AI responded: "{other_reply}")'


class ChatRoomMode(ModeStrategy):
    """Each round the human's message goes to both agents concurrently.

    Once both replies are in, each session is told what the other said,
    since the two sessions never share state directly.
    """

    mode = ConversationMode.CHAT_ROOM

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

        coordinator.display.notice("\n--- STARTING CHAT ROOM MODE ---")
        coordinator.display.notice("3-way chat is active. Type 'quit' to exit.")

        while coordinator.should_continue(opening=False):
            action, text = parse_operator_input(await coordinator.ask(MESSAGE_PROMPT))
            if action is OperatorAction.QUIT:
                return TerminationReason.OPERATOR_QUIT
            if action is OperatorAction.ADVANCE:
                # a human message is required to start a round
                continue

            coordinator.begin_round()
            coordinator.emit(Speaker.HUMAN, text)

            await coordinator.pace()
            reply_a, reply_b = await asyncio.gather(
                coordinator.invoke(agent_a, text),
                coordinator.invoke(agent_b, text),
            )
            coordinator.emit(Speaker.AGENT_A, reply_a)
            coordinator.emit(Speaker.AGENT_B, reply_b)

            await asyncio.gather(
                agent_a.inform(context_sync_message(reply_b)),
                agent_b.inform(context_sync_message(reply_a)),
            )

        return TerminationReason.TURN_LIMIT
