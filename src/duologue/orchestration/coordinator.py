"""Turn coordinator that drives one conversation in a chosen mode.

State machine::

    AWAIT_OPENING -> ROUND(n) -> ROUND(n+1) | TERMINATED

A run ends when the turn cap is reached, the operator types ``quit``,
or the mode fails its setup.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from duologue.agents.session import AgentSession
from duologue.console import ConversationDisplay, Operator, parse_operator_input
from duologue.errors import SetupError
from duologue.models.config import ConversationConfig
from duologue.models.enums import (
    ConversationMode,
    CoordinatorState,
    OperatorAction,
    Speaker,
    TerminationReason,
)
from duologue.models.message import Message
from duologue.orchestration.modes import get_strategy
from duologue.providers.ai.base import AIProvider
from duologue.transcript import MemoryTranscriptSink, TranscriptRecorder

logger = logging.getLogger("duologue.orchestration")

SleepFn = Callable[[float], Awaitable[Any]]


class ConversationResult(BaseModel):
    """Outcome of one mode invocation."""

    mode: ConversationMode
    termination: TerminationReason
    rounds: int = 0
    messages: list[Message] = Field(default_factory=list)

    def by_speaker(self, speaker: Speaker) -> list[Message]:
        return [m for m in self.messages if m.speaker is speaker]


class TurnCoordinator:
    """Sequences sends and receives for a mode strategy.

    The coordinator owns pacing, the turn cap, operator prompts, and the
    path every produced message takes: transcript first, then display.

    Example::

        coordinator = TurnCoordinator(
            config,
            {Speaker.AGENT_A: provider_a, Speaker.AGENT_B: provider_b},
            operator=ConsoleOperator(),
            recorder=TranscriptRecorder(FileTranscriptSink("convos")),
        )
        result = await coordinator.run(ConversationMode.OBSERVER)
    """

    def __init__(
        self,
        config: ConversationConfig,
        providers: Mapping[Speaker, AIProvider],
        *,
        operator: Operator,
        recorder: TranscriptRecorder | None = None,
        display: ConversationDisplay | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        for speaker in (Speaker.AGENT_A, Speaker.AGENT_B):
            if speaker not in providers:
                raise ValueError(f"No provider configured for {speaker}")
        self.config = config
        self._providers = dict(providers)
        self.operator = operator
        if recorder is None:
            recorder = TranscriptRecorder(MemoryTranscriptSink())
        self.recorder = recorder
        self.display = display or ConversationDisplay()
        self._sleep = sleep
        self.state = CoordinatorState.AWAIT_OPENING
        self.turn = 0
        self.rounds = 0
        self.messages: list[Message] = []

    # -- Collaborators ---------------------------------------------------------

    def provider_for(self, speaker: Speaker) -> AIProvider:
        return self._providers[speaker]

    def label_for(self, speaker: Speaker) -> str:
        return self.config.label_for(speaker)

    # -- Turn accounting -------------------------------------------------------

    def should_continue(self, *, opening: bool = True) -> bool:
        """Whether another round fits under the turn cap.

        With an opening message the cap counts it as the first turn, so
        ``max_turns - 1`` rounds follow. Without one, ``max_turns`` rounds
        are allowed. ``max_turns == 0`` never stops on count.
        """
        if self.config.unlimited:
            return True
        budget = self.config.max_turns - 1 if opening else self.config.max_turns
        return self.rounds < budget

    def begin_opening(self) -> None:
        self.turn = 1

    def begin_round(self) -> None:
        self.state = CoordinatorState.ROUND
        self.rounds += 1
        self.turn += 1
        logger.debug("Round %d (turn %d)", self.rounds, self.turn)

    # -- Message flow ----------------------------------------------------------

    def emit(self, speaker: Speaker, text: str) -> Message:
        """Record, display and keep one message."""
        label = self.label_for(speaker)
        message = Message(speaker=speaker, text=text, produced_at=self.turn, label=label)
        self.recorder.record(label, text)
        self.display.show_message(label, text)
        self.messages.append(message)
        return message

    async def invoke(self, session: AgentSession, payload: Any) -> str:
        """Ask one agent session for its reply; never raises for model failures."""
        self.display.thinking(session.label)
        return await session.respond(payload)

    async def pace(self) -> None:
        if self.config.delay_ms > 0:
            logger.debug("Pacing %d ms", self.config.delay_ms)
            await self._sleep(self.config.delay_seconds)

    # -- Operator --------------------------------------------------------------

    async def ask(self, prompt: str) -> str:
        return await self.operator.ask(prompt)

    async def ask_between_rounds(self) -> tuple[OperatorAction, str]:
        prompt = (
            f"\n--- Press Enter for Turn {self.turn + 1}/{self.config.turn_limit_display}, "
            "intervene, or 'quit': "
        )
        return parse_operator_input(await self.ask(prompt))

    # -- Run -------------------------------------------------------------------

    async def run(self, mode: ConversationMode) -> ConversationResult:
        """Run one conversation in *mode* to completion."""
        strategy = get_strategy(mode)
        logger.info(
            "Starting %s mode",
            mode.value,
            extra={"max_turns": self.config.max_turns, "delay_ms": self.config.delay_ms},
        )
        try:
            termination = await strategy.run(self)
        except SetupError as exc:
            self.display.error(str(exc))
            logger.warning("%s mode setup failed: %s", mode.value, exc)
            termination = TerminationReason.SETUP_FAILED
        self.state = CoordinatorState.TERMINATED
        logger.info(
            "%s mode finished: %s after %d round(s)", mode.value, termination.value, self.rounds
        )
        return ConversationResult(
            mode=mode,
            termination=termination,
            rounds=self.rounds,
            messages=list(self.messages),
        )
