"""Cooperative-exploration mode: both agents discuss an uploaded file."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING

from duologue.agents.session import SharedHistory, StatelessSession
from duologue.errors import SetupError
from duologue.models.enums import ConversationMode, OperatorAction, Speaker, TerminationReason
from duologue.models.message import ArtifactRef
from duologue.orchestration.modes.base import ModeStrategy
from duologue.providers.ai.base import AIFilePart, ProviderError

if TYPE_CHECKING:
    from duologue.orchestration.coordinator import TurnCoordinator

logger = logging.getLogger("duologue.orchestration.cooperative")

OPENING_PROMPT = (
    "Please begin a cooperative exploration of the following document. Analyze its "
    "concepts, discuss its merits, and build upon its ideas together."
)
PATH_PROMPT = "\nPlease provide the full path to the file for discussion: "
MIME_PROMPT = "Please provide the MIME type (e.g., text/plain, image/jpeg): "
FALLBACK_MIME_TYPE = "application/octet-stream"


class CooperativeMode(ModeStrategy):
    """Agents take turns over one shared, ever-growing history.

    No session persists between calls: every call resends the full
    history, including the file reference from the opening prompt.
    """

    mode = ConversationMode.COOPERATIVE

    async def _upload_artifact(self, coordinator: TurnCoordinator) -> ArtifactRef:
        raw_path = (await coordinator.ask(PATH_PROMPT)).strip()
        if not raw_path:
            raise SetupError("No file path. Exiting mode.")
        path = Path(raw_path).expanduser()
        if not path.is_file():
            raise SetupError(f"File not found: {path}. Exiting mode.")

        mime_type = (await coordinator.ask(MIME_PROMPT)).strip()
        if not mime_type:
            mime_type = mimetypes.guess_type(path.name)[0] or FALLBACK_MIME_TYPE
            logger.info("No MIME type given, using %s", mime_type)

        coordinator.display.notice(f'\nUploading "{path.name}"...')
        try:
            artifact = await coordinator.provider_for(Speaker.AGENT_A).upload(path, mime_type)
        except ProviderError as exc:
            raise SetupError(f"Upload failed: {exc}") from exc
        coordinator.display.notice(f"File uploaded successfully. URI: {artifact.uri}")
        return artifact

    async def run(self, coordinator: TurnCoordinator) -> TerminationReason:
        coordinator.display.notice("\n--- STARTING COOPERATIVE EXPLORATION MODE ---")
        artifact = await self._upload_artifact(coordinator)

        agent_a = StatelessSession(
            Speaker.AGENT_A,
            coordinator.provider_for(Speaker.AGENT_A),
            coordinator.label_for(Speaker.AGENT_A),
        )
        agent_b = StatelessSession(
            Speaker.AGENT_B,
            coordinator.provider_for(Speaker.AGENT_B),
            coordinator.label_for(Speaker.AGENT_B),
        )

        history = SharedHistory()
        history.add_user(OPENING_PROMPT, files=[AIFilePart.from_artifact(artifact)])

        coordinator.begin_opening()
        reply = await coordinator.invoke(agent_a, history)
        history.add_reply(Speaker.AGENT_A, reply)
        coordinator.emit(Speaker.AGENT_A, reply)

        while coordinator.should_continue():
            action, text = await coordinator.ask_between_rounds()
            if action is OperatorAction.QUIT:
                return TerminationReason.OPERATOR_QUIT

            coordinator.begin_round()
            if action is OperatorAction.OVERRIDE:
                coordinator.emit(Speaker.HUMAN, text)
                history.add_user(text)

            for session in (agent_b, agent_a):
                await coordinator.pace()
                reply = await coordinator.invoke(session, history)
                history.add_reply(session.speaker, reply)
                coordinator.emit(session.speaker, reply)

        return TerminationReason.TURN_LIMIT
