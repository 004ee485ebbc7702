"""Agent sessions.

An :class:`AgentSession` wraps one agent's accumulated context and
exposes a single ``respond`` operation. Two variants exist:

- :class:`IncrementalSession` owns a :class:`~duologue.providers.ai.base.ChatHandle`
  seeded with the shared preamble and sends only the new input each call.
- :class:`StatelessSession` holds no context of its own; every call submits
  the whole :class:`SharedHistory`, which the caller grows between calls.

``respond`` never raises for a failed or empty model call. It returns a
diagnostic placeholder instead so the conversation keeps going.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from duologue.agents.preamble import preamble_history
from duologue.models.enums import Speaker
from duologue.providers.ai.base import (
    AIContext,
    AIFilePart,
    AIMessage,
    AIProvider,
    AIResponse,
    AITextPart,
    ChatHandle,
    ProviderError,
)

logger = logging.getLogger("duologue.agents")

_SPEAKER_KEY = "speaker"


def no_content_placeholder(finish_reason: str | None) -> str:
    return f"(No valid response was generated. Finish Reason: {finish_reason or 'Unknown'})"


def error_placeholder(reason: str) -> str:
    return f"(An error occurred: {reason})"


class AgentSession(ABC):
    """One agent's conversational context."""

    def __init__(self, speaker: Speaker, provider: AIProvider, label: str | None = None) -> None:
        if not speaker.is_agent:
            raise ValueError(f"{speaker} is not an agent")
        self.speaker = speaker
        self.provider = provider
        self.label = label or f"{speaker.value} ({provider.model_name})"

    @abstractmethod
    async def respond(self, payload: Any) -> str:
        """Return the agent's reply to *payload*, or a placeholder on failure.

        Never raises for a failed or empty model call.
        """
        ...

    def _to_text(self, response: AIResponse) -> str:
        logger.debug(
            "%s finished (%s)",
            self.label,
            response.finish_reason or "Unknown",
            extra={"speaker": self.speaker.value, "usage": response.usage},
        )
        if response.has_content:
            return response.content
        logger.warning(
            "%s returned no usable content (finish reason: %s)",
            self.label,
            response.finish_reason or "Unknown",
            extra={"speaker": self.speaker.value, "finish_reason": response.finish_reason},
        )
        return no_content_placeholder(response.finish_reason)

    def _on_error(self, exc: Exception) -> str:
        logger.error(
            "Error getting response from %s: %s",
            self.label,
            exc,
            extra={
                "speaker": self.speaker.value,
                "retryable": isinstance(exc, ProviderError) and exc.retryable,
            },
        )
        return error_placeholder(str(exc) or type(exc).__name__)


class IncrementalSession(AgentSession):
    """Persistent chat context; each call carries only the newest input.

    The session exclusively owns its chat handle. Nothing else sends on it.
    """

    def __init__(self, speaker: Speaker, provider: AIProvider, label: str | None = None) -> None:
        super().__init__(speaker, provider, label)
        self._chat: ChatHandle = provider.start_chat(preamble_history())

    @property
    def history(self) -> list[AIMessage]:
        return self._chat.history

    async def respond(self, text: str) -> str:
        try:
            response = await self._chat.send(text)
        except Exception as exc:
            return self._on_error(exc)
        return self._to_text(response)

    async def inform(self, text: str) -> None:
        """Push a side message into the context; the reply is discarded.

        Best-effort: a failure is logged and the conversation continues.
        """
        try:
            await self._chat.send(text)
        except Exception:
            logger.exception("Context sync to %s failed", self.label)


class SharedHistory:
    """Append-only history shared by the stateless sessions of one conversation.

    Starts with the shared preamble. Agent replies are tagged with their
    speaker so each agent can be shown its own turns as model turns.
    """

    def __init__(self) -> None:
        self._entries: list[AIMessage] = preamble_history()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AIMessage]:
        return iter(list(self._entries))

    @property
    def entries(self) -> list[AIMessage]:
        return list(self._entries)

    def add_user(self, text: str, *, files: list[AIFilePart] | None = None) -> None:
        if files:
            content: str | list[AITextPart | AIFilePart] = [AITextPart(text=text), *files]
        else:
            content = text
        self._entries.append(
            AIMessage(role="user", content=content, metadata={_SPEAKER_KEY: Speaker.HUMAN})
        )

    def add_reply(self, speaker: Speaker, text: str) -> None:
        self._entries.append(
            AIMessage(role="assistant", content=text, metadata={_SPEAKER_KEY: speaker})
        )

    def view_for(self, speaker: Speaker) -> list[AIMessage]:
        """The history as *speaker* should see it.

        The other agent's replies are presented with the user role.
        """
        view = []
        for entry in self._entries:
            owner = entry.metadata.get(_SPEAKER_KEY)
            if entry.role == "assistant" and owner is not None and owner != speaker:
                entry = entry.model_copy(update={"role": "user"})
            view.append(entry)
        return view


class StatelessSession(AgentSession):
    """No persistent context: every call resends the entire history.

    The caller appends the returned reply to the history before the next
    call.
    """

    async def respond(self, history: SharedHistory) -> str:
        context = AIContext(messages=history.view_for(self.speaker))
        try:
            response = await self.provider.generate(context)
        except Exception as exc:
            return self._on_error(exc)
        return self._to_text(response)
