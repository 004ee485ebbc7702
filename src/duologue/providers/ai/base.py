"""Abstract base classes for AI providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from duologue.models.message import ArtifactRef


class AITextPart(BaseModel):
    """Text part of a multimodal message."""

    type: Literal["text"] = "text"
    text: str


class AIFilePart(BaseModel):
    """Reference to an uploaded file, sent by URI rather than re-uploaded."""

    type: Literal["file"] = "file"
    uri: str
    mime_type: str

    @classmethod
    def from_artifact(cls, artifact: ArtifactRef) -> AIFilePart:
        return cls(uri=artifact.uri, mime_type=artifact.mime_type)


class ProviderError(Exception):
    """Error from an AI provider SDK call.

    Attributes:
        retryable: Whether the failure looks transient. Each call is made
            once regardless; the flag is reported in the error log.
        provider: Name of the provider that raised the error.
        status_code: HTTP status code from the provider, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        provider: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.provider = provider
        self.status_code = status_code


class AIMessage(BaseModel):
    """A message in the AI conversation context."""

    role: str  # "user" or "assistant"
    content: str | list[AITextPart | AIFilePart]
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        if isinstance(self.content, str):
            return self.content
        return "".join(p.text for p in self.content if isinstance(p, AITextPart))


class AIContext(BaseModel):
    """Full history passed to a provider for a stateless generation."""

    messages: list[AIMessage] = Field(default_factory=list)


class AIResponse(BaseModel):
    """Response from an AI provider.

    ``content`` is empty when the model produced nothing usable; the
    ``finish_reason`` then explains why (e.g. ``SAFETY``, ``MAX_TOKENS``).
    """

    content: str
    finish_reason: str | None = None
    usage: dict[str, int] = Field(default_factory=dict)

    @property
    def has_content(self) -> bool:
        return bool(self.content)


class ChatHandle(ABC):
    """An incremental chat context.

    Each :meth:`send` carries only the new input; the handle keeps the
    accumulated context (server-side or mirrored locally).
    """

    @abstractmethod
    async def send(self, text: str) -> AIResponse:
        """Send *text* and return the next reply. Raises :class:`ProviderError`."""
        ...

    @property
    @abstractmethod
    def history(self) -> list[AIMessage]:
        """A snapshot of the context accumulated so far."""
        ...


class LocalChatHandle(ChatHandle):
    """Chat context mirrored locally and replayed through ``generate()``.

    Used by providers without a native chat session API. Failed calls
    leave the history untouched.
    """

    def __init__(self, provider: AIProvider, history: list[AIMessage] | None = None) -> None:
        self._provider = provider
        self._history: list[AIMessage] = list(history or [])

    @property
    def history(self) -> list[AIMessage]:
        return list(self._history)

    async def send(self, text: str) -> AIResponse:
        outgoing = AIMessage(role="user", content=text)
        response = await self._provider.generate(
            AIContext(messages=[*self._history, outgoing])
        )
        self._history.append(outgoing)
        if response.has_content:
            self._history.append(AIMessage(role="assistant", content=response.content))
        return response


class AIProvider(ABC):
    """AI model provider for generating responses."""

    @property
    def name(self) -> str:
        """Provider name (e.g. 'gemini', 'mock')."""
        return self.__class__.__name__

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier (e.g. 'gemini-2.5-flash')."""
        ...

    @abstractmethod
    async def generate(self, context: AIContext) -> AIResponse:
        """Generate a reply from the entire history in *context*.

        Raises:
            ProviderError: The call itself failed.
        """
        ...

    def start_chat(self, history: list[AIMessage] | None = None) -> ChatHandle:
        """Open an incremental chat seeded with *history*.

        The default mirrors the context locally; providers with a native
        chat API override this.
        """
        return LocalChatHandle(self, history)

    async def upload(self, path: Path, mime_type: str) -> ArtifactRef:
        """Upload a file once so later calls can reference it by URI."""
        raise ProviderError(f"{self.name} does not support file uploads", provider=self.name)

    async def close(self) -> None:
        """Release provider resources. Override if needed."""
        return None
