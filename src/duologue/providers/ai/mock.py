"""Mock AI provider for testing."""

from __future__ import annotations

from pathlib import Path

from duologue.models.message import ArtifactRef
from duologue.providers.ai.base import AIContext, AIProvider, AIResponse, ProviderError


class MockAIProvider(AIProvider):
    """Round-robin response provider for tests.

    Every ``generate()`` context is kept in :attr:`calls`, so both the
    stateless path and the locally mirrored chat path can be inspected.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        *,
        ai_responses: list[AIResponse] | None = None,
        error: Exception | None = None,
        model: str = "mock",
    ) -> None:
        self.responses = responses or ["Hello from AI"]
        self._ai_responses = ai_responses
        self._error = error
        self._model = model
        self.calls: list[AIContext] = []
        self.uploads: list[tuple[Path, str]] = []
        self._index = 0

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def sent_texts(self) -> list[str]:
        """The newest message text of every call, in order."""
        return [ctx.messages[-1].text for ctx in self.calls if ctx.messages]

    async def generate(self, context: AIContext) -> AIResponse:
        self.calls.append(context)
        if self._error is not None:
            raise self._error
        if self._ai_responses:
            resp = self._ai_responses[self._index % len(self._ai_responses)]
            self._index += 1
            return resp
        content = self.responses[self._index % len(self.responses)]
        self._index += 1
        return AIResponse(
            content=content,
            finish_reason="stop",
            usage={"prompt_tokens": 10, "completion_tokens": 5},
        )

    async def upload(self, path: Path, mime_type: str) -> ArtifactRef:
        if self._error is not None:
            raise ProviderError(str(self._error), provider="mock")
        self.uploads.append((path, mime_type))
        return ArtifactRef(
            uri=f"mock://files/{path.name}", mime_type=mime_type, display_name=path.name
        )
