"""Google Gemini AI provider: chats, stateless generation and file uploads."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from duologue.models.message import ArtifactRef
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
from duologue.providers.gemini.config import GeminiConfig

logger = logging.getLogger("duologue.providers.gemini")


def _reason_name(value: Any) -> str | None:
    """Render an SDK enum (``FinishReason.SAFETY``) as its bare name."""
    if value is None:
        return None
    name = getattr(value, "name", None)
    return name if isinstance(name, str) else str(value)


def _extract_response(response: Any) -> AIResponse:
    """Pull the reply text out of a GenerateContentResponse.

    Returns empty content with a finish reason when the candidate was
    blocked, truncated or carried no text part.
    """
    usage: dict[str, int] = {}
    meta = getattr(response, "usage_metadata", None)
    if meta is not None:
        usage = {
            "prompt_tokens": getattr(meta, "prompt_token_count", None) or 0,
            "completion_tokens": getattr(meta, "candidates_token_count", None) or 0,
        }

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        feedback = getattr(response, "prompt_feedback", None)
        reason = _reason_name(getattr(feedback, "block_reason", None))
        return AIResponse(content="", finish_reason=reason, usage=usage)

    candidate = candidates[0]
    reason = _reason_name(getattr(candidate, "finish_reason", None))
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [
        p.text
        for p in parts
        if getattr(p, "text", None) and not getattr(p, "thought", False)
    ]
    return AIResponse(content="".join(texts), finish_reason=reason, usage=usage)


class GeminiChatHandle(ChatHandle):
    """Wraps a ``google.genai`` async chat session.

    The SDK keeps the running context; a local mirror is kept for
    inspection only.
    """

    def __init__(self, provider: GeminiAIProvider, chat: Any, history: list[AIMessage]) -> None:
        self._provider = provider
        self._chat = chat
        self._mirror = list(history)

    @property
    def history(self) -> list[AIMessage]:
        return list(self._mirror)

    async def send(self, text: str) -> AIResponse:
        try:
            response = await self._chat.send_message(text)
        except Exception as exc:
            raise self._provider._wrap_error(exc) from exc
        result = _extract_response(response)
        self._mirror.append(AIMessage(role="user", content=text))
        if result.has_content:
            self._mirror.append(AIMessage(role="assistant", content=result.content))
        return result


class GeminiAIProvider(AIProvider):
    """AI provider using the Google Gemini API."""

    def __init__(self, config: GeminiConfig) -> None:
        try:
            from google import genai as _genai
            from google.genai import types as _types
        except ImportError as exc:
            raise ImportError(
                "google-genai is required for GeminiAIProvider. "
                "Install it with: pip install google-genai"
            ) from exc

        self._config = config
        self._genai = _genai
        self._types = _types
        self._client = _genai.Client(api_key=config.api_key.get_secret_value())

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model_name(self) -> str:
        return self._config.model

    def _format_messages(self, messages: list[AIMessage]) -> list[Any]:
        """Convert AIMessage list to Gemini Content format."""
        contents = []
        for msg in messages:
            role = "model" if msg.role == "assistant" else "user"
            contents.append(
                self._types.Content(role=role, parts=self._format_content(msg.content))
            )
        return contents

    def _format_content(self, content: str | list[AITextPart | AIFilePart]) -> list[Any]:
        """Convert content to Gemini Parts."""
        if isinstance(content, str):
            return [self._types.Part.from_text(text=content)]
        parts = []
        for item in content:
            if isinstance(item, AITextPart):
                parts.append(self._types.Part.from_text(text=item.text))
            elif isinstance(item, AIFilePart):
                parts.append(
                    self._types.Part.from_uri(file_uri=item.uri, mime_type=item.mime_type)
                )
        return parts

    def _wrap_error(self, exc: Exception) -> ProviderError:
        """Wrap an SDK exception into a ProviderError."""
        status_code = getattr(exc, "code", None) or getattr(exc, "status_code", None)
        retryable = (
            status_code in (429, 500, 502, 503)
            if status_code
            else any(
                term in str(exc).lower() for term in ["rate", "limit", "429", "500", "502", "503"]
            )
        )
        return ProviderError(
            str(exc),
            retryable=retryable,
            provider="gemini",
            status_code=status_code if isinstance(status_code, int) else None,
        )

    async def generate(self, context: AIContext) -> AIResponse:
        """Send the entire history in one stateless request."""
        try:
            response = await self._client.aio.models.generate_content(
                model=self._config.model,
                contents=self._format_messages(context.messages),
            )
        except Exception as exc:
            raise self._wrap_error(exc) from exc
        return _extract_response(response)

    def start_chat(self, history: list[AIMessage] | None = None) -> ChatHandle:
        seed = list(history or [])
        chat = self._client.aio.chats.create(
            model=self._config.model,
            history=self._format_messages(seed),
        )
        return GeminiChatHandle(self, chat, seed)

    async def upload(self, path: Path, mime_type: str) -> ArtifactRef:
        logger.info("Uploading %s (%s)", path.name, mime_type)
        try:
            file = await self._client.aio.files.upload(
                file=str(path),
                config=self._types.UploadFileConfig(mime_type=mime_type),
            )
        except Exception as exc:
            raise self._wrap_error(exc) from exc
        return ArtifactRef(
            uri=file.uri,
            mime_type=file.mime_type or mime_type,
            display_name=getattr(file, "display_name", None) or path.name,
        )

    async def close(self) -> None:
        """Release the genai client reference."""
        self._client = None  # type: ignore[assignment]
