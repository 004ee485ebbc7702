"""Tests for the Google Gemini AI provider."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from duologue.providers.ai.base import (
    AIContext,
    AIFilePart,
    AIMessage,
    AITextPart,
    ProviderError,
)
from duologue.providers.gemini.config import GeminiConfig


def _mock_genai_module() -> MagicMock:
    """Return a MagicMock that behaves like the google.genai module."""
    mod = MagicMock()

    # Mock types
    types = MagicMock()
    types.Content = MagicMock(side_effect=lambda **kw: SimpleNamespace(**kw))
    types.Part.from_text = MagicMock(side_effect=lambda text: SimpleNamespace(text=text))
    types.Part.from_uri = MagicMock(
        side_effect=lambda file_uri, mime_type: SimpleNamespace(uri=file_uri, mime_type=mime_type)
    )
    types.UploadFileConfig = MagicMock(side_effect=lambda **kw: SimpleNamespace(**kw))
    mod.types = types

    # Mock Client with async generate_content, chats and files
    client_instance = MagicMock()
    client_instance.aio.models.generate_content = AsyncMock()
    client_instance.aio.files.upload = AsyncMock()
    chat = MagicMock()
    chat.send_message = AsyncMock()
    client_instance.aio.chats.create = MagicMock(return_value=chat)
    mod.Client.return_value = client_instance

    return mod


def _genai_modules(mock_genai: MagicMock) -> dict[str, Any]:
    """Build sys.modules patch dict for Gemini tests."""
    return {
        "google": MagicMock(genai=mock_genai),
        "google.genai": mock_genai,
    }


def _config(**overrides: Any) -> GeminiConfig:
    defaults: dict[str, Any] = {"api_key": "test-api-key", "model": "gemini-2.5-flash"}
    defaults.update(overrides)
    return GeminiConfig(**defaults)


def _mock_response(
    text: str | None = "Hello!",
    finish_reason: Any = "STOP",
    prompt_tokens: int = 10,
    completion_tokens: int = 25,
) -> SimpleNamespace:
    """Build a fake Gemini response."""
    parts = [SimpleNamespace(text=text, thought=None)] if text is not None else []
    return SimpleNamespace(
        candidates=[
            SimpleNamespace(
                content=SimpleNamespace(parts=parts),
                finish_reason=finish_reason,
            )
        ],
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=completion_tokens,
        ),
    )


def _context(**overrides: Any) -> AIContext:
    defaults: dict[str, Any] = {
        "messages": [AIMessage(role="user", content="Hi")],
    }
    defaults.update(overrides)
    return AIContext(**defaults)


class TestGeminiAIProvider:
    async def test_client_uses_api_key(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config(api_key="k-123"))

            mock_genai.Client.assert_called_once_with(api_key="k-123")
            assert provider.model_name == "gemini-2.5-flash"
            assert provider.name == "gemini"

    async def test_generate_success(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider._client.aio.models.generate_content.return_value = _mock_response("Hi!")
            result = await provider.generate(_context())

            assert result.content == "Hi!"
            assert result.finish_reason == "STOP"
            assert result.usage == {"prompt_tokens": 10, "completion_tokens": 25}

    async def test_generate_sends_full_history_with_roles(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider._client.aio.models.generate_content.return_value = _mock_response()
            ctx = _context(
                messages=[
                    AIMessage(role="user", content="preamble"),
                    AIMessage(role="assistant", content="Understood."),
                    AIMessage(
                        role="user",
                        content=[
                            AITextPart(text="discuss"),
                            AIFilePart(uri="files/abc", mime_type="application/pdf"),
                        ],
                    ),
                ]
            )
            await provider.generate(ctx)

            kwargs = provider._client.aio.models.generate_content.call_args.kwargs
            assert kwargs["model"] == "gemini-2.5-flash"
            contents = kwargs["contents"]
            assert [c.role for c in contents] == ["user", "model", "user"]
            assert contents[2].parts[1].uri == "files/abc"
            assert contents[2].parts[1].mime_type == "application/pdf"
            assert "config" not in kwargs

    async def test_blocked_response_has_no_content(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider._client.aio.models.generate_content.return_value = _mock_response(
                text=None, finish_reason=SimpleNamespace(name="SAFETY")
            )
            result = await provider.generate(_context())

            assert result.content == ""
            assert result.finish_reason == "SAFETY"

    async def test_prompt_block_without_candidates(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider._client.aio.models.generate_content.return_value = SimpleNamespace(
                candidates=None,
                prompt_feedback=SimpleNamespace(block_reason="PROHIBITED_CONTENT"),
                usage_metadata=None,
            )
            result = await provider.generate(_context())

            assert not result.has_content
            assert result.finish_reason == "PROHIBITED_CONTENT"

    async def test_thought_parts_skipped(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            response = _mock_response("answer")
            response.candidates[0].content.parts.insert(
                0, SimpleNamespace(text="pondering", thought=True)
            )
            provider._client.aio.models.generate_content.return_value = response
            result = await provider.generate(_context())

            assert result.content == "answer"

    async def test_generate_api_error(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            exc = RuntimeError("429 Resource exhausted")
            provider._client.aio.models.generate_content.side_effect = exc

            with pytest.raises(ProviderError) as exc_info:
                await provider.generate(_context())

            assert exc_info.value.provider == "gemini"
            assert exc_info.value.retryable is True
            assert exc_info.value.__cause__ is exc

    async def test_status_code_error(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            exc = RuntimeError("bad request")
            exc.code = 400  # type: ignore[attr-defined]
            provider._client.aio.models.generate_content.side_effect = exc

            with pytest.raises(ProviderError) as exc_info:
                await provider.generate(_context())

            assert exc_info.value.status_code == 400
            assert exc_info.value.retryable is False


class TestGeminiChat:
    async def test_chat_seeded_with_history(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider.start_chat(
                [
                    AIMessage(role="user", content="preamble"),
                    AIMessage(role="assistant", content="Understood."),
                ]
            )

            kwargs = provider._client.aio.chats.create.call_args.kwargs
            assert kwargs["model"] == "gemini-2.5-flash"
            assert [c.role for c in kwargs["history"]] == ["user", "model"]
            assert kwargs["history"][0].parts[0].text == "preamble"

    async def test_send_only_new_input(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            chat = provider._client.aio.chats.create.return_value
            chat.send_message.return_value = _mock_response("Reply")

            handle = provider.start_chat([AIMessage(role="user", content="seed")])
            result = await handle.send("next")

            chat.send_message.assert_awaited_once_with("next")
            assert result.content == "Reply"
            assert [m.text for m in handle.history] == ["seed", "next", "Reply"]

    async def test_send_error_wrapped(self) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            chat = provider._client.aio.chats.create.return_value
            chat.send_message.side_effect = RuntimeError("503 unavailable")

            handle = provider.start_chat()
            with pytest.raises(ProviderError, match="503"):
                await handle.send("hi")
            assert handle.history == []


class TestGeminiUpload:
    async def test_upload_returns_reference(self, tmp_path: Path) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider._client.aio.files.upload.return_value = SimpleNamespace(
                uri="https://files/abc", mime_type="text/plain", display_name="notes.txt"
            )
            path = tmp_path / "notes.txt"
            ref = await provider.upload(path, "text/plain")

            kwargs = provider._client.aio.files.upload.call_args.kwargs
            assert kwargs["file"] == str(path)
            assert kwargs["config"].mime_type == "text/plain"
            assert ref.uri == "https://files/abc"
            assert ref.mime_type == "text/plain"

    async def test_upload_error_wrapped(self, tmp_path: Path) -> None:
        mock_genai = _mock_genai_module()
        with patch.dict("sys.modules", _genai_modules(mock_genai)):
            from duologue.providers.gemini.ai import GeminiAIProvider

            provider = GeminiAIProvider(_config())
            provider._client.aio.files.upload.side_effect = OSError("no such file")

            with pytest.raises(ProviderError):
                await provider.upload(tmp_path / "x.txt", "text/plain")


class TestGeminiImport:
    def test_missing_sdk_raises_import_error(self) -> None:
        with patch.dict("sys.modules", {"google": None, "google.genai": None}):
            from duologue.providers.gemini.ai import GeminiAIProvider

            with pytest.raises(ImportError, match="google-genai"):
                GeminiAIProvider(_config())
