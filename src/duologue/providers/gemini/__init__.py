"""Google Gemini provider."""

from duologue.providers.gemini.ai import GeminiAIProvider
from duologue.providers.gemini.config import GeminiConfig

__all__ = ["GeminiAIProvider", "GeminiConfig"]
