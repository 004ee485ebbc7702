"""Provider-neutral AI interfaces and the mock provider."""

from duologue.providers.ai.base import (
    AIContext,
    AIFilePart,
    AIMessage,
    AIProvider,
    AIResponse,
    AITextPart,
    ChatHandle,
    LocalChatHandle,
    ProviderError,
)
from duologue.providers.ai.mock import MockAIProvider

__all__ = [
    "AIContext",
    "AIFilePart",
    "AIMessage",
    "AIProvider",
    "AIResponse",
    "AITextPart",
    "ChatHandle",
    "LocalChatHandle",
    "MockAIProvider",
    "ProviderError",
]
