"""duologue - turn-based conversations between two AI agents."""

from duologue._version import __version__
from duologue.agents import (
    SHARED_PREAMBLE,
    AgentSession,
    IncrementalSession,
    SharedHistory,
    StatelessSession,
)
from duologue.console import (
    ConsoleOperator,
    ConversationDisplay,
    Operator,
    ScriptedOperator,
    parse_operator_input,
)
from duologue.errors import (
    ConfigurationError,
    DuologueError,
    SetupError,
    TranscriptWriteError,
)
from duologue.models import (
    ArtifactRef,
    ConversationConfig,
    ConversationMode,
    CoordinatorState,
    Message,
    OperatorAction,
    Speaker,
    TerminationReason,
)
from duologue.orchestration import (
    ChatRoomMode,
    ConversationResult,
    CooperativeMode,
    ModeStrategy,
    ObserverMode,
    TurnCoordinator,
    get_strategy,
)
from duologue.providers.ai import AIProvider, MockAIProvider, ProviderError
from duologue.transcript import (
    FileTranscriptSink,
    MemoryTranscriptSink,
    TranscriptRecorder,
    TranscriptSink,
    strip_markup,
)

__all__ = [
    "__version__",
    # Agents
    "SHARED_PREAMBLE",
    "AgentSession",
    "IncrementalSession",
    "SharedHistory",
    "StatelessSession",
    # Console
    "ConsoleOperator",
    "ConversationDisplay",
    "Operator",
    "ScriptedOperator",
    "parse_operator_input",
    # Errors
    "ConfigurationError",
    "DuologueError",
    "SetupError",
    "TranscriptWriteError",
    # Models
    "ArtifactRef",
    "ConversationConfig",
    "ConversationMode",
    "CoordinatorState",
    "Message",
    "OperatorAction",
    "Speaker",
    "TerminationReason",
    # Orchestration
    "ChatRoomMode",
    "ConversationResult",
    "CooperativeMode",
    "ModeStrategy",
    "ObserverMode",
    "TurnCoordinator",
    "get_strategy",
    # Providers
    "AIProvider",
    "MockAIProvider",
    "ProviderError",
    # Transcript
    "FileTranscriptSink",
    "MemoryTranscriptSink",
    "TranscriptRecorder",
    "TranscriptSink",
    "strip_markup",
]
