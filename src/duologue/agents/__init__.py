"""Agent sessions: one agent's conversational context behind ``respond()``."""

from duologue.agents.preamble import PREAMBLE_ACK, SHARED_PREAMBLE, preamble_history
from duologue.agents.session import (
    AgentSession,
    IncrementalSession,
    SharedHistory,
    StatelessSession,
    error_placeholder,
    no_content_placeholder,
)

__all__ = [
    "PREAMBLE_ACK",
    "SHARED_PREAMBLE",
    "AgentSession",
    "IncrementalSession",
    "SharedHistory",
    "StatelessSession",
    "error_placeholder",
    "no_content_placeholder",
    "preamble_history",
]
