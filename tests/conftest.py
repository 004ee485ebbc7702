"""Shared test fixtures and helpers."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable
from typing import Any

import pytest
from rich.console import Console

from duologue.console import ConversationDisplay, ScriptedOperator
from duologue.models.config import ConversationConfig
from duologue.models.enums import Speaker
from duologue.orchestration.coordinator import TurnCoordinator
from duologue.providers.ai.mock import MockAIProvider
from duologue.transcript import MemoryTranscriptSink, TranscriptRecorder


class SleepRecorder:
    """Stands in for ``asyncio.sleep`` and remembers every requested pause."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def quiet_display() -> ConversationDisplay:
    return ConversationDisplay(Console(file=io.StringIO(), width=100))


def make_config(**overrides: Any) -> ConversationConfig:
    defaults: dict[str, Any] = {
        "max_turns": 3,
        "delay_ms": 0,
        "model_id_a": "model-a",
        "model_id_b": "model-b",
    }
    defaults.update(overrides)
    return ConversationConfig(**defaults)


@pytest.fixture
def provider_a() -> MockAIProvider:
    return MockAIProvider(responses=["A1", "A2", "A3", "A4", "A5"], model="model-a")


@pytest.fixture
def provider_b() -> MockAIProvider:
    return MockAIProvider(responses=["B1", "B2", "B3", "B4", "B5"], model="model-b")


@pytest.fixture
def sink() -> MemoryTranscriptSink:
    return MemoryTranscriptSink()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_coordinator(
    provider_a: MockAIProvider,
    provider_b: MockAIProvider,
    sink: MemoryTranscriptSink,
    sleeper: SleepRecorder,
) -> Callable[..., TurnCoordinator]:
    """Build a coordinator over the mock providers and a scripted operator."""

    def _make(
        lines: Iterable[str] = (),
        **config_overrides: Any,
    ) -> TurnCoordinator:
        return TurnCoordinator(
            make_config(**config_overrides),
            {Speaker.AGENT_A: provider_a, Speaker.AGENT_B: provider_b},
            operator=ScriptedOperator(lines),
            recorder=TranscriptRecorder(sink),
            display=quiet_display(),
            sleep=sleeper,
        )

    return _make
