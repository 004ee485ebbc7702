"""Operator interaction and on-screen rendering."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from duologue.models.enums import OperatorAction
from duologue.transcript import strip_markup

logger = logging.getLogger("duologue.console")

QUIT_TOKEN = "quit"
SEPARATOR = "═" * 60
READER_THREAD_NAME = "duologue-operator-input"


def parse_operator_input(text: str) -> tuple[OperatorAction, str]:
    """Classify a line typed between rounds.

    ``quit`` ends the session, a blank line advances, anything else is
    override content (returned unmodified).
    """
    if text.strip().lower() == QUIT_TOKEN:
        return OperatorAction.QUIT, ""
    if not text.strip():
        return OperatorAction.ADVANCE, ""
    return OperatorAction.OVERRIDE, text


@runtime_checkable
class Operator(Protocol):
    """Line-oriented prompt/response with the human operator."""

    async def ask(self, prompt: str) -> str: ...


class ConsoleOperator:
    """Reads operator lines from the terminal without blocking the event loop.

    Each prompt is read on a daemon thread, so a prompt still waiting for
    input when the session is interrupted does not keep the process alive.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    async def ask(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        answer: asyncio.Future[str] = loop.create_future()

        def _settle(line: str | None, exc: Exception | None) -> None:
            if answer.done():
                return
            if exc is not None:
                answer.set_exception(exc)
            else:
                answer.set_result(line or "")

        def _read() -> None:
            line: str | None = None
            error: Exception | None = None
            try:
                line = self._console.input(prompt, markup=False)
            except EOFError:
                logger.debug("Operator input closed, treating as quit")
                line = QUIT_TOKEN
            except Exception as exc:
                error = exc
            try:
                loop.call_soon_threadsafe(_settle, line, error)
            except RuntimeError:
                logger.debug("Operator answer arrived after the session ended")

        threading.Thread(target=_read, name=READER_THREAD_NAME, daemon=True).start()
        return await answer


class ScriptedOperator:
    """Replays fixed answers, then answers ``quit`` forever.

    Every prompt shown is kept in :attr:`prompts`.
    """

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines = deque(lines)
        self.prompts: list[str] = []

    async def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._lines:
            return self._lines.popleft()
        return QUIT_TOKEN

    @property
    def remaining(self) -> int:
        return len(self._lines)


class ConversationDisplay:
    """Renders messages and status lines to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_message(self, label: str, text: str) -> None:
        self.console.print()
        self.console.print(SEPARATOR, style="cyan")
        self.console.print(Text(f"{label.upper()}:", style="bold"))
        self.console.print()
        self.console.print(Text(strip_markup(text)))
        self.console.print(SEPARATOR, style="cyan")

    def thinking(self, label: str) -> None:
        self.console.print(Text(f"\n... {label} is thinking ...", style="dim"))

    def notice(self, text: str) -> None:
        self.console.print(Text(text))

    def error(self, text: str) -> None:
        self.console.print(Text(text, style="bold red"))
