"""
duologue CLI - run a conversation between two AI agents.

Usage:
    duologue                       Interactive setup, then choose a mode
    duologue --mode observer       Skip the mode menu
    duologue --no-setup -m 2       Use defaults from the environment
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from duologue.console import ConsoleOperator, ConversationDisplay
from duologue.errors import ConfigurationError, TranscriptWriteError
from duologue.models.config import ConversationConfig
from duologue.models.enums import ConversationMode, Speaker
from duologue.orchestration.coordinator import ConversationResult, TurnCoordinator
from duologue.providers.ai.base import AIProvider
from duologue.settings import Settings
from duologue.transcript import FileTranscriptSink, TranscriptRecorder

app = typer.Typer(help="Turn-based conversations between two AI agents", add_completion=False)
console = Console()

logger = logging.getLogger("duologue.cli")

MODE_MENU = (
    "Choose a mode:\n\n"
    "1. Observer Mode (AI talks to AI)\n"
    "2. Chat Room Mode (3-way chat)\n"
    "3. Cooperative Exploration (AIs discuss a file)\n\n"
    "enter 1, 2, or 3: "
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_providers(config: ConversationConfig, api_key: str) -> dict[Speaker, AIProvider]:
    """One Gemini provider per agent, each bound to its configured model."""
    from duologue.providers.gemini import GeminiAIProvider, GeminiConfig

    return {
        Speaker.AGENT_A: GeminiAIProvider(GeminiConfig(api_key=api_key, model=config.model_id_a)),
        Speaker.AGENT_B: GeminiAIProvider(GeminiConfig(api_key=api_key, model=config.model_id_b)),
    }


def _ask(prompt: str) -> str:
    try:
        return console.input(prompt, markup=False)
    except EOFError:
        return ""


def _setup_configuration(
    defaults: ConversationConfig,
    *,
    max_turns: int | None,
    delay_ms: int | None,
    model_a: str | None,
    model_b: str | None,
    interactive: bool,
) -> ConversationConfig:
    """Ask for each value the command line did not already provide."""
    if interactive:
        console.clear()
        console.print("[bold blue]Welcome to duologue[/bold blue]")
        console.print("-" * 49)
        console.print("Let's configure your session. Press Enter to accept the default value.")

    def answer(given: object, prompt: str) -> str | None:
        if given is not None:
            return str(given)
        if not interactive:
            return None
        return _ask(prompt)

    return ConversationConfig.from_inputs(
        max_turns=answer(
            max_turns,
            f"\nEnter max turns (0 for unlimited) [Default: {defaults.max_turns}]: ",
        ),
        delay_ms=answer(
            delay_ms, f"Enter delay in ms (1000ms = 1s) [Default: {defaults.delay_ms}]: "
        ),
        model_id_a=answer(model_a, f"Enter model for AI1 [Default: {defaults.model_id_a}]: "),
        model_id_b=answer(model_b, f"Enter model for AI2 [Default: {defaults.model_id_b}]: "),
        defaults=defaults,
    )


async def _run_conversation(
    config: ConversationConfig,
    mode: ConversationMode,
    providers: dict[Speaker, AIProvider],
    recorder: TranscriptRecorder,
) -> ConversationResult:
    coordinator = TurnCoordinator(
        config,
        providers,
        operator=ConsoleOperator(console),
        recorder=recorder,
        display=ConversationDisplay(console),
    )
    try:
        return await coordinator.run(mode)
    finally:
        for provider in providers.values():
            await provider.close()


def _save_transcript(recorder: TranscriptRecorder) -> None:
    try:
        location = recorder.flush()
    except TranscriptWriteError as exc:
        console.print(f"[bold red]Error saving conversation:[/bold red] {exc}")
        return
    if location:
        console.print(f"\nConversation saved to: {location}")


@app.command()
def run(
    mode: str = typer.Option(None, "--mode", "-m", help="1/observer, 2/chat-room, 3/cooperative"),
    max_turns: int = typer.Option(None, "--max-turns", help="Turn cap, 0 for unlimited"),
    delay_ms: int = typer.Option(None, "--delay-ms", help="Pause before each agent call"),
    model_a: str = typer.Option(None, "--model-a", help="Model for AI1"),
    model_b: str = typer.Option(None, "--model-b", help="Model for AI2"),
    transcript_dir: Path = typer.Option(None, "--transcript-dir", help="Where to save"),
    no_setup: bool = typer.Option(False, "--no-setup", help="Skip the configuration prompts"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
):
    """Configure a session, pick a mode and let the agents talk."""
    settings = Settings()
    _configure_logging(log_level or settings.log_level)

    try:
        api_key = settings.require_api_key()
    except ConfigurationError as exc:
        console.print(f"[bold red]ERROR:[/bold red] {exc}")
        return

    try:
        config = _setup_configuration(
            settings.conversation_defaults(),
            max_turns=max_turns,
            delay_ms=delay_ms,
            model_a=model_a,
            model_b=model_b,
            interactive=not no_setup,
        )

        console.print("\n" + "-" * 38)
        choice = mode if mode is not None else _ask(MODE_MENU)
        selected = ConversationMode.from_choice(choice)

        recorder = TranscriptRecorder(FileTranscriptSink(transcript_dir or settings.transcript_dir))
        if selected is None:
            console.print("Invalid choice. Exiting.")
        else:
            providers = build_providers(config, api_key)
            asyncio.run(_run_conversation(config, selected, providers, recorder))

        console.print("\n[bold]SESSION COMPLETE[/bold]")
        _save_transcript(recorder)
    except KeyboardInterrupt:
        # no transcript flush on interrupt
        console.print("\n\nSession interrupted. Exiting...")
        raise typer.Exit(0) from None


def main() -> None:
    app()


if __name__ == "__main__":
    main()
