"""Transcript recording and persistence.

The recorder keeps an append-only list of rendered lines, one per
displayed message, and writes them once at the end of a session.
"""

from __future__ import annotations

import itertools
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from duologue.errors import TranscriptWriteError

logger = logging.getLogger("duologue.transcript")

_MARKUP_RE = re.compile(r"[*#]")
ENTRY_SEPARATOR = "\n\n" + "─" * 60 + "\n\n"


def strip_markup(text: str) -> str:
    """Remove emphasis/heading markup characters and surrounding whitespace."""
    return _MARKUP_RE.sub("", text).strip()


class TranscriptSink(ABC):
    """Write-once destination for a finished transcript."""

    @abstractmethod
    def write(self, lines: list[str], started_at: datetime) -> str:
        """Persist *lines* and return the location written.

        Raises:
            TranscriptWriteError: The artifact could not be written.
        """
        ...


class FileTranscriptSink(TranscriptSink):
    """Writes ``convo_<date>_<time>.txt`` into a directory, creating it if absent."""

    def __init__(self, directory: Path | str = "convos") -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def filename_for(self, moment: datetime) -> str:
        return f"convo_{moment:%Y-%m-%d}_{moment:%H-%M-%S}.txt"

    def _candidates(self, moment: datetime) -> Iterator[Path]:
        name = Path(self.filename_for(moment))
        yield self._directory / name
        for n in itertools.count(2):
            yield self._directory / f"{name.stem}_{n}{name.suffix}"

    def write(self, lines: list[str], started_at: datetime) -> str:
        """Create a new file; an existing transcript is never overwritten."""
        text = ENTRY_SEPARATOR.join(lines)
        path = self._directory / self.filename_for(started_at)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            for path in self._candidates(started_at):
                try:
                    with path.open("x", encoding="utf-8") as fh:
                        fh.write(text)
                except FileExistsError:
                    continue
                break
        except OSError as exc:
            raise TranscriptWriteError(
                f"Could not save conversation: {exc}", location=str(path)
            ) from exc
        return str(path)


class MemoryTranscriptSink(TranscriptSink):
    """Keeps written transcripts in memory for development and testing."""

    def __init__(self) -> None:
        self.artifacts: list[list[str]] = []

    def write(self, lines: list[str], started_at: datetime) -> str:
        self.artifacts.append(list(lines))
        return f"memory://{len(self.artifacts) - 1}"


class TranscriptRecorder:
    """Accumulates display lines in order and flushes them to a sink."""

    def __init__(self, sink: TranscriptSink | None = None) -> None:
        self._sink = sink or FileTranscriptSink()
        self._lines: list[str] = []
        self._started_at = datetime.now()

    def record(self, speaker: str, raw_text: str) -> str:
        """Normalize and append one line; returns the stored line."""
        line = f"{speaker}: {strip_markup(raw_text)}"
        self._lines.append(line)
        return line

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def flush(self) -> str | None:
        """Write the transcript; ``None`` when nothing was recorded.

        Raises:
            TranscriptWriteError: The sink failed.
        """
        if not self._lines:
            logger.debug("Transcript empty, nothing to flush")
            return None
        location = self._sink.write(list(self._lines), self._started_at)
        logger.info("Transcript saved to %s", location, extra={"lines": len(self._lines)})
        return location
