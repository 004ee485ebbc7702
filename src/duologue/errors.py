"""Exception hierarchy for duologue."""

from __future__ import annotations


class DuologueError(Exception):
    """Base class for all duologue errors."""


class ConfigurationError(DuologueError):
    """A required credential or setting is missing. Fatal before any mode runs."""


class SetupError(DuologueError):
    """A mode could not be prepared (e.g. no file given for cooperative mode).

    Aborts that mode only; control returns to the caller.
    """


class TranscriptWriteError(DuologueError):
    """The transcript sink failed to persist the recorded lines."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        super().__init__(message)
        self.location = location
