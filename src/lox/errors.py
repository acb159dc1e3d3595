"""Diagnostics, reporting strategies, and the process exit-code contract."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO

# Exit codes, named after sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66


class UsageError(Exception):
    """Raised on command-line misuse, before any source is read."""


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reported problem in the source text."""

    line: int
    where: str
    message: str

    def format(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def __str__(self) -> str:
        return self.format()


class ErrorReporter(ABC):
    """Sink that every front-end phase reports source errors into.

    Phases call report() (or error()) and keep going; they never print or
    raise for malformed input themselves. The reporter keeps a failure flag
    that the caller inspects after a run and may clear with reset().
    Subclasses decide only how a diagnostic is presented, in _emit().
    """

    def __init__(self) -> None:
        self._count = 0

    @property
    def had_error(self) -> bool:
        return self._count > 0

    @property
    def error_count(self) -> int:
        """Number of diagnostics reported since the last reset()."""
        return self._count

    def report(self, line: int, where: str, message: str) -> None:
        self._count += 1
        self._emit(Diagnostic(line, where, message))

    def error(self, line: int, message: str) -> None:
        """Report an error with no location detail beyond the line."""
        self.report(line, "", message)

    def reset(self) -> None:
        self._count = 0

    @abstractmethod
    def _emit(self, diagnostic: Diagnostic) -> None:
        """Present one diagnostic."""


class ConsoleReporter(ErrorReporter):
    """Print diagnostics to the diagnostic stream (stderr by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self._stream = stream

    def _emit(self, diagnostic: Diagnostic) -> None:
        # Looked up per call so a redirected sys.stderr is honoured
        stream = self._stream if self._stream is not None else sys.stderr
        print(diagnostic.format(), file=stream)


class CollectingReporter(ErrorReporter):
    """Keep diagnostics in memory instead of printing them."""

    def __init__(self) -> None:
        super().__init__()
        self.diagnostics: list[Diagnostic] = []

    def _emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def reset(self) -> None:
        super().reset()
        self.diagnostics.clear()
