"""Lox interpreter front end: command driver and error reporting."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lox.errors import ErrorReporter
    from lox.tokens import Token

__version__ = "0.1.0"


def scan(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Tokenize Lox source, collecting diagnostics when no reporter is given."""
    from lox.errors import CollectingReporter
    from lox.lexer import tokenize

    if reporter is None:
        reporter = CollectingReporter()
    return tokenize(source, reporter)
