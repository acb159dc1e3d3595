"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from lox.errors import CollectingReporter
from lox.lexer import tokenize
from lox.tokens import Token, TokenType


@pytest.fixture
def collector() -> CollectingReporter:
    """Return a fresh in-memory reporter."""
    return CollectingReporter()


@pytest.fixture
def lex(collector: CollectingReporter):
    """Return a helper that tokenizes source and returns tokens (excluding EOF).

    Diagnostics land in the ``collector`` fixture.
    """

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source, collector)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def script(tmp_path):
    """Return a helper that writes a script file and returns its path."""

    def _script(source: str, name: str = "script.lox"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _script


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lexemes(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.lexeme for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
