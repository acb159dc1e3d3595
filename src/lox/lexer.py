"""Lox lexer: converts source text into a flat token list."""

from __future__ import annotations

from lox.errors import ErrorReporter
from lox.tokens import KEYWORDS, Token, TokenType, is_alnum, is_alpha, is_digit

_SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (type when followed by '=', type otherwise)
_WITH_EQUAL = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


class Lexer:
    """Tokenize Lox source text, reporting bad input and carrying on."""

    def __init__(self, source: str, reporter: ErrorReporter) -> None:
        self._source = source
        self._reporter = reporter
        self._start = 0
        self._pos = 0
        self._line = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list, EOF last."""
        while not self._at_end():
            self._start = self._pos
            self._lex_token()

        self._tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._peek() != expected:
            return False
        self._pos += 1
        return True

    def _emit(self, tt: TokenType, literal: str | float | None = None) -> None:
        lexeme = self._source[self._start : self._pos]
        self._tokens.append(Token(tt, lexeme, literal, self._line))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_token(self) -> None:
        ch = self._advance()

        if ch in _SINGLE:
            self._emit(_SINGLE[ch])
            return

        if ch in _WITH_EQUAL:
            long, short = _WITH_EQUAL[ch]
            self._emit(long if self._match("=") else short)
            return

        if ch == "/":
            if self._match("/"):
                # Comment runs to end of line; the newline is handled next pass
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
            else:
                self._emit(TokenType.SLASH)
            return

        if ch in " \r\t":
            return

        if ch == "\n":
            self._line += 1
            return

        if ch == '"':
            self._lex_string()
            return

        if is_digit(ch):
            self._lex_number()
            return

        if is_alpha(ch):
            self._lex_identifier()
            return

        self._reporter.error(self._line, "Unexpected character.")

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _lex_string(self) -> None:
        while not self._at_end() and self._peek() != '"':
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._at_end():
            self._reporter.error(self._line, "Unterminated string.")
            return

        self._advance()  # closing quote
        self._emit(TokenType.STRING, self._source[self._start + 1 : self._pos - 1])

    def _lex_number(self) -> None:
        while is_digit(self._peek()):
            self._advance()

        # A '.' only belongs to the number when a digit follows it
        if self._peek() == "." and is_digit(self._peek(1)):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        self._emit(TokenType.NUMBER, float(self._source[self._start : self._pos]))

    def _lex_identifier(self) -> None:
        while is_alnum(self._peek()):
            self._advance()
        text = self._source[self._start : self._pos]
        self._emit(KEYWORDS.get(text, TokenType.IDENTIFIER))


def tokenize(source: str, reporter: ErrorReporter) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, reporter).tokenize()
