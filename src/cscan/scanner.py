"""C-like source scanner: converts source text into a flat token stream."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cscan.errors import Diagnostic, DiagnosticKind
from cscan.tokens import (
    INT64_MAX,
    INT64_MIN,
    Span,
    Token,
    TokenType,
    classify_word,
    is_digit,
    is_whitespace,
    is_word_char,
    is_word_start,
)

logger = logging.getLogger(__name__)

# Characters that map straight to a token with no lookahead
_SINGLE: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.BIT_XOR,
    "~": TokenType.BIT_NOT,
    "(": TokenType.LPAR,
    ")": TokenType.RPAR,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMI,
    ",": TokenType.COMMA,
}

# First character -> ((second character, two-char token), ...), fallback token.
# Every multi-character operator is exactly two characters long.
_LOOKAHEAD: dict[str, tuple[tuple[tuple[str, TokenType], ...], TokenType]] = {
    "=": ((("=", TokenType.EQUAL),), TokenType.ASSIGN),
    ">": ((("=", TokenType.GREATER_EQUAL), (">", TokenType.SHIFT_RIGHT)), TokenType.GREATER),
    "<": ((("=", TokenType.LESS_EQUAL), ("<", TokenType.SHIFT_LEFT)), TokenType.LESS),
    "&": ((("&", TokenType.AND),), TokenType.BIT_AND),
    "|": ((("|", TokenType.OR),), TokenType.BIT_OR),
    "!": ((("=", TokenType.NOT_EQUAL),), TokenType.NOT),
}


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Tokens and diagnostics from one scan, each in source order."""

    tokens: tuple[Token, ...]
    diagnostics: tuple[Diagnostic, ...]

    def events(self) -> list[Token | Diagnostic]:
        """Tokens and diagnostics merged by source offset."""
        merged: list[Token | Diagnostic] = [*self.tokens, *self.diagnostics]
        merged.sort(key=_event_offset)
        return merged


def _event_offset(event: Token | Diagnostic) -> int:
    if isinstance(event, Token):
        return event.span.start
    return event.offset


class Scanner:
    """Tokenize C-like source text in a single forward pass.

    Instances are single-use: create one per source string. All state is
    instance-local, so independent scans may run concurrently.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []
        self._diagnostics: list[Diagnostic] = []

    def scan(self) -> ScanResult:
        """Scan the full source and return tokens plus diagnostics."""
        while self._pos < len(self._source):
            self._scan_one()
        return ScanResult(tuple(self._tokens), tuple(self._diagnostics))

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it equals expected."""
        if self._peek() == expected:
            self._pos += 1
            return True
        return False

    def _emit(self, tt: TokenType, value: str | int | float | None, start: int) -> None:
        raw = self._source[start : self._pos]
        self._tokens.append(Token(tt, value, raw, Span(start, self._pos)))

    def _report(self, kind: DiagnosticKind, start: int) -> None:
        self._diagnostics.append(Diagnostic(kind, start, self._source[start : self._pos]))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_one(self) -> None:
        ch = self._peek()

        if is_word_start(ch):
            self._scan_word()
            return

        if is_digit(ch):
            self._scan_number()
            return

        if ch in _LOOKAHEAD:
            self._scan_operator()
            return

        if ch in _SINGLE:
            start = self._pos
            self._advance()
            self._emit(_SINGLE[ch], None, start)
            return

        if is_whitespace(ch):
            self._advance()
            return

        if ch == '"':
            self._scan_string()
            return

        start = self._pos
        self._advance()
        self._report(DiagnosticKind.UNRECOGNIZED_CHARACTER, start)

    # ------------------------------------------------------------------
    # Token classes
    # ------------------------------------------------------------------

    def _scan_word(self) -> None:
        start = self._pos
        self._advance()
        while self._pos < len(self._source) and is_word_char(self._peek()):
            self._advance()
        word = self._source[start : self._pos]
        self._emit(classify_word(word), word, start)

    def _scan_digits(self) -> None:
        while self._pos < len(self._source) and is_digit(self._peek()):
            self._advance()

    def _scan_number(self) -> None:
        start = self._pos
        self._scan_digits()

        if self._match("."):
            self._scan_digits()
            text = self._source[start : self._pos]
            try:
                value: int | float = float(text)
            except ValueError:
                self._drop_number(start, text)
                return
            self._emit(TokenType.FLOAT_NUM, value, start)
            return

        text = self._source[start : self._pos]
        try:
            value = int(text)
        except ValueError:
            # digit runs past sys.get_int_max_str_digits()
            self._drop_number(start, text)
            return
        if not INT64_MIN <= value <= INT64_MAX:
            self._drop_number(start, text)
            return
        self._emit(TokenType.INT_NUM, value, start)

    def _drop_number(self, start: int, text: str) -> None:
        logger.debug("dropping malformed numeric literal %r at offset %d", text, start)
        self._report(DiagnosticKind.MALFORMED_NUMBER, start)

    def _scan_operator(self) -> None:
        start = self._pos
        ch = self._advance()
        pairs, fallback = _LOOKAHEAD[ch]
        for second, tt in pairs:
            if self._match(second):
                self._emit(tt, None, start)
                return
        self._emit(fallback, None, start)

    def _scan_string(self) -> None:
        start = self._pos
        self._advance()  # opening quote
        body_start = self._pos
        while self._pos < len(self._source) and self._peek() != '"':
            self._advance()
        body = self._source[body_start : self._pos]
        self._match('"')  # closing quote, absent when unterminated
        self._emit(TokenType.ESCAPE, body, start)


def scan_source(source: str) -> ScanResult:
    """Scan source text and return tokens together with diagnostics."""
    return Scanner(source).scan()


def scan(source: str) -> tuple[Token, ...]:
    """Convenience function: scan source text and return the token stream."""
    return Scanner(source).scan().tokens
