"""Token types, data structures, lookup tables, and description formatting."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

import regex


class TokenType(Enum):
    # Valued
    KEYWORD = auto()
    ID = auto()
    INT_NUM = auto()
    FLOAT_NUM = auto()
    ESCAPE = auto()  # string literal body, delimiters discarded
    DIRECTIVE = auto()

    # Arithmetic
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    ASSIGN = auto()  # =

    # Grouping and separators
    LPAR = auto()  # (
    RPAR = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    SEMI = auto()  # ;
    COMMA = auto()  # ,

    # Logical
    AND = auto()  # &&
    OR = auto()  # ||
    NOT = auto()  # !

    # Bitwise
    BIT_AND = auto()  # &
    BIT_OR = auto()  # |
    BIT_XOR = auto()  # ^
    BIT_NOT = auto()  # ~
    SHIFT_LEFT = auto()  # <<
    SHIFT_RIGHT = auto()  # >>

    # Comparison
    GREATER = auto()  # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=
    EQUAL = auto()  # ==
    NOT_EQUAL = auto()  # !=


VALUED_TYPES = frozenset(
    {
        TokenType.KEYWORD,
        TokenType.ID,
        TokenType.INT_NUM,
        TokenType.FLOAT_NUM,
        TokenType.ESCAPE,
        TokenType.DIRECTIVE,
    }
)

# Literal spelling of every fixed (payload-free) token type
SYMBOLS: dict[TokenType, str] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.ASSIGN: "=",
    TokenType.LPAR: "(",
    TokenType.RPAR: ")",
    TokenType.LBRACE: "{",
    TokenType.RBRACE: "}",
    TokenType.SEMI: ";",
    TokenType.COMMA: ",",
    TokenType.AND: "&&",
    TokenType.OR: "||",
    TokenType.NOT: "!",
    TokenType.BIT_AND: "&",
    TokenType.BIT_OR: "|",
    TokenType.BIT_XOR: "^",
    TokenType.BIT_NOT: "~",
    TokenType.SHIFT_LEFT: "<<",
    TokenType.SHIFT_RIGHT: ">>",
    TokenType.GREATER: ">",
    TokenType.GREATER_EQUAL: ">=",
    TokenType.LESS: "<",
    TokenType.LESS_EQUAL: "<=",
    TokenType.EQUAL: "==",
    TokenType.NOT_EQUAL: "!=",
}


@dataclass(frozen=True, slots=True)
class Span:
    """Source range as 0-based character offsets, end exclusive."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanner token with its semantic value and original source text.

    ``value`` is ``None`` for fixed tokens, an ``int`` for INT_NUM, a ``float``
    for FLOAT_NUM and a ``str`` otherwise.
    """

    type: TokenType
    value: str | int | float | None
    raw: str
    span: Span

    @property
    def text(self) -> str:
        """The payload as it appears in a description line."""
        return payload_text(self)


KEYWORDS = frozenset(
    {
        "auto", "break", "case", "char", "const", "continue",
        "default", "do", "double", "else", "enum", "extern",
        "float", "for", "goto", "if", "int", "long",
        "register", "return", "short", "signed", "sizeof",
        "static", "struct", "switch", "typedef", "union",
        "unsigned", "void", "volatile", "while",
    }
)  # fmt: skip

DIRECTIVES = frozenset(
    {
        "#define", "#elif", "#else", "#endif", "#error",
        "#if", "#ifdef", "#ifndef", "#include", "#message",
        "#undef",
    }
)  # fmt: skip

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def is_keyword(word: str) -> bool:
    """Return True if word is a reserved C keyword."""
    return word in KEYWORDS


def is_directive(word: str) -> bool:
    """Return True if word is a known preprocessor directive spelling."""
    return word in DIRECTIVES


def classify_word(word: str) -> TokenType:
    """Classify an identifier-class run: directive, then keyword, then ID."""
    if is_directive(word):
        return TokenType.DIRECTIVE
    if is_keyword(word):
        return TokenType.KEYWORD
    return TokenType.ID


# Unicode Alphabetic (includes Nl and Other_Alphabetic marks) and White_Space properties
_WORD_START = regex.compile(r"[\p{Alphabetic}#]")
_WORD_CHAR = regex.compile(r"[\p{Alphabetic}\p{N}_]")
_WHITESPACE = regex.compile(r"\p{White_Space}")


def is_word_start(ch: str) -> bool:
    return _WORD_START.match(ch) is not None


def is_word_char(ch: str) -> bool:
    return _WORD_CHAR.match(ch) is not None


def is_whitespace(ch: str) -> bool:
    return _WHITESPACE.match(ch) is not None


def is_digit(ch: str) -> bool:
    """Return True for ASCII decimal digits only."""
    return "0" <= ch <= "9"


def format_float(value: float) -> str:
    """Render a float in shortest positional form: ``3.0`` -> ``3``, ``1e-05`` -> ``0.00001``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def payload_text(token: Token) -> str:
    """Return the quoted part of a description line for any token."""
    if token.type is TokenType.FLOAT_NUM:
        return format_float(token.value)  # type: ignore[arg-type]
    if token.type in VALUED_TYPES:
        return str(token.value)
    return SYMBOLS[token.type]


def describe(token: Token) -> str:
    """Render ``Token: <CATEGORY> "<payload>"``."""
    return f'Token: {token.type.name} "{payload_text(token)}"'
