"""Lexical analyzer for C-like source text."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cscan.tokens import Token

__version__ = "0.1.0"


def scan(source: str) -> tuple[Token, ...]:
    """Scan source text and return its token stream."""
    from cscan.scanner import scan as _scan

    return _scan(source)
