"""Diagnostic types for non-fatal scan reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class DiagnosticKind(Enum):
    UNRECOGNIZED_CHARACTER = auto()  # skipped, one character
    MALFORMED_NUMBER = auto()  # numeric literal that does not fit i64/f64


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A report about input the scanner skipped or dropped.

    The scanner never raises on malformed input; it records one of these and
    keeps going. ``offset`` is the 0-based character offset where the
    offending text starts and ``text`` is that text.
    """

    kind: DiagnosticKind
    offset: int
    text: str

    @property
    def message(self) -> str:
        if self.kind is DiagnosticKind.UNRECOGNIZED_CHARACTER:
            return f"Unrecognized character: {self.text}"
        return f"Malformed numeric literal: {self.text}"

    def format(self) -> str:
        return self.message

    def __str__(self) -> str:
        return self.message
