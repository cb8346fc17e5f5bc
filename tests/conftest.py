"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from cscan.scanner import ScanResult, scan_source
from cscan.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that scans source and returns the token tuple."""

    def _lex(source: str) -> tuple[Token, ...]:
        return scan_source(source).tokens

    return _lex


@pytest.fixture
def scan_result():
    """Return a helper that scans source and returns the full ScanResult."""

    def _scan(source: str) -> ScanResult:
        return scan_source(source)

    return _scan


def assert_types(tokens: tuple[Token, ...], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: tuple[Token, ...], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
