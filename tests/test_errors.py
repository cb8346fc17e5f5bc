"""Test diagnostics for unrecognized input."""

from cscan.errors import Diagnostic, DiagnosticKind
from cscan.tokens import Token, TokenType

from .conftest import assert_types, assert_values


class TestUnrecognized:
    def test_skips_and_continues(self, scan_result):
        result = scan_result("a @ b")
        assert_types(result.tokens, [TokenType.ID, TokenType.ID])
        assert_values(result.tokens, ["a", "b"])
        assert len(result.diagnostics) == 1

    def test_diagnostic_fields(self, scan_result):
        diag = scan_result("a @ b").diagnostics[0]
        assert diag.kind is DiagnosticKind.UNRECOGNIZED_CHARACTER
        assert diag.offset == 2
        assert diag.text == "@"

    def test_message(self, scan_result):
        diag = scan_result("$").diagnostics[0]
        assert diag.message == "Unrecognized character: $"
        assert diag.format() == diag.message
        assert str(diag) == diag.message

    def test_one_diagnostic_per_character(self, scan_result):
        result = scan_result("@@?")
        assert [d.text for d in result.diagnostics] == ["@", "@", "?"]
        assert [d.offset for d in result.diagnostics] == [0, 1, 2]

    def test_stray_punctuation(self, scan_result):
        result = scan_result("a[0] % b:c")
        assert [d.text for d in result.diagnostics] == ["[", "]", "%", ":"]
        assert_values(result.tokens, ["a", 0, "b", "c"])

    def test_non_ascii_symbol(self, scan_result):
        result = scan_result("x → y")
        assert [d.text for d in result.diagnostics] == ["→"]
        assert len(result.tokens) == 2

    def test_single_quote_is_unrecognized(self, scan_result):
        result = scan_result("'c'")
        assert [d.text for d in result.diagnostics] == ["'", "'"]
        assert_values(result.tokens, ["c"])


class TestEvents:
    def test_interleaved_in_source_order(self, scan_result):
        events = scan_result("a @ b").events()
        assert isinstance(events[0], Token)
        assert isinstance(events[1], Diagnostic)
        assert isinstance(events[2], Token)

    def test_malformed_number_position(self, scan_result):
        events = scan_result("@ 99999999999999999999 x").events()
        kinds = [e.kind for e in events if isinstance(e, Diagnostic)]
        assert kinds == [DiagnosticKind.UNRECOGNIZED_CHARACTER, DiagnosticKind.MALFORMED_NUMBER]
        assert isinstance(events[-1], Token)
