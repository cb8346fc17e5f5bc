"""Minimal LSP server for cscan — scan diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from cscan import __version__
from cscan.errors import DiagnosticKind
from cscan.scanner import scan_source

server = LanguageServer("cscan-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)

_SEVERITY = {
    DiagnosticKind.UNRECOGNIZED_CHARACTER: DiagnosticSeverity.Warning,
    DiagnosticKind.MALFORMED_NUMBER: DiagnosticSeverity.Information,
}


def offset_to_position(source: str, offset: int) -> Position:
    """Convert a 0-based code-point offset into a 0-based LSP position.

    LSP characters are UTF-16 code units, so astral characters count twice.
    """
    line = source.count("\n", 0, offset)
    line_start = source.rfind("\n", 0, offset) + 1
    character = len(source[line_start:offset].encode("utf-16-le", "surrogatepass")) // 2
    return Position(line=line, character=character)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    for diag in scan_source(source).diagnostics:
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=offset_to_position(source, diag.offset),
                    end=offset_to_position(source, diag.offset + len(diag.text)),
                ),
                message=diag.message,
                severity=_SEVERITY[diag.kind],
                source="cscan",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
