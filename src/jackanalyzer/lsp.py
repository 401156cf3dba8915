"""Minimal LSP server for Jack: syntax diagnostics only."""

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

from jackanalyzer import __version__
from jackanalyzer.analyzer import parse_events
from jackanalyzer.errors import AnalyzerError

server = LanguageServer(
    "jackanalyzer-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the analyzer over the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics: list[Diagnostic] = []

    try:
        parse_events(source, filename)
    except AnalyzerError as exc:
        span = exc.location()
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=span.start.line - 1, character=span.start.column - 1),
                    end=Position(line=span.end.line - 1, character=span.end.column - 1),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="jackanalyzer",
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
