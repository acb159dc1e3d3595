"""Minimal LSP server for Lox: diagnostics only."""

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

from lox import __version__
from lox.errors import CollectingReporter
from lox.lexer import tokenize

server = LanguageServer("lox-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish one diagnostic per reported error."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    # Split on "\n" only, as the lexer counts lines
    lines = [text.removesuffix("\r") for text in source.split("\n")]

    reporter = CollectingReporter()
    tokenize(source, reporter)

    diagnostics: list[Diagnostic] = []
    for reported in reporter.diagnostics:
        # Reports carry a line only, so the whole line is marked
        line = reported.line - 1
        text = lines[line] if 0 <= line < len(lines) else ""
        # LSP positions count UTF-16 code units
        width = len(text.encode("utf-16-le")) // 2
        message = reported.message
        if reported.where:
            message += f" ({reported.where.strip()})"
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=0),
                    end=Position(line=line, character=width),
                ),
                message=message,
                severity=DiagnosticSeverity.Error,
                source="lox",
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
