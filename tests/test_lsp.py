"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from lox.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.lox") -> None:
        ws.put_text_document(TextDocumentItem(uri=uri, language_id="lox", version=0, text=source))

    return ls, published, put


class TestLexErrors:
    def test_unexpected_character(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("var a = @;")
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert d.message == "Unexpected character."
        assert d.source == "lox"
        assert d.range.start.line == 0
        assert d.range.start.character == 0
        assert d.range.end.character == len("var a = @;")

    def test_all_errors_published(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put('@\nok\n"open')
        _validate(ls, "file:///test.lox")

        diags = published[0].diagnostics
        assert [d.message for d in diags] == ["Unexpected character.", "Unterminated string."]
        assert [d.range.start.line for d in diags] == [0, 2]


class TestLineRanges:
    def test_form_feed_is_not_a_line_break(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("\x0c\nprint @;")
        _validate(ls, "file:///test.lox")

        diags = published[0].diagnostics
        # The form feed itself is reported on line 1
        assert [d.range.start.line for d in diags] == [0, 1]
        assert diags[1].range.end.line == 1
        assert diags[1].range.end.character == 8

    def test_crlf_line_width(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("ok\r\n@x\r\n")
        _validate(ls, "file:///test.lox")

        d = published[0].diagnostics[0]
        assert d.range.start.line == 1
        assert d.range.end.character == 2

    def test_width_in_utf16_units(self, lsp_env) -> None:
        ls, published, put = lsp_env
        # One astral character is two UTF-16 code units
        put("@ \U0001F600")
        _validate(ls, "file:///test.lox")

        d = published[0].diagnostics[0]
        assert d.range.end.character == 4


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("var a = 1;\nprint a;\n")
        _validate(ls, "file:///test.lox")

        assert len(published) == 1
        assert published[0].diagnostics == []

    def test_empty_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("")
        _validate(ls, "file:///test.lox")
        assert published[0].diagnostics == []
