"""Minimal LSP server for command files: diagnostics only."""

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

from shellexec.environ import mapping_lookup
from shellexec.errors import ShellSyntaxError
from shellexec.parser import Parser, split_lines

server = LanguageServer(
    "shellexec-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full
)

# Expansion never fails, so diagnostics need no real environment
_EMPTY_LOOKUP = mapping_lookup({})


def check_source(source: str) -> list[ShellSyntaxError]:
    """Return the syntax error of every failing command line in source."""
    errors: list[ShellSyntaxError] = []
    for ll in split_lines(source):
        try:
            Parser(source, _EMPTY_LOOKUP, True, ll.start, ll.end, ll.line).parse_line()
        except ShellSyntaxError as exc:
            errors.append(exc)
    return errors


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check every command line in the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for exc in check_source(doc.source):
        line = exc.position.line - 1
        col = exc.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + exc.length),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                code=exc.kind.value,
                source="shellexec",
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
