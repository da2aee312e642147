"""Adapter module for converting between internal types and LSP protocol types."""

from __future__ import annotations

import os
from urllib.parse import urlparse

from lsprotocol import types
from pygls import uris

from diaglsp.diagnostics.record import DiagnosticRecord

__all__ = [
    "DIAGNOSTIC_SOURCE",
    "path_to_uri",
    "record_to_lsp_diagnostic",
    "record_to_lsp_range",
    "same_file",
    "severity_to_lsp",
    "uri_to_path",
]

DIAGNOSTIC_SOURCE = "diaglsp"


def severity_to_lsp(record: DiagnosticRecord) -> types.DiagnosticSeverity:
    if record.is_warning:
        return types.DiagnosticSeverity.Warning
    return types.DiagnosticSeverity.Error


def record_to_lsp_range(record: DiagnosticRecord) -> types.Range:
    """
    Convert a record's 1-based span to a 0-based LSP range.

    Records without an end position, or whose end lies before the start,
    become a zero-width range at the start position.
    """
    start = types.Position(line=record.line - 1, character=record.column - 1)

    if not record.has_end or (record.end_line, record.end_column) < (
        record.line,
        record.column,
    ):
        return types.Range(start=start, end=start)

    end = types.Position(line=record.end_line - 1, character=record.end_column - 1)
    return types.Range(start=start, end=end)


def record_to_lsp_diagnostic(record: DiagnosticRecord) -> types.Diagnostic:
    """
    Convert a diagnostic record to an LSP Diagnostic.

    Args:
        record: Record produced by a checker.

    Returns:
        LSP diagnostic with range, severity and message filled in.
    """
    return types.Diagnostic(
        range=record_to_lsp_range(record),
        message=record.message,
        severity=severity_to_lsp(record),
        source=DIAGNOSTIC_SOURCE,
    )


def uri_to_path(uri: str) -> str | None:
    """Return the filesystem path for a ``file:`` URI, or None for other schemes."""
    if urlparse(uri).scheme != "file":
        return None
    return uris.to_fs_path(uri)


def path_to_uri(path: str | os.PathLike[str]) -> str | None:
    return uris.from_fs_path(os.fspath(path))


def same_file(first: str, second: str) -> bool:
    """Compare two paths after making them absolute and normalizing case."""
    return os.path.normcase(os.path.abspath(first)) == os.path.normcase(
        os.path.abspath(second)
    )
