"""Parse compiler and linter text output into diagnostic records.

Handles the GNU-style ``file:line[:col][range]: [severity:] message`` shape
most command line tools emit, including gcc, clang, javac -Xdiags,
mypy, flake8/ruff in concise mode and shellcheck in gcc mode.
"""

from __future__ import annotations

import re

from diaglsp.diagnostics.record import NO_POSITION, DiagnosticRecord

__all__ = [
    "parse_compiler_output",
    "parse_compiler_line",
]

_WARNING_WORDS = frozenset({"warning", "warn", "note", "info", "hint"})

_LINE_PATTERN = re.compile(
    r"""
    ^(?P<file>.*?)
    :(?P<line>\d+)
    (?:[:.](?P<col>\d+))?
    (?:-(?:(?P<end_line>\d+)\.)?(?P<end_col>\d+))?
    :\s*
    (?:(?P<severity>fatal\ error|error|fatal|warning|warn|note|info|hint)\s*:\s*)?
    (?P<message>\S.*?)\s*$
    """,
    re.VERBOSE | re.IGNORECASE,
)


def parse_compiler_line(
    line: str, *, default_filename: str | None = None
) -> DiagnosticRecord | None:
    """
    Parse a single output line.

    Args:
        line: One line of tool output.
        default_filename: Filename used when the line has an empty path.

    Returns:
        The parsed record, or None if the line is not a diagnostic.
    """
    match = _LINE_PATTERN.match(line)
    if match is None:
        return None

    start_line = int(match["line"])
    column = int(match["col"]) if match["col"] else NO_POSITION

    end_line = NO_POSITION
    end_column = NO_POSITION
    if match["end_col"]:
        end_column = int(match["end_col"])
        # col-endcol on the same line
        end_line = int(match["end_line"]) if match["end_line"] else start_line

    severity = (match["severity"] or "error").lower()

    return DiagnosticRecord(
        message=match["message"],
        filename=match["file"].strip() or default_filename,
        line=start_line,
        column=column,
        end_line=end_line,
        end_column=end_column,
        is_warning=severity in _WARNING_WORDS,
    )


def parse_compiler_output(
    text: str, *, default_filename: str | None = None
) -> list[DiagnosticRecord]:
    """
    Parse multi-line tool output into records.

    Lines that are not diagnostics (source excerpts, carets, summaries) are
    skipped. Repeated findings are collapsed; the first occurrence is kept.

    Args:
        text: Raw combined stdout/stderr of the tool.
        default_filename: Filename used when a line has an empty path.

    Returns:
        Records in output order.
    """
    records: dict[DiagnosticRecord, None] = {}
    for raw_line in text.splitlines():
        record = parse_compiler_line(raw_line, default_filename=default_filename)
        if record is not None and record not in records:
            records[record] = None
    return list(records)
