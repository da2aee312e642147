"""Tests for parsing checker output into records."""

from __future__ import annotations

import pytest

from diaglsp.diagnostics.parser import parse_compiler_line, parse_compiler_output
from diaglsp.diagnostics.record import NO_POSITION, DiagnosticRecord


class TestParseCompilerLine:
    """Tests for parse_compiler_line."""

    def test_gcc_warning(self) -> None:
        """file:line:col: warning: message."""
        record = parse_compiler_line("src/main.c:12:5: warning: unused variable 'x'")
        assert record is not None
        assert record.filename == "src/main.c"
        assert (record.line, record.column) == (12, 5)
        assert record.end_line == NO_POSITION
        assert record.end_column == NO_POSITION
        assert record.message == "unused variable 'x'"
        assert record.is_warning is True

    def test_mypy_error_without_column(self) -> None:
        """file:line: error: message defaults the column to 1."""
        record = parse_compiler_line("pkg/mod.py:7: error: Name 'y' is not defined")
        assert record is not None
        assert record.line == 7
        assert record.column == 1
        assert record.is_warning is False

    def test_no_severity_defaults_to_error(self) -> None:
        """Lines without a severity word are errors."""
        record = parse_compiler_line("a.py:3:80: E501 line too long")
        assert record is not None
        assert record.message == "E501 line too long"
        assert record.is_warning is False

    @pytest.mark.parametrize("word", ["note", "info", "hint", "warn", "WARNING"])
    def test_warning_words(self, word: str) -> None:
        record = parse_compiler_line(f"a.c:1:1: {word}: something")
        assert record is not None
        assert record.is_warning is True

    @pytest.mark.parametrize("word", ["error", "fatal", "fatal error"])
    def test_error_words(self, word: str) -> None:
        record = parse_compiler_line(f"a.c:1:1: {word}: something")
        assert record is not None
        assert record.is_warning is False
        assert record.message == "something"

    def test_column_range_on_one_line(self) -> None:
        """file:line:col-endcol spans a single line."""
        record = parse_compiler_line("a.c:4:2-9: error: bad span")
        assert record is not None
        assert (record.line, record.column, record.end_line, record.end_column) == (
            4,
            2,
            4,
            9,
        )

    def test_full_range(self) -> None:
        """file:line.col-endline.endcol spans multiple lines."""
        record = parse_compiler_line("a.c:4.2-6.1: error: bad span")
        assert record is not None
        assert (record.line, record.column, record.end_line, record.end_column) == (
            4,
            2,
            6,
            1,
        )

    def test_windows_drive_letter(self) -> None:
        """A colon inside the path does not end the filename."""
        record = parse_compiler_line(r"C:\work\a.c:3:4: error: oops")
        assert record is not None
        assert record.filename == r"C:\work\a.c"
        assert record.line == 3

    def test_empty_filename_uses_default(self) -> None:
        record = parse_compiler_line(":3:4: error: oops", default_filename="x.c")
        assert record is not None
        assert record.filename == "x.c"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "Found 3 errors in 1 file",
            "    int x = 1;",
            "        ^",
            "a.c:3:",
        ],
    )
    def test_non_diagnostic_lines(self, line: str) -> None:
        assert parse_compiler_line(line) is None


class TestParseCompilerOutput:
    """Tests for parse_compiler_output."""

    def test_skips_noise_and_keeps_order(self) -> None:
        text = "\n".join(
            [
                "a.c:1:1: error: first",
                "    int a",
                "    ^",
                "a.c:2:1: warning: second",
                "2 diagnostics generated.",
            ]
        )
        records = parse_compiler_output(text)
        assert [record.message for record in records] == ["first", "second"]

    def test_duplicates_collapse_to_first(self) -> None:
        """Repeated findings keep the first occurrence, including its severity."""
        text = "a.c:1:1: warning: same\na.c:1:1: error: same\n"
        records = parse_compiler_output(text)
        assert records == [DiagnosticRecord("same", "a.c", 1, 1)]
        assert records[0].is_warning is True

    def test_empty_output(self) -> None:
        assert parse_compiler_output("") == []
