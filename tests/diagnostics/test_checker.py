"""Tests for the external checker provider."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from diaglsp.diagnostics.checker import build_checker_argv, make_command_checker


class TestBuildCheckerArgv:
    """Tests for build_checker_argv."""

    def test_placeholder_is_substituted(self) -> None:
        argv = build_checker_argv(["lint", "--file={file}", "-q"], "/tmp/a.py")
        assert argv == ["lint", "--file=/tmp/a.py", "-q"]

    def test_path_appended_without_placeholder(self) -> None:
        argv = build_checker_argv(["lint", "-q"], "/tmp/a.py")
        assert argv == ["lint", "-q", "/tmp/a.py"]


class TestMakeCommandChecker:
    """Tests for make_command_checker."""

    def test_empty_command_rejected(self) -> None:
        with pytest.raises(ValueError):
            make_command_checker([])

    def test_parses_stdout_and_stderr(self, tmp_path: Path) -> None:
        """Findings on both streams are collected; a non-zero exit is not an error."""
        target = tmp_path / "a.py"
        target.write_text("x = 1\n")
        script = (
            "import sys\n"
            "print(sys.argv[1] + ':2:3: warning: from stdout')\n"
            "print(sys.argv[1] + ':4: error: from stderr', file=sys.stderr)\n"
            "sys.exit(1)\n"
        )
        checker = make_command_checker([sys.executable, "-c", script, "{file}"])

        records = checker(str(target))

        assert [(r.line, r.column, r.is_warning) for r in records] == [
            (2, 3, True),
            (4, 1, False),
        ]
        assert all(r.filename == str(target) for r in records)

    def test_missing_executable_propagates(self, tmp_path: Path) -> None:
        checker = make_command_checker(["diaglsp-no-such-checker-binary"])
        with pytest.raises(FileNotFoundError):
            checker(str(tmp_path / "a.py"))

    def test_timeout_propagates(self, tmp_path: Path) -> None:
        checker = make_command_checker(
            [sys.executable, "-c", "import time; time.sleep(5)"],
            timeout=0.2,
        )
        with pytest.raises(subprocess.TimeoutExpired):
            checker(str(tmp_path / "a.py"))

    def test_non_utf8_output_is_replaced(self, tmp_path: Path) -> None:
        """A Latin-1 byte in the output does not lose the run's findings."""
        script = (
            "import sys\n"
            "sys.stdout.buffer.write(b'a.c:3:4: error: caf\\xe9 undefined\\n')\n"
        )
        checker = make_command_checker([sys.executable, "-c", script])

        records = checker(str(tmp_path / "a.c"))

        assert len(records) == 1
        assert (records[0].filename, records[0].line, records[0].column) == ("a.c", 3, 4)
        assert records[0].message == "caf\ufffd undefined"
