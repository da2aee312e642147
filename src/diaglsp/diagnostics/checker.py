"""Run an external checker command and collect its findings."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from typing import Callable, TypeAlias

from diaglsp.diagnostics.parser import parse_compiler_output
from diaglsp.diagnostics.record import DiagnosticRecord
from diaglsp.logging import get_logger

DiagnosticsProvider: TypeAlias = Callable[[str], list[DiagnosticRecord]]

FILE_PLACEHOLDER = "{file}"

__all__ = [
    "DiagnosticsProvider",
    "FILE_PLACEHOLDER",
    "build_checker_argv",
    "make_command_checker",
]


def build_checker_argv(command: Sequence[str], path: str) -> list[str]:
    """
    Substitute ``path`` into the command template.

    Every argument containing ``{file}`` gets the path substituted. If no
    argument does, the path is appended.
    """
    if not any(FILE_PLACEHOLDER in arg for arg in command):
        return [*command, path]
    return [arg.replace(FILE_PLACEHOLDER, path) for arg in command]


def make_command_checker(
    command: Sequence[str],
    *,
    timeout: float = 30.0,
    cwd: str | None = None,
) -> DiagnosticsProvider:
    """
    Create a provider that runs ``command`` against a file.

    Linters conventionally exit non-zero when they report findings, so the
    exit status is logged but not treated as a failure. A missing executable
    (``FileNotFoundError``) or a timeout (``subprocess.TimeoutExpired``)
    propagates to the caller. Output is decoded as UTF-8 with undecodable
    bytes replaced, so a stray Latin-1 byte cannot discard a whole run.

    Args:
        command: Command template, e.g. ``["ruff", "check", "--output-format", "concise"]``.
        timeout: Seconds before the checker is abandoned.
        cwd: Working directory for the checker process.

    Returns:
        Provider mapping a file path to the records parsed from the output.
    """
    if not command:
        raise ValueError("checker command must not be empty")

    template = list(command)
    logger = get_logger("diagnostics.checker")

    def provider(path: str) -> list[DiagnosticRecord]:
        argv = build_checker_argv(template, path)
        logger.debug("Running checker: %s", argv)

        result = subprocess.run(
            argv,
            capture_output=True,
            check=False,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            cwd=cwd,
        )
        records = parse_compiler_output(
            result.stdout + "\n" + result.stderr,
            default_filename=path,
        )

        logger.debug(
            "Checker exited with %d and reported %d findings for %s",
            result.returncode,
            len(records),
            path,
        )
        return records

    return provider
