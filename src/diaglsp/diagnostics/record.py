"""Diagnostic record: one compiler or linter finding in a source file."""

from __future__ import annotations

import dataclasses

NO_POSITION = -1  # end_line / end_column value meaning "end unknown"


@dataclasses.dataclass(frozen=True, eq=False)
class DiagnosticRecord:
    """
    A finding reported against a source file.

    Line and column are 1-based; non-positive values are stored as 1. The
    end position is kept verbatim so callers can pass ``NO_POSITION`` when
    the tool reports only a start. A ``None`` message reads as ``""``.

    Severity is not part of the record's identity: two records that differ
    only in ``is_warning`` compare and hash equal, so a finding that is
    upgraded or downgraded between analysis runs is still the same finding.

    Attributes:
        message: Human-readable description.
        filename: File the finding applies to, if known.
        line: Starting line (>= 1).
        column: Starting column (>= 1).
        end_line: Ending line, or ``NO_POSITION``.
        end_column: Ending column, or ``NO_POSITION``.
        is_warning: True for a warning, False for an error.
    """

    message: str
    filename: str | None
    line: int
    column: int
    end_line: int = NO_POSITION
    end_column: int = NO_POSITION
    is_warning: bool = False

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        if self.message is None:
            object.__setattr__(self, "message", "")
        if self.line <= 0:
            object.__setattr__(self, "line", 1)
        if self.column <= 0:
            object.__setattr__(self, "column", 1)

    @property
    def has_end(self) -> bool:
        """True when the record carries a usable end position."""
        return self.end_line > 0 and self.end_column > 0

    @property
    def severity(self) -> str:
        return "warning" if self.is_warning else "error"

    def _key(self) -> tuple[str | None, int, int, int, int, str]:
        return (
            self.filename,
            self.line,
            self.column,
            self.end_line,
            self.end_column,
            self.message,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiagnosticRecord):
            return False
        if self is other:
            return True
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.filename or '<unknown>'}:{self.line}:{self.column}: {self.severity}: {self.message}"
