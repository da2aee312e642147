"""Per-file store of the most recent diagnostics."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import NamedTuple

from diaglsp.diagnostics.record import DiagnosticRecord


class DiagnosticDelta(NamedTuple):
    """Difference between two analysis runs for one file."""

    added: list[DiagnosticRecord]
    removed: list[DiagnosticRecord]

    @property
    def unchanged(self) -> bool:
        return not self.added and not self.removed


class DiagnosticCollection:
    """
    Latest diagnostics per filename.

    Records are compared with record equality, which ignores severity: a
    finding whose severity flips between runs is neither added nor removed,
    but the stored record carries the new severity.
    """

    def __init__(self) -> None:
        self._records: dict[str, list[DiagnosticRecord]] = {}
        self._lock = threading.Lock()

    def replace(
        self, filename: str, records: Iterable[DiagnosticRecord]
    ) -> DiagnosticDelta:
        """
        Store a new run's records for ``filename``.

        Args:
            filename: File the records belong to.
            records: Records of the new run; duplicates are dropped.

        Returns:
            The records added and removed relative to the previous run.
        """
        current = list(dict.fromkeys(records))
        with self._lock:
            previous = self._records.get(filename, [])
            self._records[filename] = current

        previous_set = set(previous)
        current_set = set(current)
        return DiagnosticDelta(
            added=[record for record in current if record not in previous_set],
            removed=[record for record in previous if record not in current_set],
        )

    def get(self, filename: str) -> list[DiagnosticRecord]:
        with self._lock:
            return list(self._records.get(filename, []))

    def clear(self, filename: str) -> list[DiagnosticRecord]:
        """Forget ``filename`` and return the records it had."""
        with self._lock:
            return self._records.pop(filename, [])

    def filenames(self) -> list[str]:
        with self._lock:
            return sorted(self._records)
