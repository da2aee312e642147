from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Protocol


@dataclasses.dataclass(frozen=True)
class FileHandle:
    """A file resolved inside a project."""

    project: str
    path: str  # project-relative, POSIX separators
    location: Path  # absolute


@dataclasses.dataclass(frozen=True)
class FileState:
    """On-disk state captured by the last refresh."""

    exists: bool
    size: int = 0
    mtime_ns: int = 0


class ProjectService(Protocol):
    """Resolves project files and synchronizes them with disk."""

    def resolve(self, project: str, path: str) -> FileHandle:
        """Locate ``path`` inside ``project``."""
        ...

    def refresh(self, handle: FileHandle) -> None:
        """Bring the service's view of ``handle`` up to date. Raises on failure."""
        ...
