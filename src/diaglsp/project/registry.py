"""Filesystem-backed project service."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path

from diaglsp.logging import get_logger
from diaglsp.project.errors import FileOutsideProjectError, ProjectNotFoundError
from diaglsp.project.types import FileHandle, FileState

__all__ = ["ProjectRegistry"]


class ProjectRegistry:
    """
    Maps project names to root directories.

    Refreshing a file records its current on-disk state. The state cache is
    shared between the LSP event loop and worker threads, so it is guarded
    by a lock.
    """

    def __init__(
        self,
        roots: Mapping[str, Path | str] | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._roots: dict[str, Path] = {}
        self._states: dict[FileHandle, FileState] = {}
        self._lock = threading.Lock()
        self._logger = logger if logger is not None else get_logger("project.registry")

        for name, root in (roots or {}).items():
            self.register(name, root)

    def register(self, name: str, root: Path | str) -> None:
        """Register (or re-point) project ``name`` at ``root``."""
        resolved = Path(root).expanduser().resolve()
        with self._lock:
            self._roots[name] = resolved
        self._logger.debug("Registered project %s at %s", name, resolved)

    def projects(self) -> dict[str, Path]:
        with self._lock:
            return dict(self._roots)

    def resolve(self, project: str, path: str) -> FileHandle:
        """
        Locate ``path`` inside ``project``.

        Args:
            project: Registered project name.
            path: Path relative to the project root, or absolute inside it.

        Returns:
            Handle for the file. The file does not have to exist.

        Raises:
            ProjectNotFoundError: ``project`` is not registered.
            FileOutsideProjectError: ``path`` escapes the project root.
        """
        with self._lock:
            root = self._roots.get(project)
        if root is None:
            raise ProjectNotFoundError(project)

        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = root / candidate
        location = candidate.resolve()

        try:
            relative = location.relative_to(root)
        except ValueError:
            raise FileOutsideProjectError(project, path) from None

        return FileHandle(project=project, path=relative.as_posix(), location=location)

    def refresh(self, handle: FileHandle) -> None:
        """
        Re-read the on-disk state of ``handle``.

        A file that has disappeared is recorded as missing. Any other
        ``OSError`` (e.g. permission denied) propagates.
        """
        try:
            stat = handle.location.stat()
        except FileNotFoundError:
            state = FileState(exists=False)
        else:
            state = FileState(exists=True, size=stat.st_size, mtime_ns=stat.st_mtime_ns)

        with self._lock:
            previous = self._states.get(handle)
            self._states[handle] = state

        if previous is None:
            self._logger.debug("Refreshed %s:%s (first sync)", handle.project, handle.path)
        elif previous != state:
            self._logger.info("Refreshed %s:%s (changed on disk)", handle.project, handle.path)
        else:
            self._logger.debug("Refreshed %s:%s (unchanged)", handle.project, handle.path)

    def state(self, handle: FileHandle) -> FileState | None:
        """Return the state recorded by the last refresh, or None."""
        with self._lock:
            return self._states.get(handle)
