"""Command to refresh a file in a project."""

from __future__ import annotations

from collections.abc import Mapping

from diaglsp.logging import get_logger
from diaglsp.project.errors import MissingOptionError
from diaglsp.project.types import FileHandle, ProjectService

REFRESH_FILE_COMMAND = "diaglsp.refreshFile"
PROJECT_OPTION = "project"
FILE_OPTION = "file"

_logger = get_logger("commands.refresh_file")


def _require(options: Mapping[str, str], name: str) -> str:
    value = options.get(name)
    if value is None:
        raise MissingOptionError(name)
    return value


class ProjectRefreshFileCommand:
    """Resolve a project file and refresh it. Service errors propagate unchanged."""

    def __init__(self, service: ProjectService) -> None:
        self._service = service

    def refresh(self, options: Mapping[str, str]) -> FileHandle:
        """Refresh the file named by ``options`` and return its handle."""
        project = _require(options, PROJECT_OPTION)
        path = _require(options, FILE_OPTION)

        handle = self._service.resolve(project, path)
        self._service.refresh(handle)

        _logger.debug("Refreshed %s in project %s", handle.path, project)
        return handle

    def execute(self, options: Mapping[str, str]) -> str:
        self.refresh(options)
        return ""
