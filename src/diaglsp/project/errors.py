"""Errors raised by project services and project commands."""

from __future__ import annotations


class ProjectError(Exception):
    """Base class for project lookup and refresh failures."""


class ProjectNotFoundError(ProjectError, LookupError):
    """No project is registered under the requested name."""

    def __init__(self, project: str) -> None:
        super().__init__(f"Project '{project}' not found.")
        self.project = project


class FileOutsideProjectError(ProjectError, ValueError):
    """The requested path does not lie inside the project root."""

    def __init__(self, project: str, path: str) -> None:
        super().__init__(f"File '{path}' is not inside project '{project}'.")
        self.project = project
        self.path = path


class MissingOptionError(ProjectError, KeyError):
    """A required command option was not supplied."""

    def __init__(self, option: str) -> None:
        super().__init__(option)
        self.option = option

    def __str__(self) -> str:
        return f"Missing required option '{self.option}'."
