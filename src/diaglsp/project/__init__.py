"""Project model: locating files in registered projects and refreshing them."""

from diaglsp.project.errors import (
    FileOutsideProjectError,
    MissingOptionError,
    ProjectError,
    ProjectNotFoundError,
)
from diaglsp.project.registry import ProjectRegistry
from diaglsp.project.types import FileHandle, FileState, ProjectService

__all__ = [
    "FileHandle",
    "FileOutsideProjectError",
    "FileState",
    "MissingOptionError",
    "ProjectError",
    "ProjectNotFoundError",
    "ProjectRegistry",
    "ProjectService",
]
