"""Commands the editor can invoke through workspace/executeCommand."""

from diaglsp.commands.refresh_file import (
    FILE_OPTION,
    PROJECT_OPTION,
    REFRESH_FILE_COMMAND,
    ProjectRefreshFileCommand,
)

__all__ = [
    "FILE_OPTION",
    "PROJECT_OPTION",
    "REFRESH_FILE_COMMAND",
    "ProjectRefreshFileCommand",
]
