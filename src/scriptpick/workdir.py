"""Working-directory binding for the launcher."""

import os
from pathlib import Path

import structlog

from scriptpick.errors import LauncherError, LauncherErrorCode

logger = structlog.get_logger()


def change_directory(path: str | Path) -> Path:
    """Make ``path`` the process's current directory.

    The change is process-global and must happen before the manifest or any
    lockfile is looked up.

    Args:
        path: Directory to enter.

    Returns:
        The new current directory, resolved.

    Raises:
        LauncherError: With code WORKDIR_INVALID if the path does not exist,
            is not a directory, or cannot be entered.
    """
    target = Path(path)

    if not target.exists():
        raise LauncherError(
            code=LauncherErrorCode.WORKDIR_INVALID,
            message=f"Failed to change directory to {path}",
            path=target,
            cause=FileNotFoundError(f"Directory does not exist: {path}"),
        )

    if not target.is_dir():
        raise LauncherError(
            code=LauncherErrorCode.WORKDIR_INVALID,
            message=f"Failed to change directory to {path}",
            path=target,
            cause=NotADirectoryError(f"Path is not a directory: {path}"),
        )

    try:
        os.chdir(target)
    except OSError as e:
        raise LauncherError(
            code=LauncherErrorCode.WORKDIR_INVALID,
            message=f"Failed to change directory to {path}",
            path=target,
            cause=e,
        ) from e

    cwd = Path.cwd()
    logger.debug("directory_changed", path=str(cwd))
    return cwd
