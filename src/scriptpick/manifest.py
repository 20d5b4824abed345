"""Reading of the project manifest (package.json)."""

import json
from pathlib import Path
from typing import Any

import structlog

from scriptpick.errors import LauncherError, LauncherErrorCode

logger = structlog.get_logger()

MANIFEST_NAME = "package.json"


def read_manifest(directory: str | Path = ".") -> Any | None:
    """Load and parse package.json from a directory.

    A missing manifest is an expected state, not an error: the caller
    reports it and exits successfully.

    Args:
        directory: Directory holding the manifest. Defaults to the current one.

    Returns:
        The parsed JSON document, or None if there is no package.json.

    Raises:
        LauncherError: MANIFEST_UNREADABLE if the file cannot be read or is
            not UTF-8, MANIFEST_INVALID if it is not valid JSON.
    """
    path = Path(directory) / MANIFEST_NAME

    if not path.exists():
        logger.debug("manifest_not_found", path=str(path))
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LauncherError(
            code=LauncherErrorCode.MANIFEST_UNREADABLE,
            message=f"Failed to read {MANIFEST_NAME}",
            path=path,
            cause=e,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LauncherError(
            code=LauncherErrorCode.MANIFEST_INVALID,
            message=f"Failed to parse {MANIFEST_NAME}",
            path=path,
            cause=e,
        ) from e

    logger.debug("manifest_loaded", path=str(path))
    return data
