"""Launcher error types and error codes.

This module defines the error hierarchy for the launcher, providing
specific error codes for the failures that abort the pipeline.

Classes:
    - LauncherErrorCode: Enum of error codes for categorizing launcher errors
    - LauncherError: Base exception for all fatal launcher errors
"""

from enum import Enum
from pathlib import Path


class LauncherErrorCode(str, Enum):
    """Error codes for launcher operations.

    Expected empty states (no package.json, no scripts, cancelled picker)
    are not errors and have no code.
    """

    # Setup errors
    WORKDIR_INVALID = "WORKDIR_INVALID"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Manifest errors
    MANIFEST_UNREADABLE = "MANIFEST_UNREADABLE"
    MANIFEST_INVALID = "MANIFEST_INVALID"

    # Interactive errors
    PICKER_FAILED = "PICKER_FAILED"

    # Process errors
    SPAWN_FAILED = "SPAWN_FAILED"


class LauncherError(Exception):
    """Base exception for fatal launcher errors.

    Attributes:
        code: The error code categorizing this error.
        message: Human-readable error message.
        path: The file or directory involved (if applicable).
        cause: The underlying exception that caused this error (if any).

    Example:
        raise LauncherError(
            code=LauncherErrorCode.MANIFEST_INVALID,
            message="Failed to parse package.json",
            path=Path("package.json"),
            cause=original_exception,
        ) from original_exception
    """

    def __init__(
        self,
        code: LauncherErrorCode,
        message: str,
        path: str | Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize the launcher error.

        Args:
            code: The error code for this error.
            message: Human-readable error message.
            path: The file or directory involved (optional).
            cause: The underlying exception (optional).
        """
        self.code = code
        self.message = message
        self.path = path
        self.cause = cause

        super().__init__(f"[{code.value}] {message}")

    def describe(self) -> str:
        """Render the message followed by its cause chain.

        Returns:
            A single line such as ``Failed to parse package.json: Expecting ...``.
        """
        parts = [self.message]
        cause = self.cause
        while cause is not None:
            parts.append(str(cause) or type(cause).__name__)
            cause = cause.__cause__
        return ": ".join(parts)
