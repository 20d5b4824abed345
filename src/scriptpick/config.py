"""Launcher configuration models and utilities.

This module provides Pydantic models for validating and loading launcher
settings from an optional YAML file. Without a settings file the defaults
apply: lockfile-based package manager detection, a picker taking half of
the terminal with matches listed top to bottom, and a child exit status
that is reported but not adopted.

Models:
    - PickerSettings: Appearance of the interactive picker
    - LauncherSettings: Root configuration model

Functions:
    - load_settings: Load and validate settings from a YAML file
"""

import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from scriptpick.errors import LauncherError, LauncherErrorCode

# Either a percentage of the terminal height (1%-100%) or a line count
_HEIGHT_PATTERN = re.compile(r"^(100|[1-9][0-9]?)%$|^[1-9][0-9]*$")


class PickerSettings(BaseModel):
    """Settings for the interactive picker.

    Attributes:
        height: Height of the picker, as a percentage or a number of lines.
        reverse: List matches top to bottom instead of bottom-anchored.
        prompt: Prompt shown in front of the query.
    """

    height: str = Field(
        default="50%",
        description="Picker height, e.g. '50%' or '20'",
    )
    reverse: bool = True
    prompt: str = "> "

    @field_validator("height")
    @classmethod
    def validate_height(cls, v: str) -> str:
        """Validate the picker height."""
        v = v.strip()
        if not _HEIGHT_PATTERN.match(v):
            msg = f"Invalid height: {v!r}. Use a percentage like '50%' or a line count"
            raise ValueError(msg)
        return v


class LauncherSettings(BaseModel):
    """Root configuration model for the launcher.

    Attributes:
        package_manager: npm, pnpm, or auto (detect from lock files).
        propagate_exit_code: Exit with the script's own status when it fails.
        picker: Picker appearance settings.
    """

    package_manager: Literal["auto", "npm", "pnpm"] = Field(
        default="auto",
        description="Package manager: npm, pnpm, or auto (detect from lock files)",
    )
    propagate_exit_code: bool = False
    picker: PickerSettings = Field(default_factory=PickerSettings)


def load_settings(path: str | Path) -> LauncherSettings:
    """Load and validate settings from a YAML file.

    Args:
        path: Path to the settings file.

    Returns:
        Validated LauncherSettings instance.

    Raises:
        LauncherError: With code CONFIG_INVALID if the file is missing,
            unreadable, not valid YAML, or does not match the schema.

    Example:
        >>> settings = load_settings("scriptpick.yml")
        >>> settings.picker.height
        '50%'
    """
    path = Path(path)

    if not path.is_file():
        raise LauncherError(
            code=LauncherErrorCode.CONFIG_INVALID,
            message=f"Settings file not found: {path}",
            path=path,
        )

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise LauncherError(
            code=LauncherErrorCode.CONFIG_INVALID,
            message=f"Failed to read settings from {path}",
            path=path,
            cause=e,
        ) from e

    # Handle empty file
    if data is None:
        data = {}

    try:
        return LauncherSettings.model_validate(data)
    except ValidationError as e:
        raise LauncherError(
            code=LauncherErrorCode.CONFIG_INVALID,
            message=f"Invalid settings in {path}",
            path=path,
            cause=e,
        ) from e
