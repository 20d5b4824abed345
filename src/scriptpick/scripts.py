"""Script extraction from a parsed package.json.

Scripts are presented to the picker as candidate rows of the form
``name = command``, in the order they appear in the manifest.
"""

from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger()

ROW_SEPARATOR = " = "


@dataclass(frozen=True)
class Script:
    """Represents one entry of the manifest's scripts object.

    Attributes:
        name: The script name as defined in package.json.
        command: The shell command the script runs, or "" if it is not a string.
    """

    name: str
    command: str

    @property
    def row(self) -> str:
        """The candidate row shown in the picker."""
        return f"{self.name}{ROW_SEPARATOR}{self.command}"


def extract_scripts(manifest: Any) -> list[Script]:
    """Project the manifest's scripts object into an ordered list.

    Nothing is sorted, deduplicated or filtered. A non-string command
    becomes the empty string rather than dropping the entry.

    Args:
        manifest: The parsed package.json document.

    Returns:
        Scripts in document order; empty if ``scripts`` is missing or not
        an object.
    """
    if not isinstance(manifest, dict):
        return []

    scripts_obj = manifest.get("scripts")
    if not isinstance(scripts_obj, dict):
        return []

    scripts = [
        Script(name=name, command=command if isinstance(command, str) else "")
        for name, command in scripts_obj.items()
    ]
    logger.debug("scripts_extracted", count=len(scripts))
    return scripts


def candidate_rows(scripts: list[Script]) -> list[str]:
    """Return the picker rows for a list of scripts."""
    return [script.row for script in scripts]


def parse_script_name(row: str) -> str:
    """Extract the script name from a candidate row.

    Example:
        >>> parse_script_name("build = tsc -p . --watch=false")
        'build'
    """
    return row.split("=", 1)[0].strip()
