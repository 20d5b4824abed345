"""Package manager selection.

The package manager is inferred from lock files by name only; their
contents are never read.
"""

from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger()


class PackageManager(str, Enum):
    """Package managers the launcher can run scripts with."""

    NPM = "npm"
    PNPM = "pnpm"

    @property
    def command(self) -> str:
        """The executable name looked up on PATH."""
        return self.value


class PackageManagerDetector:
    """Detects the package manager to use based on lock files."""

    LOCK_FILE_MAPPING: dict[str, PackageManager] = {
        "pnpm-lock.yaml": PackageManager.PNPM,
    }

    def detect(
        self,
        working_directory: str | Path = ".",
        default: PackageManager = PackageManager.NPM,
    ) -> PackageManager:
        """Auto-detect the package manager from lock files.

        Only pnpm-lock.yaml is recognized. yarn.lock, bun.lockb and
        package-lock.json all fall through to the default.

        Args:
            working_directory: Directory to search for lock files.
            default: Package manager used when no lock file matches.

        Returns:
            The detected or default package manager.
        """
        directory = Path(working_directory)
        for lock_file, manager in self.LOCK_FILE_MAPPING.items():
            if (directory / lock_file).exists():
                return manager
        return default


def resolve_package_manager(
    working_directory: str | Path = ".",
    preference: str = "auto",
) -> PackageManager:
    """Resolve the package manager, honouring an explicit preference.

    Args:
        working_directory: Directory to search for lock files.
        preference: "npm", "pnpm", or "auto" to detect from lock files.

    Returns:
        The package manager to run scripts with.
    """
    if preference != "auto":
        manager = PackageManager(preference)
        logger.debug("package_manager_configured", manager=manager.value)
        return manager

    manager = PackageManagerDetector().detect(working_directory)
    logger.debug(
        "package_manager_detected",
        manager=manager.value,
        directory=str(Path(working_directory).resolve()),
    )
    return manager
