"""scriptpick CLI entry point.

This module provides the Typer application and entry point for the
`scriptpick` command.

Usage:
    scriptpick [options]             - Pick and run a script in the current directory
    scriptpick --path DIR [options]  - Pick and run a script in DIR
    scriptpick --version             - Show version information
"""

from pathlib import Path
from typing import Annotated

import structlog
import typer

from scriptpick.config import LauncherSettings, load_settings
from scriptpick.errors import LauncherError
from scriptpick.log import configure_logging
from scriptpick.picker import FzfPicker
from scriptpick.pipeline import Launcher
from scriptpick.runner import ScriptRunner

logger = structlog.get_logger()

app = typer.Typer(
    name="scriptpick",
    help="Fuzzy-pick a package.json script and run it with npm or pnpm",
    add_completion=False,
)


def get_version() -> str:
    """Get the installed scriptpick version.

    Returns:
        Version string or 'unknown' if not found.
    """
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("scriptpick")
    except PackageNotFoundError:
        return "unknown"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"scriptpick {get_version()}")
        raise typer.Exit()


@app.command()
def launch_command(
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Path to the project directory (defaults to current directory)",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a YAML settings file",
        ),
    ] = None,
    propagate_exit_code: Annotated[
        bool,
        typer.Option(
            "--propagate-exit-code",
            help="Exit with the script's own status when it fails",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show the command without executing it",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug information to stderr",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version information and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Pick a script from package.json and run it.

    The package manager is pnpm when pnpm-lock.yaml is present and npm
    otherwise. The script's own exit status is reported but not adopted
    unless --propagate-exit-code is given.

    Examples:
        scriptpick                  # Pick from ./package.json
        scriptpick -p ../web        # Pick from ../web/package.json
        scriptpick --dry-run        # Only show what would run
    """
    configure_logging(verbose)

    try:
        settings = load_settings(config) if config is not None else LauncherSettings()
    except LauncherError as e:
        typer.echo(f"Error: {e.describe()}", err=True)
        raise typer.Exit(2) from e

    if propagate_exit_code:
        settings = settings.model_copy(
            update={"propagate_exit_code": True}
        )

    launcher = Launcher(
        picker=FzfPicker(settings.picker),
        runner=ScriptRunner(dry_run=dry_run),
        settings=settings,
    )

    try:
        status = launcher.launch(path)
    except LauncherError as e:
        logger.debug("launch_failed", code=e.code.value, path=str(e.path))
        typer.echo(f"Error: {e.describe()}", err=True)
        raise typer.Exit(1) from e

    if status != 0:
        raise typer.Exit(status)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
