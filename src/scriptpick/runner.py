"""Script execution through the package manager.

The selected script is run as ``<pm> run <name>`` in a child process that
inherits the launcher's standard streams and environment, so interactive
scripts behave as if they had been started from the shell.
"""

import contextlib
import shutil
import signal
import subprocess
import threading
from collections.abc import Iterator
from dataclasses import dataclass

import structlog
import typer

from scriptpick.errors import LauncherError, LauncherErrorCode
from scriptpick.package_manager import PackageManager

logger = structlog.get_logger()


@dataclass(frozen=True)
class RunResult:
    """Outcome of a script run.

    Attributes:
        argv: The argument vector the child was started with.
        returncode: The child's return code as reported by subprocess
            (negative for a signal), or None for a dry run.
    """

    argv: tuple[str, ...]
    returncode: int | None = None

    @property
    def exit_code(self) -> int | None:
        """The child's exit code, or None if it did not exit normally."""
        if self.returncode is None or self.returncode < 0:
            return None
        return self.returncode

    @property
    def succeeded(self) -> bool:
        """True for a zero exit status or a dry run."""
        return self.returncode is None or self.returncode == 0

    @property
    def status(self) -> int:
        """Shell-style exit status: the exit code, or 128 + signal number."""
        if self.returncode is None:
            return 0
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode


@contextlib.contextmanager
def _ignore_sigint() -> Iterator[None]:
    """Ignore SIGINT in this process while the child owns the terminal.

    The child receives Ctrl-C through the terminal's process group; the
    launcher keeps waiting so it can report how the child ended.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class ScriptRunner:
    """Runs a package.json script with npm or pnpm."""

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the runner.

        Args:
            dry_run: Print the command instead of executing it.
        """
        self.dry_run = dry_run

    @staticmethod
    def build_command(package_manager: PackageManager, script_name: str) -> list[str]:
        """Build the argument vector for running a script.

        The script name is passed as a single argument, verbatim, and no
        shell is involved.
        """
        return [package_manager.command, "run", script_name]

    def run(self, package_manager: PackageManager, script_name: str) -> RunResult:
        """Run the script and wait for it to finish.

        A non-zero exit of the script is reported on stderr but is not an
        error of the runner.

        Args:
            package_manager: The package manager to run the script with.
            script_name: Name of the script in package.json.

        Returns:
            The outcome of the run.

        Raises:
            LauncherError: With code SPAWN_FAILED if the package manager
                cannot be started.
        """
        cmd = package_manager.command
        argv = self.build_command(package_manager, script_name)

        if self.dry_run:
            typer.echo(f"Would execute: {cmd} run {script_name}")
            return RunResult(argv=tuple(argv))

        typer.echo(f"Running: {cmd} run {script_name}")

        executable = shutil.which(cmd)
        if executable is None:
            raise LauncherError(
                code=LauncherErrorCode.SPAWN_FAILED,
                message=f"Failed to execute {cmd} run {script_name}",
                cause=FileNotFoundError(f"'{cmd}' was not found on PATH"),
            )

        try:
            proc = subprocess.Popen(argv, executable=executable)
        except OSError as e:
            raise LauncherError(
                code=LauncherErrorCode.SPAWN_FAILED,
                message=f"Failed to execute {cmd} run {script_name}",
                cause=e,
            ) from e

        logger.debug("script_started", argv=argv, pid=proc.pid)
        with _ignore_sigint():
            returncode = proc.wait()

        result = RunResult(argv=tuple(argv), returncode=returncode)
        logger.debug("script_finished", argv=argv, returncode=returncode)

        if not result.succeeded:
            typer.echo(f"Command failed with exit code: {result.exit_code}", err=True)

        return result
