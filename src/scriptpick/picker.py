"""Interactive script picker.

The picker is a replaceable component: anything with a ``pick`` method that
takes the candidate rows and returns the position of the chosen row (or
None) will do. The default implementation runs the fzf binary shipped with
iterfzf, which owns the terminal for the duration of the session.

Classes:
    - Picker: Protocol every picker implements
    - FzfPicker: fzf-backed fuzzy picker

Functions:
    - select_script: Run a picker over scripts and map the choice back
"""

import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, TextIO

import structlog
from iterfzf import BUNDLED_EXECUTABLE, EXECUTABLE_NAME

from scriptpick.config import PickerSettings
from scriptpick.errors import LauncherError, LauncherErrorCode
from scriptpick.scripts import Script, candidate_rows

logger = structlog.get_logger()

# fzf exit statuses
FZF_NO_MATCH = 1
FZF_INTERRUPTED = 130

# Separates the hidden row position from the displayed row
_FIELD_DELIMITER = "\t"


class Picker(Protocol):
    """Presents rows to the user and returns the position of the chosen one."""

    def pick(self, rows: Sequence[str]) -> int | None:
        """Return the index of the chosen row, or None if the user cancelled."""
        ...


def find_fzf() -> str | None:
    """Locate fzf, preferring the binary bundled with iterfzf."""
    if BUNDLED_EXECUTABLE is not None and Path(BUNDLED_EXECUTABLE).is_file():
        return str(BUNDLED_EXECUTABLE)
    return shutil.which(EXECUTABLE_NAME)


class FzfPicker:
    """Fuzzy picker backed by fzf.

    Rows are shown in the order given (fzf's re-sorting is disabled), in a
    view occupying the configured share of the terminal. Each row is fed to
    fzf prefixed with its position, which is hidden from display and used to
    map the choice back, so identical rows stay distinct. Cancelling with
    ESC or Ctrl-C is reported as no selection; any other fzf failure is an
    error.
    """

    def __init__(
        self,
        settings: PickerSettings | None = None,
        stdin: TextIO | None = None,
        executable: str | Path | None = None,
    ) -> None:
        """Initialize the picker.

        Args:
            settings: Picker appearance settings.
            stdin: Stream checked for an interactive terminal. Defaults to
                sys.stdin at pick time.
            executable: fzf binary to run. Defaults to the bundled one.
        """
        self.settings = settings or PickerSettings()
        self._stdin = stdin
        self._executable = executable

    def fzf_options(self) -> list[str]:
        """Command-line options passed to fzf."""
        options = [
            "--no-sort",
            f"--prompt={self.settings.prompt}",
            f"--height={self.settings.height}",
            f"--delimiter={_FIELD_DELIMITER}",
            "--with-nth=2..",
        ]
        if self.settings.reverse:
            options.append("--layout=reverse")
        return options

    def pick(self, rows: Sequence[str]) -> int | None:
        """Run fzf over the rows.

        Args:
            rows: Candidate rows, in display order.

        Returns:
            The index of the chosen row, or None if nothing was chosen.

        Raises:
            LauncherError: With code PICKER_FAILED if there is no terminal,
                fzf cannot be started, or fzf exits with an error.
        """
        if not rows:
            return None

        stdin = self._stdin if self._stdin is not None else sys.stdin
        if stdin is None or not stdin.isatty():
            raise LauncherError(
                code=LauncherErrorCode.PICKER_FAILED,
                message="Failed to start the fuzzy finder",
                cause=OSError("standard input is not a terminal"),
            )

        executable = self._executable or find_fzf()
        if executable is None:
            raise LauncherError(
                code=LauncherErrorCode.PICKER_FAILED,
                message="Failed to start the fuzzy finder",
                cause=FileNotFoundError(f"'{EXECUTABLE_NAME}' was not found"),
            )

        argv = [str(executable), *self.fzf_options()]
        feed = "".join(
            f"{index}{_FIELD_DELIMITER}{_single_line(row)}\n"
            for index, row in enumerate(rows)
        )

        try:
            proc = subprocess.run(
                argv,
                input=feed,
                stdout=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except KeyboardInterrupt:
            logger.debug("picker_cancelled")
            return None
        except OSError as e:
            raise LauncherError(
                code=LauncherErrorCode.PICKER_FAILED,
                message="Failed to start the fuzzy finder",
                cause=e,
            ) from e

        if proc.returncode in (FZF_NO_MATCH, FZF_INTERRUPTED):
            logger.debug("picker_cancelled", returncode=proc.returncode)
            return None

        if proc.returncode != 0:
            raise LauncherError(
                code=LauncherErrorCode.PICKER_FAILED,
                message="Failed to start the fuzzy finder",
                cause=subprocess.CalledProcessError(proc.returncode, argv),
            )

        chosen = proc.stdout.split("\n", 1)[0]
        position = chosen.split(_FIELD_DELIMITER, 1)[0]
        if not position.isdigit() or int(position) >= len(rows):
            logger.warning("selection_not_recognized", row=chosen)
            return None

        return int(position)


def _single_line(row: str) -> str:
    # fzf reads one row per line
    return row.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def select_script(picker: Picker, scripts: list[Script]) -> Script | None:
    """Let the user pick one of the scripts.

    Args:
        picker: The picker to present the candidate rows with.
        scripts: Scripts in display order.

    Returns:
        The chosen script, or None if the user made no selection.
    """
    if not scripts:
        return None

    index = picker.pick(candidate_rows(scripts))
    if index is None:
        return None

    if not 0 <= index < len(scripts):
        logger.warning("selection_not_recognized", index=index)
        return None

    script = scripts[index]
    logger.debug("script_selected", name=script.name)
    return script
