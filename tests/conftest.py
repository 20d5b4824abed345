"""Shared fixtures for the scriptpick test suite."""

import json
import os
import stat
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from scriptpick.log import configure_logging


class IndexPicker:
    """Deterministic picker that selects the Nth row, or cancels.

    Attributes:
        index: Row to select, or None to behave like a cancelled picker.
        calls: The rows passed to each pick() call.
    """

    def __init__(self, index: int | None = 0) -> None:
        self.index = index
        self.calls: list[list[str]] = []

    def pick(self, rows: Sequence[str]) -> int | None:
        self.calls.append(list(rows))
        return self.index


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    configure_logging(verbose=False)


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Write a package.json into tmp_path and return the directory."""

    def _write(data: Any, raw: str | None = None) -> Path:
        content = raw if raw is not None else json.dumps(data)
        (tmp_path / "package.json").write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Install fake npm/pnpm executables at the front of PATH.

    Each fake appends its arguments, one per line, to ``<name>.calls`` in
    the bin directory and exits with the requested status.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def _install(name: str, exit_code: int = 0, stdout: str = "") -> Path:
        record = bin_dir / f"{name}.calls"
        script = bin_dir / name
        script.write_text(
            "#!/bin/sh\n"
            f"printf '%s\\n' \"$@\" >> '{record}'\n"
            f"printf '%s' '{stdout}'\n"
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IEXEC)
        return record

    return _install


@pytest.fixture
def make_picker():
    """Return the IndexPicker class for building deterministic pickers."""
    return IndexPicker
