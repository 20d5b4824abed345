"""Tests for the launcher pipeline.

Tests cover:
    - Happy paths for npm and pnpm projects
    - Expected empty states (no manifest, no scripts, cancelled picker)
    - Fatal errors (bad directory, malformed manifest, picker failure)
    - Exit code policy
"""

import os
from pathlib import Path

import pytest

from scriptpick.config import LauncherSettings
from scriptpick.errors import LauncherError, LauncherErrorCode
from scriptpick.package_manager import PackageManager
from scriptpick.pipeline import NO_MANIFEST_MESSAGE, NO_SCRIPTS_MESSAGE, Launcher
from scriptpick.runner import RunResult

MANIFEST = {"scripts": {"build": "tsc", "test": "vitest"}}


class RecordingRunner:
    """Runner stub that records what it was asked to run."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[tuple[PackageManager, str]] = []

    def run(self, package_manager: PackageManager, script_name: str) -> RunResult:
        self.calls.append((package_manager, script_name))
        return RunResult(
            argv=(package_manager.command, "run", script_name),
            returncode=self.returncode,
        )


@pytest.fixture(autouse=True)
def _restore_cwd(monkeypatch: pytest.MonkeyPatch) -> None:
    # launch() changes the process directory; monkeypatch puts it back
    monkeypatch.chdir(os.getcwd())


class TestLauncherHappyPath:
    """End-to-end selection with a stub picker and runner."""

    def test_npm_project(self, write_manifest, make_picker) -> None:
        """Verify the first row runs with npm when there is no lock file."""
        directory = write_manifest(MANIFEST)
        picker = make_picker(0)
        runner = RecordingRunner()

        status = Launcher(picker=picker, runner=runner).launch(directory)

        assert status == 0
        assert picker.calls == [["build = tsc", "test = vitest"]]
        assert runner.calls == [(PackageManager.NPM, "build")]

    def test_pnpm_project(self, write_manifest, make_picker) -> None:
        """Verify pnpm-lock.yaml switches the package manager to pnpm."""
        directory = write_manifest(MANIFEST)
        (directory / "pnpm-lock.yaml").touch()
        runner = RecordingRunner()

        Launcher(picker=make_picker(1), runner=runner).launch(directory)

        assert runner.calls == [(PackageManager.PNPM, "test")]

    def test_changes_into_path(self, write_manifest, make_picker) -> None:
        """Verify the process directory is the project directory afterwards."""
        directory = write_manifest(MANIFEST)

        Launcher(picker=make_picker(0), runner=RecordingRunner()).launch(directory)

        assert Path.cwd() == directory.resolve()

    def test_uses_current_directory_without_path(
        self, write_manifest, make_picker, monkeypatch
    ) -> None:
        """Verify the current directory is used when no path is given."""
        monkeypatch.chdir(write_manifest(MANIFEST))
        runner = RecordingRunner()

        Launcher(picker=make_picker(0), runner=runner).launch()

        assert runner.calls == [(PackageManager.NPM, "build")]

    def test_package_manager_setting_overrides_detection(
        self, write_manifest, make_picker
    ) -> None:
        """Verify an explicit package manager ignores the lock file."""
        directory = write_manifest(MANIFEST)
        (directory / "pnpm-lock.yaml").touch()
        runner = RecordingRunner()
        settings = LauncherSettings(package_manager="npm")

        Launcher(picker=make_picker(0), runner=runner, settings=settings).launch(directory)

        assert runner.calls == [(PackageManager.NPM, "build")]


class TestLauncherEmptyStates:
    """Expected empty states exit 0 without running anything."""

    def test_no_manifest(self, tmp_path, make_picker, capsys) -> None:
        """Verify a missing package.json prints a diagnostic and exits 0."""
        picker = make_picker(0)
        runner = RecordingRunner()

        status = Launcher(picker=picker, runner=runner).launch(tmp_path)

        assert status == 0
        assert capsys.readouterr().err == NO_MANIFEST_MESSAGE + "\n"
        assert NO_MANIFEST_MESSAGE == "Error: There is no package.json in the current directory"
        assert picker.calls == []
        assert runner.calls == []

    @pytest.mark.parametrize(
        "manifest",
        [{"name": "x", "scripts": {}}, {"name": "x"}, {"scripts": ["build"]}, []],
    )
    def test_no_scripts(self, write_manifest, make_picker, capsys, manifest) -> None:
        """Verify an empty or unusable scripts object prints a diagnostic and exits 0."""
        directory = write_manifest(manifest)
        picker = make_picker(0)
        runner = RecordingRunner()

        status = Launcher(picker=picker, runner=runner).launch(directory)

        assert status == 0
        assert capsys.readouterr().err == NO_SCRIPTS_MESSAGE + "\n"
        assert picker.calls == []
        assert runner.calls == []

    def test_cancelled_picker(self, write_manifest, make_picker, capsys) -> None:
        """Verify cancelling the picker exits 0 silently without spawning."""
        directory = write_manifest(MANIFEST)
        runner = RecordingRunner()

        status = Launcher(picker=make_picker(None), runner=runner).launch(directory)

        assert status == 0
        assert runner.calls == []
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestLauncherErrors:
    """Fatal errors propagate as LauncherError."""

    def test_missing_directory(self, tmp_path, make_picker) -> None:
        """Verify a non-existent path raises WORKDIR_INVALID naming the path."""
        missing = tmp_path / "nope"

        with pytest.raises(LauncherError) as exc_info:
            Launcher(picker=make_picker(0), runner=RecordingRunner()).launch(missing)

        assert exc_info.value.code == LauncherErrorCode.WORKDIR_INVALID
        assert str(missing) in exc_info.value.describe()

    def test_path_is_a_file(self, tmp_path, make_picker) -> None:
        """Verify a file path raises WORKDIR_INVALID."""
        file_path = tmp_path / "package.json"
        file_path.write_text("{}")

        with pytest.raises(LauncherError) as exc_info:
            Launcher(picker=make_picker(0), runner=RecordingRunner()).launch(file_path)

        assert exc_info.value.code == LauncherErrorCode.WORKDIR_INVALID
        assert "not a directory" in exc_info.value.describe()

    def test_malformed_manifest(self, write_manifest, make_picker) -> None:
        """Verify invalid JSON is fatal and names package.json."""
        directory = write_manifest(None, raw="{")
        runner = RecordingRunner()

        with pytest.raises(LauncherError) as exc_info:
            Launcher(picker=make_picker(0), runner=runner).launch(directory)

        assert exc_info.value.code == LauncherErrorCode.MANIFEST_INVALID
        assert "package.json" in exc_info.value.describe()
        assert runner.calls == []

    def test_picker_failure(self, write_manifest) -> None:
        """Verify a picker error aborts before anything runs."""

        class BrokenPicker:
            def pick(self, rows):
                raise LauncherError(LauncherErrorCode.PICKER_FAILED, "no terminal")

        runner = RecordingRunner()
        directory = write_manifest(MANIFEST)

        with pytest.raises(LauncherError):
            Launcher(picker=BrokenPicker(), runner=runner).launch(directory)

        assert runner.calls == []


class TestExitCodePolicy:
    """The script's own exit status is reported, and adopted only on request."""

    def test_failure_not_propagated_by_default(self, write_manifest, make_picker) -> None:
        """Verify a script exiting 7 still yields status 0."""
        directory = write_manifest(MANIFEST)

        status = Launcher(picker=make_picker(0), runner=RecordingRunner(7)).launch(directory)

        assert status == 0

    def test_failure_propagated_when_enabled(self, write_manifest, make_picker) -> None:
        """Verify propagate_exit_code adopts the script's status."""
        directory = write_manifest(MANIFEST)
        settings = LauncherSettings(propagate_exit_code=True)

        status = Launcher(
            picker=make_picker(0), runner=RecordingRunner(7), settings=settings
        ).launch(directory)

        assert status == 7

    def test_signal_death_propagated_as_128_plus_signal(
        self, write_manifest, make_picker
    ) -> None:
        """Verify a signal death maps to a shell-style status."""
        directory = write_manifest(MANIFEST)
        settings = LauncherSettings(propagate_exit_code=True)

        status = Launcher(
            picker=make_picker(0), runner=RecordingRunner(-15), settings=settings
        ).launch(directory)

        assert status == 143
