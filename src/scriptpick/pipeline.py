"""The launcher pipeline.

Binds the working directory, reads package.json, extracts its scripts,
resolves the package manager, lets the user pick a script and runs it.
Each stage completes before the next begins.
"""

from pathlib import Path

import structlog
import typer

from scriptpick.config import LauncherSettings
from scriptpick.manifest import read_manifest
from scriptpick.package_manager import resolve_package_manager
from scriptpick.picker import Picker, select_script
from scriptpick.runner import ScriptRunner
from scriptpick.scripts import extract_scripts
from scriptpick.workdir import change_directory

logger = structlog.get_logger()

NO_MANIFEST_MESSAGE = "Error: There is no package.json in the current directory"
NO_SCRIPTS_MESSAGE = "Error: There are no scripts in package.json"


class Launcher:
    """Runs the pick-and-run pipeline once.

    Example:
        launcher = Launcher(picker=FzfPicker())
        status = launcher.launch("./web")
    """

    def __init__(
        self,
        picker: Picker,
        runner: ScriptRunner | None = None,
        settings: LauncherSettings | None = None,
    ) -> None:
        self.picker = picker
        self.runner = runner or ScriptRunner()
        self.settings = settings or LauncherSettings()

    def launch(self, path: str | Path | None = None) -> int:
        """Run the pipeline.

        Missing package.json, an empty scripts object and a cancelled
        picker are normal outcomes and return 0.

        Args:
            path: Project directory to change into first. None keeps the
                current directory.

        Returns:
            The exit status for the process. 0 unless propagate_exit_code
            is set and the script failed.

        Raises:
            LauncherError: On any fatal error along the pipeline.
        """
        if path is not None:
            change_directory(path)

        manifest = read_manifest()
        if manifest is None:
            typer.echo(NO_MANIFEST_MESSAGE, err=True)
            return 0

        package_manager = resolve_package_manager(".", self.settings.package_manager)

        scripts = extract_scripts(manifest)
        if not scripts:
            typer.echo(NO_SCRIPTS_MESSAGE, err=True)
            return 0

        script = select_script(self.picker, scripts)
        if script is None:
            return 0

        result = self.runner.run(package_manager, script.name)

        if self.settings.propagate_exit_code:
            return result.status
        return 0
