"""scriptpick - fuzzy-pick and run package.json scripts.

Reads the scripts declared in a project's package.json, lets the user pick
one in an interactive fuzzy finder, and runs it with npm or pnpm.
"""

from scriptpick.pipeline import Launcher

__all__ = ["Launcher"]
