"""scriptpick CLI module.

This module provides the command-line interface for scriptpick:
    - `scriptpick` picks and runs a script in the current directory
    - `scriptpick -p DIR` does the same for another project directory
"""
