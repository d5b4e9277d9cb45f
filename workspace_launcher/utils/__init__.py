"""
Utility modules for the workspace launcher.

This package contains the error hierarchy, console output, logging setup
and input validation helpers.
"""

from .console_output import ConsoleReporter, truncate
from .error_handler import WorkspaceLauncherError
from .validation import parse_selection, sanitize_input

__all__ = [
    "ConsoleReporter",
    "truncate",
    "WorkspaceLauncherError",
    "parse_selection",
    "sanitize_input",
]
