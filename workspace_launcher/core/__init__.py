"""
Core workspace launching modules.

This package contains bookmark folder resolution, command string parsing,
the workspace launcher and the interactive management prompts.
"""

from .bookmarks_reader import ChromeBookmarksReader
from .command_parsing import strip_inline_comments, tokenize_command
from .data_models import Bookmark, LaunchOutcome, LaunchReport
from .launch_modes import LaunchOptions
from .launcher import WorkspaceLauncher
from .process_runner import ProcessRunner

__all__ = [
    'ChromeBookmarksReader',
    'strip_inline_comments',
    'tokenize_command',
    'Bookmark',
    'LaunchOutcome',
    'LaunchReport',
    'LaunchOptions',
    'WorkspaceLauncher',
    'ProcessRunner',
]
