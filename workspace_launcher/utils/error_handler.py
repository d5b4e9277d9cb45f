"""
Error hierarchy for the Workspace Launcher.

All custom exceptions raised by the launcher are defined here so callers can
catch a whole family (configuration, bookmarks, launch) with a single except
clause. Import these exceptions from workspace_launcher.utils.error_handler.
"""

from typing import List, Optional


class WorkspaceLauncherError(Exception):
    """Base exception for all workspace launcher errors."""

    pass


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(WorkspaceLauncherError):
    """User input failed validation."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(WorkspaceLauncherError):
    """Configuration-related errors. Always fatal before a launch."""

    pass


class ConfigMissingError(ConfigurationError):
    """The configuration file does not exist and could not be created."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class ConfigParseError(ConfigurationError):
    """The configuration file is not valid TOML."""

    pass


class ConfigWriteError(ConfigurationError):
    """The configuration file could not be written."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class ConfigValidationError(ConfigurationError):
    """The configuration parsed but is structurally invalid."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Configuration errors:\n" + "\n".join(self.errors))


# ============================================================================
# Bookmark Errors
# ============================================================================


class BookmarksError(WorkspaceLauncherError):
    """Base class for bookmark file and folder resolution errors."""

    hint: Optional[str] = None


class BookmarksFileMissingError(BookmarksError):
    """The configured bookmarks file does not exist."""

    hint = "Check your bookmarks_file path in config.toml"


class BookmarksParseError(BookmarksError):
    """The bookmarks file is not a valid bookmarks JSON document."""

    hint = "Ensure the bookmarks file is valid JSON"


class RootNotFoundError(BookmarksError):
    """The first segment of a folder path is not a known root alias."""

    hint = "Available roots: Bookmarks bar, Other bookmarks, Mobile bookmarks"


class FolderNotFoundError(BookmarksError):
    """A folder segment does not exist under the path traversed so far."""

    hint = "Check the folder name spelling and path"

    def __init__(self, segment: str, traversed: str):
        self.segment = segment
        self.traversed = traversed
        super().__init__(f"Folder not found: {segment} in {traversed}")


class NotAFolderError(BookmarksError):
    """A folder segment names a bookmark, not a folder."""

    hint = "Folder paths may only contain folders"


# ============================================================================
# Launch Errors
# ============================================================================


class LaunchError(WorkspaceLauncherError):
    """Base class for errors raised while running workspace items."""

    pass


class CommandSpawnError(LaunchError):
    """A child process could not be started."""

    def __init__(self, argv: List[str], reason: str):
        self.argv = list(argv)
        self.reason = reason
        super().__init__(f"Failed to start {argv[0] if argv else '?'}: {reason}")


class CommandExitError(LaunchError):
    """A child process exited with a non-zero status."""

    def __init__(self, command: str, returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Command exited with status {returncode}: {command}")

    @property
    def command_not_found(self) -> bool:
        # bash reports an unknown command with status 127
        return self.returncode == 127


class BookmarksOpenError(LaunchError):
    """The browser command failed while opening a batch of bookmarks."""

    pass
