"""
Pydantic-based configuration models for the Workspace Launcher.

The TOML configuration file holds a `settings` table and a `workspaces`
array of tables. This module validates both, formats validation failures
into readable messages and reads/writes the file with the toml library.
"""

import logging
import os
import shutil
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from workspace_launcher.utils.error_handler import (
    ConfigMissingError,
    ConfigParseError,
    ConfigValidationError,
    ConfigWriteError,
)

DEFAULT_OPEN_COMMAND = "xdg-open"
DEFAULT_SHELL = "bash"
EXAMPLE_CONFIG_PATH = Path(__file__).parent / "config.example.toml"

logger = logging.getLogger(__name__)


def expand_env_vars(value: Optional[str]) -> Optional[str]:
    """Expand $VAR and ${VAR}; unknown variables are left untouched."""
    if not value:
        return value
    return os.path.expandvars(value)


class LauncherSettings(BaseModel):
    """The [settings] table."""

    model_config = ConfigDict(extra="allow")

    bookmarks_file: Optional[str] = Field(
        default=None,
        description="Path to the browser's Bookmarks JSON file",
    )
    bookmarks_open_in: str = Field(
        default=DEFAULT_OPEN_COMMAND,
        description="Command used to open bookmark URLs",
    )
    shell: str = Field(
        default=DEFAULT_SHELL,
        description="Shell used to run workspace commands",
    )

    @field_validator("bookmarks_file", mode="before")
    @classmethod
    def validate_bookmarks_file(cls, v):
        """Treat an empty path as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("bookmarks_open_in", mode="before")
    @classmethod
    def validate_open_command(cls, v):
        """Fall back to xdg-open for an empty command."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_OPEN_COMMAND
        return v

    @field_validator("shell", mode="before")
    @classmethod
    def validate_shell(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_SHELL
        return v


class Workspace(BaseModel):
    """A named bundle of shell commands and/or a bookmarks folder."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., strict=True, gt=0, description="Unique positive ID")
    name: str = Field(..., description="Display name, unique ignoring case")
    commands: List[str] = Field(default_factory=list)
    bookmarks_folder: Optional[str] = Field(
        default=None,
        description="Folder path such as 'Bookmarks bar/Work'",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Workspace name cannot be empty")
        return v.strip()

    @field_validator("bookmarks_folder", mode="before")
    @classmethod
    def validate_bookmarks_folder(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_content(self) -> bool:
        return bool(self.commands) or bool(self.bookmarks_folder)


class LauncherConfig(BaseModel):
    """Complete configuration file contents."""

    model_config = ConfigDict(extra="allow")

    settings: LauncherSettings = Field(default_factory=LauncherSettings)
    workspaces: List[Workspace] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_workspaces(self):
        """Reject duplicate IDs and names that differ only by case."""
        problems = []

        id_counts = Counter(w.id for w in self.workspaces)
        duplicate_ids = sorted(i for i, n in id_counts.items() if n > 1)
        if duplicate_ids:
            problems.append(
                "Duplicate workspace IDs found: "
                + ", ".join(str(i) for i in duplicate_ids)
            )

        names_by_key: Dict[str, List[str]] = {}
        for w in self.workspaces:
            names_by_key.setdefault(w.name.lower(), []).append(w.name)
        duplicate_names = [names[0] for names in names_by_key.values() if len(names) > 1]
        if duplicate_names:
            problems.append(
                "Duplicate workspace names found: " + ", ".join(duplicate_names)
            )

        if problems:
            raise ValueError("; ".join(problems))

        return self

    def get_workspace(self, workspace_id: int) -> Optional[Workspace]:
        for workspace in self.workspaces:
            if workspace.id == workspace_id:
                return workspace
        return None

    def collect_warnings(self) -> List[str]:
        """Non-fatal problems worth showing before a launch."""
        return [
            f'Workspace "{w.name}" has no commands or bookmarks_folder'
            for w in self.workspaces
            if not w.has_content
        ]

    def expanded(self) -> "LauncherConfig":
        """
        Return a copy with environment variables expanded.

        Settings strings, workspace commands and bookmarks folders are
        expanded; bookmarks_file additionally gets `~` expansion.
        """
        data = self.model_dump()

        settings = data["settings"]
        for key, value in settings.items():
            if isinstance(value, str):
                settings[key] = expand_env_vars(value)
        if settings.get("bookmarks_file"):
            settings["bookmarks_file"] = os.path.expanduser(settings["bookmarks_file"])

        for workspace in data["workspaces"]:
            workspace["commands"] = [expand_env_vars(c) for c in workspace["commands"]]
            workspace["bookmarks_folder"] = expand_env_vars(workspace["bookmarks_folder"])

        return LauncherConfig.model_validate(data)


class ConfigurationManager:
    """Loads, validates and saves the TOML configuration file."""

    def __init__(
        self,
        config_path: Path,
        create_missing: bool = False,
        example_path: Optional[Path] = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_path: Path of the TOML configuration file
            create_missing: Copy the example config into place if the file
                does not exist
            example_path: Example config override (defaults to the bundled one)
        """
        self.config_path = Path(config_path)
        self.example_path = Path(example_path) if example_path else EXAMPLE_CONFIG_PATH
        self.created_from_example = False
        self._config: Optional[LauncherConfig] = None
        self._load_configuration(create_missing)

    def _load_configuration(self, create_missing: bool) -> None:
        if not self.config_path.exists():
            if not create_missing:
                raise ConfigMissingError(
                    f"Config file not found: {self.config_path}", self.config_path
                )
            self._create_from_example()

        config_data = self._load_config_file(self.config_path)

        try:
            self._config = LauncherConfig(**config_data)
        except ValidationError as e:
            errors = ConfigurationErrorFormatter.format_validation_error(e, config_data)
            logger.error(f"Invalid configuration in {self.config_path}: {errors}")
            raise ConfigValidationError(errors) from e

        logger.info(
            f"Loaded {len(self._config.workspaces)} workspace(s) from {self.config_path}"
        )

    def _create_from_example(self) -> None:
        """Copy the example configuration to the config path."""
        if not self.example_path.exists():
            raise ConfigMissingError(
                f"Example config not found: {self.example_path}", self.config_path
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.example_path, self.config_path)
        self.created_from_example = True
        logger.info(f"Created config file from example: {self.config_path}")

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            return toml.load(config_path)
        except toml.TomlDecodeError as e:
            raise ConfigParseError(f"Failed to parse {config_path}: {e}") from e
        except OSError as e:
            raise ConfigParseError(f"Failed to read {config_path}: {e}") from e

    @property
    def config(self) -> LauncherConfig:
        """Get the current configuration."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    def save(self, config: Optional[LauncherConfig] = None) -> None:
        """
        Write the configuration back to disk.

        Only values present in the file or set since loading are written,
        so defaults are not materialised into the user's file. A new
        config becomes the current one only once it has been written.

        Raises:
            ConfigWriteError: If the file cannot be written
        """
        target = config if config is not None else self.config

        data = target.model_dump(exclude_unset=True, exclude_none=True)
        # Workspaces are always written, even when the list was emptied
        data["workspaces"] = [
            w.model_dump(exclude_unset=True, exclude_none=True)
            for w in target.workspaces
        ]

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                toml.dump(data, f)
        except OSError as e:
            raise ConfigWriteError(
                f"Failed to write {self.config_path}: {e}", self.config_path
            ) from e

        self._config = target
        logger.info(f"Saved configuration to {self.config_path}")

    def read_text(self) -> str:
        with open(self.config_path, "r", encoding="utf-8") as f:
            return f.read()


class ConfigurationErrorFormatter:
    """Formats Pydantic validation errors into user-friendly messages."""

    @staticmethod
    def format_validation_error(
        error: ValidationError, config_data: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        """
        Convert a pydantic ValidationError into one message per problem.

        Args:
            error: Pydantic ValidationError instance
            config_data: Raw configuration, used to name the offending workspace

        Returns:
            List of formatted error messages
        """
        raw_workspaces = (config_data or {}).get("workspaces")
        if not isinstance(raw_workspaces, list):
            raw_workspaces = []

        messages = []
        for error_detail in error.errors():
            loc = tuple(error_detail.get("loc", ()))

            if len(loc) >= 3 and loc[0] == "workspaces" and isinstance(loc[1], int):
                raw = raw_workspaces[loc[1]] if loc[1] < len(raw_workspaces) else {}
                message = ConfigurationErrorFormatter._format_workspace_error(
                    raw if isinstance(raw, dict) else {}, loc[2], error_detail
                )
            else:
                message = ConfigurationErrorFormatter._format_by_error_type(
                    ConfigurationErrorFormatter._format_error_location(loc),
                    error_detail,
                )

            if message not in messages:
                messages.append(message)

        return messages

    @staticmethod
    def _format_workspace_error(raw: Dict[str, Any], field: str, error_detail: dict) -> str:
        name = raw.get("name") or "unnamed"
        if field == "id":
            return f'Workspace "{name}" has invalid or missing ID'
        if field == "name":
            return f"Workspace #{raw.get('id', '?')} has empty name"
        if field == "commands":
            return f'Workspace "{name}" commands must be an array of strings'
        return f'Workspace "{name}": {field}: {ConfigurationErrorFormatter._message(error_detail)}'

    @staticmethod
    def _format_error_location(location: tuple) -> str:
        """Format the error location path."""
        if not location:
            return "Configuration"

        path_parts = []
        for part in location:
            if isinstance(part, str):
                path_parts.append(part)
            else:
                path_parts.append(f"[{part}]")

        return " -> ".join(path_parts)

    @staticmethod
    def _message(error_detail: dict) -> str:
        # Value errors raised by our validators carry the original exception
        original = error_detail.get("ctx", {}).get("error")
        if original is not None:
            return str(original)
        return error_detail.get("msg", "Invalid value")

    @staticmethod
    def _format_by_error_type(location: str, error_detail: dict) -> str:
        """Format error message based on Pydantic error type."""
        error_type = error_detail.get("type")

        if error_type == "missing":
            return f"{location}: Required field is missing"

        if error_type == "value_error" and location == "Configuration":
            return ConfigurationErrorFormatter._message(error_detail)

        if error_type == "list_type":
            return f"{location} must be an array"

        return f"{location}: {ConfigurationErrorFormatter._message(error_detail)}"


def format_config_error(error: Exception) -> str:
    """
    Format any configuration-related error into a user-friendly message.

    Args:
        error: Exception that occurred during configuration loading

    Returns:
        Formatted error message
    """
    if isinstance(error, ConfigValidationError):
        return "Configuration errors:\n" + "\n".join(f"  • {e}" for e in error.errors)

    if isinstance(error, ConfigMissingError):
        return (
            f"{error}\n"
            f"Create the directory and copy the example config:\n"
            f"  mkdir -p {Path(error.path).parent if error.path else '<config dir>'}\n"
            f"  cp config.example.toml {error.path or '<config path>'}"
        )

    if isinstance(error, ConfigParseError):
        return f"{error}\nTip: Check your configuration file syntax"

    if isinstance(error, ConfigWriteError):
        return f"{error}\nTip: Check that the config file and its directory are writable"

    return f"Unexpected configuration error: {error}"
