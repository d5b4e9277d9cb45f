"""
Configuration management for the Workspace Launcher.

This module wraps the Pydantic-based ConfigurationManager with the
workspace-level operations the launcher, the menu and the management
prompts need: lookup, ID allocation and add/update/delete, each written
to disk before it takes effect.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .pydantic_config import ConfigurationManager, LauncherConfig, Workspace


def get_config_dir() -> Path:
    """Return $XDG_CONFIG_HOME/workspace-launcher (or ~/.config/...)."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "workspace-launcher"


def get_default_config_path() -> Path:
    return get_config_dir() / "config.toml"


class Configuration:
    """
    Workspace configuration backed by a TOML file.

    The configuration is kept exactly as written in the file; call
    launch_config() for the environment-expanded view used when launching.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        example_path: Optional[Path] = None,
    ):
        """
        Initialize configuration.

        Args:
            config_path: Optional path to the TOML file. When omitted the
                default path is used and created from the example if missing.
            example_path: Optional example config used for auto-creation
        """
        path = Path(config_path) if config_path else get_default_config_path()
        self._manager = ConfigurationManager(
            path,
            create_missing=config_path is None,
            example_path=example_path,
        )

    @property
    def path(self) -> Path:
        return self._manager.config_path

    @property
    def created_from_example(self) -> bool:
        return self._manager.created_from_example

    @property
    def config(self) -> LauncherConfig:
        """Get the underlying Pydantic configuration."""
        return self._manager.config

    @property
    def workspaces(self) -> List[Workspace]:
        return self.config.workspaces

    @property
    def warnings(self) -> List[str]:
        return self.config.collect_warnings()

    def launch_config(self) -> LauncherConfig:
        """Configuration with environment variables expanded."""
        return self.config.expanded()

    def get_workspace(self, workspace_id: int) -> Optional[Workspace]:
        return self.config.get_workspace(workspace_id)

    def next_workspace_id(self) -> int:
        return max((w.id for w in self.workspaces), default=0) + 1

    def add_workspace(self, workspace: Workspace) -> None:
        """Append a workspace and write the file."""
        self._commit(self.workspaces + [workspace])

    def update_workspace(self, workspace: Workspace) -> None:
        """Replace the workspace with the same ID and write the file."""
        if self.get_workspace(workspace.id) is None:
            raise KeyError(f"Workspace #{workspace.id} not found")
        self._commit(
            [workspace if w.id == workspace.id else w for w in self.workspaces]
        )

    def delete_workspaces(
        self, workspace_ids: Iterable[int]
    ) -> Tuple[List[Workspace], List[int]]:
        """
        Remove workspaces by ID and write the file if any were removed.

        Returns:
            Tuple of (deleted workspaces in ID order, IDs that did not exist)
        """
        deleted, not_found = [], []
        for workspace_id in sorted(set(workspace_ids)):
            workspace = self.get_workspace(workspace_id)
            if workspace is None:
                not_found.append(workspace_id)
            else:
                deleted.append(workspace)

        if deleted:
            removed = {w.id for w in deleted}
            self._commit([w for w in self.workspaces if w.id not in removed])
        return deleted, not_found

    def _commit(self, workspaces: List[Workspace]) -> None:
        # The loaded config only changes once the new one is on disk
        self._manager.save(self.config.model_copy(update={"workspaces": workspaces}))

    def read_text(self) -> str:
        return self._manager.read_text()
