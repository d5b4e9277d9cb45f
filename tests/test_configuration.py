"""
Tests for the Configuration wrapper.
"""

from unittest.mock import patch

import pytest

from workspace_launcher.config.configuration import (
    Configuration,
    get_config_dir,
    get_default_config_path,
)
from workspace_launcher.config.pydantic_config import Workspace
from workspace_launcher.utils.error_handler import ConfigMissingError, ConfigWriteError


class TestConfigPaths:
    """Tests for config path lookup."""

    def test_xdg_config_home(self, tmp_path):
        assert get_config_dir() == tmp_path / "xdg-config" / "workspace-launcher"
        assert get_default_config_path().name == "config.toml"

    def test_falls_back_to_dot_config(self, tmp_path, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME")
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        assert get_config_dir() == tmp_path / "home" / ".config" / "workspace-launcher"


class TestConfiguration:
    """Tests for Configuration."""

    def test_default_path_is_created_from_example(self):
        configuration = Configuration()

        assert configuration.created_from_example
        assert configuration.path == get_default_config_path()
        assert configuration.path.exists()

    def test_explicit_missing_path_is_an_error(self, tmp_path):
        with pytest.raises(ConfigMissingError):
            Configuration(tmp_path / "missing.toml")

    def test_workspaces_and_warnings(self, configuration):
        assert [w.name for w in configuration.workspaces] == ["Development", "Reading", "Empty"]
        assert configuration.warnings == ['Workspace "Empty" has no commands or bookmarks_folder']

    def test_next_workspace_id_is_max_plus_one(self, configuration):
        assert configuration.next_workspace_id() == 5

    def test_next_workspace_id_for_empty_config(self, write_config):
        assert Configuration(write_config("")).next_workspace_id() == 1

    def test_update_workspace(self, configuration, config_path):
        workspace = configuration.get_workspace(2).model_copy(update={"name": "Research"})
        configuration.update_workspace(workspace)

        assert configuration.get_workspace(2).name == "Research"
        assert Configuration(config_path).get_workspace(2).name == "Research"

    def test_update_unknown_workspace(self, configuration):
        with pytest.raises(KeyError):
            configuration.update_workspace(Workspace(id=99, name="Ghost"))

    def test_delete_workspaces(self, configuration, config_path):
        deleted, not_found = configuration.delete_workspaces([4, 1, 9, 1])

        assert [w.id for w in deleted] == [1, 4]
        assert not_found == [9]
        assert [w.id for w in configuration.workspaces] == [2]
        assert [w.id for w in Configuration(config_path).workspaces] == [2]

    def test_delete_nothing_leaves_file_alone(self, configuration, config_path):
        original = config_path.read_text(encoding="utf-8")

        deleted, not_found = configuration.delete_workspaces([7])

        assert deleted == []
        assert not_found == [7]
        assert config_path.read_text(encoding="utf-8") == original

    def test_add_workspace_persists(self, configuration, config_path):
        configuration.add_workspace(Workspace(id=5, name="Music", commands=["spotify"]))

        assert configuration.get_workspace(5).name == "Music"
        assert Configuration(config_path).get_workspace(5).commands == ["spotify"]

    @patch(
        "workspace_launcher.config.pydantic_config.open",
        create=True,
        side_effect=PermissionError("Permission denied"),
    )
    def test_failed_write_changes_nothing(self, _mock_open, configuration, config_path):
        original = config_path.read_text(encoding="utf-8")
        renamed = configuration.get_workspace(2).model_copy(update={"name": "Research"})

        with pytest.raises(ConfigWriteError):
            configuration.add_workspace(Workspace(id=5, name="Music", commands=["spotify"]))
        with pytest.raises(ConfigWriteError):
            configuration.update_workspace(renamed)
        with pytest.raises(ConfigWriteError):
            configuration.delete_workspaces([1])

        assert [w.id for w in configuration.workspaces] == [1, 2, 4]
        assert configuration.get_workspace(2).name == "Reading"
        assert config_path.read_text(encoding="utf-8") == original

    def test_launch_config_is_expanded(self, configuration, monkeypatch):
        monkeypatch.setenv("HOME", "/home/tester")
        configuration.get_workspace(1).commands = ["code $HOME/src"]

        assert configuration.launch_config().get_workspace(1).commands == [
            "code /home/tester/src"
        ]
        assert configuration.get_workspace(1).commands == ["code $HOME/src"]
