"""
Tests for the command-line interface.
"""

import signal
from unittest.mock import patch

import pytest

from conftest import ScriptedInput, output_of
from workspace_launcher import __version__
from workspace_launcher.cli import CLIInterface, main
from workspace_launcher.core.launch_modes import LaunchOptions


@pytest.fixture(autouse=True)
def mock_logging():
    with patch("workspace_launcher.cli.setup_logging") as setup_logging:
        yield setup_logging


def make_cli(reporter, answers=()):
    return CLIInterface(reporter, ScriptedInput(answers))


class TestArgumentParsing:
    """Tests for parse_args and validate_args."""

    def setup_method(self):
        self.cli = CLIInterface()

    def test_no_command(self):
        validated = self.cli.validate_args(self.cli.parse_args([]))

        assert validated["command"] is None
        assert validated["config_path"] is None
        assert not validated["dry_run"]

    def test_launch_options(self, tmp_path):
        args = self.cli.parse_args(
            ["-c", str(tmp_path / "c.toml"), "launch", "1,3-5", "--dry-run", "-v"]
        )
        validated = self.cli.validate_args(args)

        assert validated["command"] == "launch"
        assert validated["selection"] == "1,3-5"
        assert validated["dry_run"]
        assert validated["verbose"]
        assert validated["config_path"] == tmp_path / "c.toml"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.cli.parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as exc_info:
            self.cli.parse_args(["explode"])
        assert exc_info.value.code == 2


class TestRun:
    """Tests for CLIInterface.run."""

    def test_dry_run_launch(self, reporter, config_path, mock_logging):
        with patch("workspace_launcher.core.process_runner.subprocess.run") as run:
            code = make_cli(reporter).run(["--config", str(config_path), "launch", "1", "--dry-run"])

        assert code == 0
        run.assert_not_called()
        mock_logging.assert_called_once_with(verbose=False)
        out = output_of(reporter)
        assert "Would execute: code ~/projects" in out
        assert "Planned to launch:" in out

    def test_verbose_flag_reaches_logging(self, reporter, config_path, mock_logging):
        make_cli(reporter).run(["-c", str(config_path), "launch", "4", "-v"])
        mock_logging.assert_called_once_with(verbose=True)

    @pytest.mark.parametrize(
        "flags,expected",
        [
            ([], LaunchOptions.live()),
            (["-v"], LaunchOptions.live(verbose=True)),
            (["--dry-run"], LaunchOptions.preview()),
        ],
    )
    def test_launch_options_reach_launcher(self, reporter, config_path, flags, expected):
        with patch("workspace_launcher.cli.select_and_launch") as launch:
            make_cli(reporter).run(["-c", str(config_path), "launch", "1"] + flags)

        assert launch.call_args.args[2] == expected

    def test_unwritable_config_is_reported(self, reporter, config_path):
        original = config_path.read_text(encoding="utf-8")
        with patch(
            "workspace_launcher.config.pydantic_config.open",
            create=True,
            side_effect=PermissionError("Permission denied"),
        ):
            code = make_cli(reporter, ["Music", "spotify", "", ""]).run(
                ["-c", str(config_path), "add"]
            )

        assert code == 0
        assert config_path.read_text(encoding="utf-8") == original
        assert f"Failed to write {config_path}" in output_of(reporter)

    def test_invalid_selection_exits_1(self, reporter, config_path):
        code = make_cli(reporter).run(["-c", str(config_path), "launch", "abc"])

        assert code == 1
        assert "No valid workspace IDs provided" in output_of(reporter)

    def test_missing_explicit_config(self, reporter, tmp_path):
        missing = tmp_path / "missing.toml"
        code = make_cli(reporter).run(["-c", str(missing), "view"])

        assert code == 1
        out = output_of(reporter)
        assert f"Config file not found: {missing}" in out
        assert "cp config.example.toml" in out

    def test_invalid_config(self, reporter, write_config):
        path = write_config('[[workspaces]]\nid = 1\nname = "A"\n\n[[workspaces]]\nid = 1\nname = "B"\n')

        code = make_cli(reporter).run(["-c", str(path), "launch", "1"])

        assert code == 1
        out = output_of(reporter)
        assert "[✗] Configuration errors:" in out
        assert "Duplicate workspace IDs found: 1" in out

    def test_config_path_is_directory(self, reporter, tmp_path):
        assert make_cli(reporter).run(["-c", str(tmp_path), "view"]) == 1
        assert "Config path is not a file" in output_of(reporter)

    def test_default_config_created_on_first_run(self, reporter, tmp_path):
        code = make_cli(reporter).run(["view"])

        assert code == 0
        out = output_of(reporter)
        assert "Created config file from example" in out
        assert 'name = "Development"' in out
        assert (tmp_path / "xdg-config" / "workspace-launcher" / "config.toml").exists()

    def test_no_command_opens_menu(self, reporter, config_path):
        code = make_cli(reporter, ["7"]).run(["-c", str(config_path)])

        assert code == 0
        assert "Goodbye!" in output_of(reporter)

    @pytest.mark.parametrize(
        "command,target",
        [
            ("add", "WorkspaceManager.add_workspace"),
            ("edit", "WorkspaceManager.edit_workspace"),
            ("delete", "WorkspaceManager.delete_workspaces"),
            ("view", "view_config"),
            ("open-config", "open_config_in_editor"),
        ],
    )
    def test_management_commands_dispatch(self, reporter, config_path, command, target):
        with patch(f"workspace_launcher.cli.{target}") as handler:
            code = make_cli(reporter).run(["-c", str(config_path), command])

        assert code == 0
        handler.assert_called_once()

    def test_ctrl_c_is_a_clean_exit(self, reporter, config_path):
        with patch("workspace_launcher.cli.select_and_launch", side_effect=KeyboardInterrupt):
            code = make_cli(reporter).run(["-c", str(config_path), "launch", "1"])

        assert code == 0
        assert "Cancelled by user" in output_of(reporter)

    def test_end_of_input_is_a_clean_exit(self, reporter, config_path):
        code = make_cli(reporter, []).run(["-c", str(config_path), "launch"])

        assert code == 0
        assert "Cancelled by user" in output_of(reporter)


class TestSignals:
    """Tests for SIGTERM handling and main()."""

    def test_handle_terminate(self, reporter):
        with pytest.raises(SystemExit) as exc_info:
            CLIInterface(reporter).handle_terminate(signal.SIGTERM, None)

        assert exc_info.value.code == 0
        assert "Terminated" in output_of(reporter)

    def test_main_installs_sigterm_handler(self):
        with patch("workspace_launcher.cli.signal.signal") as install, patch.object(
            CLIInterface, "run", return_value=0
        ) as run:
            assert main(["view"]) == 0

        assert install.call_args[0][0] == signal.SIGTERM
        run.assert_called_once_with(["view"])
