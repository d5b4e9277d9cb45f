"""
Interactive menu and the launch selection flow.
"""

import logging
import os
import shutil
from typing import List, Optional, TextIO

from rich.prompt import Prompt

from workspace_launcher import __version__
from workspace_launcher.config.configuration import Configuration
from workspace_launcher.utils.console_output import ConsoleReporter
from workspace_launcher.utils.error_handler import LaunchError
from workspace_launcher.utils.validation import (
    parse_selection,
    sanitize_input,
    validate_selection,
)

from .command_parsing import tokenize_command
from .data_models import LaunchReport
from .launch_modes import LaunchOptions
from .launcher import WorkspaceLauncher
from .management import WorkspaceManager
from .process_runner import ProcessRunner

FALLBACK_EDITORS = ["code", "nano", "vim", "gedit", "gnome-text-editor"]

logger = logging.getLogger(__name__)


def select_and_launch(
    configuration: Configuration,
    selection: Optional[str] = None,
    options: Optional[LaunchOptions] = None,
    reporter: Optional[ConsoleReporter] = None,
    launcher: Optional[WorkspaceLauncher] = None,
    stream: Optional[TextIO] = None,
) -> List[LaunchReport]:
    """
    List the workspaces, read a selection and launch each selected workspace.

    Args:
        configuration: Loaded configuration
        selection: Pre-selected IDs such as "1,3-5"; prompted for when None
        options: Dry-run/verbose options
        reporter: Output target
        launcher: Launcher override
        stream: Optional input stream for the selection prompt

    Returns:
        One LaunchReport per launched workspace, in selection order

    Raises:
        ValidationError: If a pre-selection contains no valid IDs
    """
    options = options or LaunchOptions()
    reporter = reporter or ConsoleReporter()
    launcher = launcher or WorkspaceLauncher(options, reporter)

    warnings = configuration.warnings
    if warnings:
        reporter.info("Configuration warnings:")
        for warning in warnings:
            reporter.bullet(warning, style="yellow")
        reporter.blank()

    config = configuration.launch_config()
    workspaces = config.workspaces

    if options.dry_run:
        reporter.blank()
        reporter.info("DRY RUN MODE - No commands will be executed")
        reporter.blank()

    reporter.blank()
    reporter.info(f"Available Workspaces ({len(workspaces)} total):")
    reporter.blank()
    reporter.workspace_list(workspaces)

    if selection is not None:
        selected_ids = validate_selection(selection)
    else:
        reporter.blank()
        response = Prompt.ask(
            "[yellow]Enter workspace numbers to launch (e.g., 1,3,4 or 1-3)[/yellow]",
            console=reporter.console,
            default="",
            show_default=False,
            stream=stream,
        )
        selected_ids = parse_selection(sanitize_input(response))

    reports = []
    launched = []
    not_found = []
    for workspace_id in selected_ids:
        workspace = config.get_workspace(workspace_id)
        if workspace is None:
            logger.warning(f"Selected workspace #{workspace_id} does not exist")
            not_found.append(workspace_id)
            continue
        reports.append(launcher.launch(workspace, config))
        launched.append(workspace)

    reporter.blank()
    if launched:
        reporter.info("Planned to launch:" if options.dry_run else "Successfully launched:")
        for workspace, report in zip(launched, reports):
            suffix = f" ({len(report.failures)} failed)" if report.failures else ""
            reporter.bullet(f"{workspace.id}. {workspace.name}{suffix}")

    if not_found:
        reporter.blank()
        for workspace_id in not_found:
            reporter.error(f"Workspace #{workspace_id} not found")

    reporter.blank()
    return reports


def view_config(configuration: Configuration, reporter: Optional[ConsoleReporter] = None) -> None:
    """Print the configuration file as written on disk."""
    reporter = reporter or ConsoleReporter()
    reporter.blank()
    reporter.info(f"Config file: {configuration.path}")
    reporter.blank()
    try:
        reporter.plain(configuration.read_text())
    except OSError as e:
        logger.error(f"Failed to read {configuration.path}: {e}")
        reporter.error("Failed to read config file")


def find_editor() -> Optional[List[str]]:
    """argv prefix of $EDITOR or the first fallback editor on PATH."""
    editor = os.environ.get("EDITOR")
    if editor and editor.strip():
        return tokenize_command(editor)

    for candidate in FALLBACK_EDITORS:
        if shutil.which(candidate):
            return [candidate]
    return None


def open_config_in_editor(
    configuration: Configuration,
    options: Optional[LaunchOptions] = None,
    reporter: Optional[ConsoleReporter] = None,
    runner: Optional[ProcessRunner] = None,
) -> bool:
    """
    Open the configuration file in an editor.

    Falls back to printing the file when no editor is available or the
    editor fails.

    Returns:
        True if an editor ran successfully (or would have, in a dry run)
    """
    options = options or LaunchOptions()
    reporter = reporter or ConsoleReporter()
    runner = runner or ProcessRunner()

    reporter.info(f"Opening config file: {configuration.path}")

    if options.dry_run:
        reporter.dry_run(f"Would open: {configuration.path}")
        return True

    editor = find_editor()
    if editor:
        try:
            if runner.run(editor + [str(configuration.path)], quiet=False) == 0:
                reporter.status("Config opened in editor")
                return True
            reporter.error("Editor exited with an error")
        except LaunchError as e:
            logger.warning(f"Could not start editor {editor}: {e}")
            reporter.error(f"Failed to start editor: {editor[0]}")

    reporter.info("Could not open editor. Displaying config file:")
    view_config(configuration, reporter)
    return False


class MainMenu:
    """The interactive menu shown when no subcommand is given."""

    OPTIONS = [
        "Launch workspace",
        "Add new workspace",
        "Edit workspace",
        "Delete workspace",
        "View TOML config file",
        "Open config in editor",
        "Exit",
    ]

    def __init__(
        self,
        configuration: Configuration,
        reporter: Optional[ConsoleReporter] = None,
        stream: Optional[TextIO] = None,
    ):
        self.configuration = configuration
        self.reporter = reporter or ConsoleReporter()
        self.stream = stream
        self.manager = WorkspaceManager(configuration, self.reporter, stream)

    def _show(self) -> str:
        self.reporter.blank()
        self.reporter.heading(f"Workspace Launcher (v{__version__})")
        self.reporter.muted(f"{len(self.configuration.workspaces)} workspace(s) configured")
        self.reporter.blank()
        for index, label in enumerate(self.OPTIONS, start=1):
            self.reporter.plain(f"  {index}. {label}")
        self.reporter.blank()
        return Prompt.ask(
            "[yellow]Select option[/yellow]",
            console=self.reporter.console,
            default="",
            show_default=False,
            stream=self.stream,
        ).strip()

    def run(self) -> int:
        """Loop until the user launches workspaces or exits."""
        while True:
            choice = self._show()

            if choice == "1":
                select_and_launch(
                    self.configuration, reporter=self.reporter, stream=self.stream
                )
                return 0
            elif choice == "2":
                self.manager.add_workspace()
            elif choice == "3":
                self.manager.edit_workspace()
            elif choice == "4":
                self.manager.delete_workspaces()
            elif choice == "5":
                view_config(self.configuration, self.reporter)
            elif choice == "6":
                open_config_in_editor(self.configuration, reporter=self.reporter)
            elif choice == "7":
                self.reporter.blank()
                self.reporter.status("Goodbye!")
                self.reporter.blank()
                return 0
            else:
                self.reporter.error("Invalid option")
