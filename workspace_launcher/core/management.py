"""
Interactive workspace management.

Provides the add, edit and delete prompts. Every change is validated the
same way the configuration loader validates the file and is written to
disk before it replaces the loaded configuration. When the write fails the
error is reported and the workspaces stay as they were.
"""

import logging
from typing import List, Optional, TextIO

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from workspace_launcher.config.configuration import Configuration
from workspace_launcher.config.pydantic_config import Workspace
from workspace_launcher.utils.console_output import ConsoleReporter
from workspace_launcher.utils.error_handler import ConfigWriteError
from workspace_launcher.utils.validation import (
    parse_selection,
    sanitize_input,
    validate_command,
    validate_workspace_name,
)

FOLDER_FORMAT_HINT = "  Format: 'Bookmarks bar/folder/subfolder' or 'Other bookmarks/folder'"


class WorkspaceManager:
    """Add, edit and delete workspaces through terminal prompts."""

    def __init__(
        self,
        configuration: Configuration,
        reporter: Optional[ConsoleReporter] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the manager.

        Args:
            configuration: Loaded configuration to modify and save
            reporter: Output target; its console is also used for prompts
            stream: Optional input stream (stdin when omitted)
        """
        self.configuration = configuration
        self.reporter = reporter or ConsoleReporter()
        self.console = self.reporter.console
        self.stream = stream
        self.logger = logging.getLogger(__name__)

    # =========================================================================
    # Prompt Methods
    # =========================================================================

    def _ask(self, prompt: str) -> str:
        response = Prompt.ask(
            prompt,
            console=self.console,
            default="",
            show_default=False,
            stream=self.stream,
        )
        return sanitize_input(response).strip()

    def _confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, console=self.console, default=False, stream=self.stream)

    def _prompt_name(self, existing_names: List[str]) -> str:
        while True:
            name = self._ask("[cyan]Workspace name[/cyan]")
            valid, error = validate_workspace_name(name, existing_names)
            if valid:
                return name.strip()
            self.reporter.error(error)

    def _prompt_commands(self, heading: str) -> List[str]:
        """Read commands until an empty line."""
        commands = []
        self.reporter.heading(heading)
        while True:
            command = self._ask("  Command")
            if not command:
                return commands

            _, warning = validate_command(command)
            if warning:
                self.reporter.error(warning)
                if not self._confirm("  Continue with this command?"):
                    continue

            commands.append(command)

    def _prompt_workspace_id(self, prompt: str) -> Optional[Workspace]:
        response = self._ask(prompt)
        try:
            workspace_id = int(response)
        except ValueError:
            self.reporter.error("Invalid workspace ID")
            self.reporter.blank()
            return None

        workspace = self.configuration.get_workspace(workspace_id)
        if workspace is None:
            self.reporter.error(f"Workspace #{workspace_id} not found")
            self.reporter.blank()
        return workspace

    def _report_save_failure(self, error: ConfigWriteError) -> None:
        self.logger.error(f"Could not save configuration: {error}")
        self.reporter.error(str(error))
        self.reporter.info("Tip: Check that the config file and its directory are writable")
        self.reporter.info("No changes were made")
        self.reporter.blank()

    # =========================================================================
    # Operations
    # =========================================================================

    def add_workspace(self) -> Optional[Workspace]:
        """Prompt for a new workspace and append it to the configuration."""
        new_id = self.configuration.next_workspace_id()

        self.reporter.blank()
        self.reporter.info("Add New Workspace")
        self.reporter.blank()

        name = self._prompt_name([w.name for w in self.configuration.workspaces])
        commands = self._prompt_commands(
            "Enter commands (press Enter with empty line to finish):"
        )

        self.reporter.blank()
        self.reporter.info("Bookmarks folder (optional):")
        self.reporter.heading(FOLDER_FORMAT_HINT)
        bookmarks_folder = self._ask("  Folder path (or press Enter to skip)")

        workspace = Workspace(
            id=new_id,
            name=name,
            commands=commands,
            bookmarks_folder=bookmarks_folder or None,
        )
        try:
            self.configuration.add_workspace(workspace)
        except ConfigWriteError as e:
            self._report_save_failure(e)
            return None
        self.reporter.status("Configuration saved")
        self.logger.info(f"Added workspace #{new_id} '{name}'")

        self.reporter.blank()
        self.reporter.info("Workspace added successfully:")
        self.reporter.bullet(f"{new_id}. {name}")
        if commands:
            self.reporter.status(f"Added: {len(commands)} command(s)")
        if bookmarks_folder:
            self.reporter.status(f"Bookmarks folder: {bookmarks_folder}")
        self.reporter.blank()

        return workspace

    def edit_workspace(self) -> Optional[Workspace]:
        """Prompt for a workspace ID and edit its name, commands and folder."""
        self.reporter.blank()
        self.reporter.info("Edit Workspace")
        self.reporter.blank()
        self.reporter.workspace_list(self.configuration.workspaces)
        self.reporter.blank()

        workspace = self._prompt_workspace_id("[yellow]Enter workspace ID to edit[/yellow]")
        if workspace is None:
            return None

        self.reporter.blank()
        self.reporter.info(f"Editing: {workspace.name}")
        self.reporter.blank()

        name = workspace.name
        new_name = self._ask(
            f'[cyan]New name (press Enter to keep "{escape(workspace.name)}")[/cyan]'
        )
        if new_name:
            others = [w.name for w in self.configuration.workspaces if w.id != workspace.id]
            valid, error = validate_workspace_name(new_name, others)
            if valid:
                name = new_name.strip()
            else:
                self.reporter.error(error)
                self.reporter.info("Keeping original name")

        commands = self._edit_commands(list(workspace.commands))
        bookmarks_folder = self._edit_bookmarks_folder(workspace.bookmarks_folder)

        workspace = workspace.model_copy(
            update={
                "name": name,
                "commands": commands,
                "bookmarks_folder": bookmarks_folder,
            }
        )
        try:
            self.configuration.update_workspace(workspace)
        except ConfigWriteError as e:
            self._report_save_failure(e)
            return None
        self.reporter.status("Configuration saved")
        self.logger.info(f"Updated workspace #{workspace.id} '{name}'")

        self.reporter.blank()
        self.reporter.info("Workspace updated successfully:")
        self.reporter.bullet(f"{workspace.id}. {workspace.name}")
        if workspace.commands:
            self.reporter.status(f"Commands: {len(workspace.commands)}")
        if workspace.bookmarks_folder:
            self.reporter.status(f"Bookmarks folder: {workspace.bookmarks_folder}")
        self.reporter.blank()

        return workspace

    def _edit_commands(self, commands: List[str]) -> List[str]:
        self.reporter.blank()
        self.reporter.info("Current commands:")
        if commands:
            for index, command in enumerate(commands, start=1):
                self.reporter.plain(f"  {index}. {command}")
        else:
            self.reporter.info("  (none)")

        self.reporter.blank()
        self.reporter.heading("Command options:")
        self.reporter.plain("  1. Keep current commands")
        self.reporter.plain("  2. Replace all commands")
        self.reporter.plain("  3. Add more commands")
        self.reporter.plain("  4. Clear all commands")
        option = self._ask("[yellow]Select option[/yellow]")

        if option == "2":
            return self._prompt_commands(
                "Enter new commands (press Enter with empty line to finish):"
            )
        if option == "3":
            return commands + self._prompt_commands(
                "Enter additional commands (press Enter with empty line to finish):"
            )
        if option == "4":
            self.reporter.status("Commands cleared")
            return []

        self.reporter.info("Keeping current commands")
        return commands

    def _edit_bookmarks_folder(self, current: Optional[str]) -> Optional[str]:
        self.reporter.blank()
        self.reporter.info(f"Current bookmarks folder: {current or '(none)'}")
        self.reporter.heading(FOLDER_FORMAT_HINT)
        response = self._ask("  New folder path (press Enter to keep, 'clear' to remove)")

        if response.lower() == "clear":
            self.reporter.status("Bookmarks folder removed")
            return None
        return response or current

    def delete_workspaces(self) -> List[Workspace]:
        """Prompt for one or more workspace IDs and delete them after confirmation."""
        self.reporter.blank()
        self.reporter.info("Delete Workspace")
        self.reporter.blank()
        self.reporter.workspace_list(self.configuration.workspaces)
        self.reporter.blank()

        ids = parse_selection(
            self._ask("[yellow]Enter workspace ID(s) to delete (e.g., 1,3,5 or 1-3)[/yellow]")
        )
        if not ids:
            self.reporter.error("No valid workspace IDs provided")
            self.reporter.blank()
            return []

        to_delete = [w for w in (self.configuration.get_workspace(i) for i in ids) if w]
        if not to_delete:
            self.reporter.error("No valid workspaces found to delete")
            self.reporter.blank()
            return []

        self.reporter.blank()
        self.reporter.info("The following workspaces will be deleted:")
        for workspace in to_delete:
            self.reporter.bullet(f"{workspace.id}. {workspace.name}", style="red")

        self.reporter.blank()
        if self._ask("[red]Are you sure? (yes/no)[/red]").lower() != "yes":
            self.reporter.info("Deletion cancelled")
            self.reporter.blank()
            return []

        try:
            deleted, not_found = self.configuration.delete_workspaces(ids)
        except ConfigWriteError as e:
            self._report_save_failure(e)
            return []

        if deleted:
            self.reporter.status("Configuration saved")
            self.logger.info(f"Deleted workspaces: {[w.id for w in deleted]}")
            self.reporter.blank()
            self.reporter.info("Successfully deleted:")
            for workspace in deleted:
                self.reporter.bullet(f"{workspace.id}. {workspace.name}")

        if not_found:
            self.reporter.blank()
            for workspace_id in not_found:
                self.reporter.error(f"Workspace #{workspace_id} not found")

        self.reporter.blank()
        return deleted
