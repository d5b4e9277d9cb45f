"""
Workspace launching.

WorkspaceLauncher runs a workspace's shell commands one after another and
then opens the bookmarks of its configured folder through the configured
browser command. Failures are reported per item and never stop the pass.
"""

import logging
from typing import List, Optional

from workspace_launcher.config.pydantic_config import (
    DEFAULT_OPEN_COMMAND,
    LauncherConfig,
    Workspace,
)
from workspace_launcher.utils.console_output import ConsoleReporter, truncate
from workspace_launcher.utils.error_handler import (
    BookmarksOpenError,
    CommandExitError,
    LaunchError,
)

from .bookmarks_reader import ChromeBookmarksReader
from .command_parsing import strip_inline_comments, tokenize_command
from .data_models import Bookmark, LaunchOutcome, LaunchReport
from .launch_modes import LaunchOptions
from .process_runner import ProcessRunner

COMMAND_DISPLAY_LIMIT = 50
BOOKMARK_DISPLAY_LIMIT = 40


class WorkspaceLauncher:
    """Launches workspaces under a fixed set of LaunchOptions."""

    def __init__(
        self,
        options: Optional[LaunchOptions] = None,
        reporter: Optional[ConsoleReporter] = None,
        runner: Optional[ProcessRunner] = None,
        bookmarks_reader: Optional[ChromeBookmarksReader] = None,
    ):
        """
        Initialize the launcher.

        Args:
            options: Dry-run/verbose behaviour (defaults to a quiet live run)
            reporter: Where progress and failures are printed
            runner: Process runner; one using the configured shell is
                created per launch when omitted
            bookmarks_reader: Bookmark folder resolver
        """
        self.options = options or LaunchOptions()
        self.reporter = reporter or ConsoleReporter()
        self.runner = runner
        self.bookmarks_reader = bookmarks_reader or ChromeBookmarksReader(self.reporter)
        self.logger = logging.getLogger(__name__)

    def launch(self, workspace: Workspace, config: LauncherConfig) -> LaunchReport:
        """
        Run every command of a workspace, then open its bookmarks folder.

        Args:
            workspace: Workspace to launch
            config: Configuration (already environment-expanded)

        Returns:
            Per-item outcomes of this launch
        """
        report = LaunchReport(workspace_name=workspace.name)
        runner = self.runner or ProcessRunner(shell=config.settings.shell)

        self.logger.info(
            f"Launching workspace #{workspace.id} '{workspace.name}' "
            f"({self.options.get_description()})"
        )
        self.reporter.blank()
        self.reporter.info(f"Starting: {workspace.name}")
        self.reporter.blank()

        for command in workspace.commands:
            self._run_command(command, runner, report)

        if workspace.bookmarks_folder:
            self._open_bookmarks_folder(workspace.bookmarks_folder, config, runner, report)

        self.logger.info(
            f"Finished '{workspace.name}': {len(report.successes)} ok, "
            f"{len(report.failures)} failed"
        )
        self.logger.debug(f"Launch report: {report.to_dict()}")
        return report

    # =========================================================================
    # Commands
    # =========================================================================

    def _run_command(
        self, command: str, runner: ProcessRunner, report: LaunchReport
    ) -> None:
        if not command or not command.strip() or command.strip().startswith("#"):
            return

        clean_command = strip_inline_comments(command)
        if not clean_command:
            return

        display_name = truncate(clean_command, COMMAND_DISPLAY_LIMIT)

        if self.options.dry_run:
            self.reporter.dry_run(f"Would execute: {clean_command}")
            self.reporter.status(f"Planned: {display_name}")
            report.add(LaunchOutcome(clean_command, True, "command", planned=True))
            return

        try:
            returncode = runner.run_shell(clean_command, quiet=self.options.quiet)
            if returncode != 0:
                raise CommandExitError(clean_command, returncode)
        except LaunchError as e:
            self.logger.warning(f"Command failed: {e}")
            self.reporter.error(f"Failed to launch: {clean_command}")
            if isinstance(e, CommandExitError) and e.command_not_found:
                self.reporter.info("Tip: Ensure the application is installed")
            if self.options.verbose:
                self.reporter.muted(str(e))
            report.add(LaunchOutcome(clean_command, False, "command", detail=str(e)))
            return

        self.reporter.status(f"Launched: {display_name}")
        report.add(LaunchOutcome(clean_command, True, "command"))

    # =========================================================================
    # Bookmarks
    # =========================================================================

    def _open_bookmarks_folder(
        self,
        folder_path: str,
        config: LauncherConfig,
        runner: ProcessRunner,
        report: LaunchReport,
    ) -> None:
        bookmarks_file = config.settings.bookmarks_file
        if not bookmarks_file:
            self.reporter.error("Bookmarks file path not configured in settings")
            self.reporter.info("Add 'bookmarks_file' in [settings] section of config")
            report.add(
                LaunchOutcome(
                    folder_path, False, "bookmarks", detail="bookmarks_file not configured"
                )
            )
            return

        bookmarks = self.bookmarks_reader.get_bookmarks_from_folder(
            bookmarks_file, folder_path
        )
        if not bookmarks:
            self.reporter.error(f"No bookmarks found in folder: {folder_path}")
            self.reporter.info("Tip: Check the folder path in your config")
            report.add(
                LaunchOutcome(folder_path, False, "bookmarks", detail="no bookmarks found")
            )
            return

        self.reporter.info(f"Opening {len(bookmarks)} bookmark(s) from: {folder_path}")

        command_parts = tokenize_command(config.settings.bookmarks_open_in)
        if not command_parts:
            command_parts = [DEFAULT_OPEN_COMMAND]
        one_url_per_call = command_parts[0].endswith("xdg-open")

        if self.options.dry_run:
            self._preview_bookmarks(bookmarks, one_url_per_call, report)
            return

        try:
            if one_url_per_call:
                failures = self._open_one_by_one(command_parts, bookmarks, runner, report)
            else:
                self._open_as_tabs(command_parts, bookmarks, runner, report)
                failures = []
        except LaunchError as e:
            self._report_open_failure(folder_path, str(e))
            report.add(LaunchOutcome(folder_path, False, "bookmarks", detail=str(e)))
            return

        if failures:
            self._report_open_failure(folder_path, "; ".join(failures))

    def _report_open_failure(self, folder_path: str, detail: str) -> None:
        self.logger.warning(f"Opening bookmarks from '{folder_path}' failed: {detail}")
        self.reporter.error("Failed to open bookmarks")
        self.reporter.info("Tip: Check your browser command in config.toml")
        if self.options.verbose:
            self.reporter.muted(detail)

    def _preview_bookmarks(
        self, bookmarks: List[Bookmark], one_url_per_call: bool, report: LaunchReport
    ) -> None:
        total = len(bookmarks)
        if not one_url_per_call:
            self.reporter.dry_run(f"Would open {total} bookmarks as tabs")

        for index, bookmark in enumerate(bookmarks, start=1):
            if one_url_per_call:
                message = f"[DRY RUN] Would open: {bookmark.name}"
            else:
                message = f"[DRY RUN] {bookmark.name}"
            self.reporter.progress(index, total, message)
            report.add(LaunchOutcome(bookmark.url, True, "bookmark", planned=True))

    def _open_one_by_one(
        self,
        command_parts: List[str],
        bookmarks: List[Bookmark],
        runner: ProcessRunner,
        report: LaunchReport,
    ) -> List[str]:
        """
        xdg-open accepts a single URL, so spawn one process per bookmark.

        A non-zero exit is recorded for that bookmark and the rest are still
        opened; a browser command that cannot be started stops the batch.

        Returns:
            Error details of the bookmarks that failed to open
        """
        total = len(bookmarks)
        failures = []
        for index, bookmark in enumerate(bookmarks, start=1):
            try:
                self._run_open_command(command_parts + [bookmark.url], runner)
            except BookmarksOpenError as e:
                display_name = truncate(bookmark.name, BOOKMARK_DISPLAY_LIMIT)
                self.reporter.progress(index, total, f"Failed: {display_name}")
                report.add(LaunchOutcome(bookmark.url, False, "bookmark", detail=str(e)))
                failures.append(f"{bookmark.url}: {e}")
                continue
            self._report_opened(index, total, bookmark, report)
        return failures

    def _open_as_tabs(
        self,
        command_parts: List[str],
        bookmarks: List[Bookmark],
        runner: ProcessRunner,
        report: LaunchReport,
    ) -> None:
        """Pass every URL to a single browser invocation."""
        self._run_open_command(command_parts + [b.url for b in bookmarks], runner)

        total = len(bookmarks)
        for index, bookmark in enumerate(bookmarks, start=1):
            self._report_opened(index, total, bookmark, report)

    def _run_open_command(self, argv: List[str], runner: ProcessRunner) -> None:
        returncode = runner.run(argv, quiet=self.options.quiet)
        if returncode != 0:
            raise BookmarksOpenError(
                f"{argv[0]} exited with status {returncode}"
            )

    def _report_opened(
        self, index: int, total: int, bookmark: Bookmark, report: LaunchReport
    ) -> None:
        display_name = truncate(bookmark.name, BOOKMARK_DISPLAY_LIMIT)
        self.reporter.progress(index, total, f"Opened: {display_name}")
        report.add(LaunchOutcome(bookmark.url, True, "bookmark"))
