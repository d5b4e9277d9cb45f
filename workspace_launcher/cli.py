"""
Command-line interface for the Workspace Launcher.

This module provides the CLI for launching workspaces (groups of shell
commands and browser bookmark folders) and for managing them in the TOML
configuration file.
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import Optional, TextIO

from workspace_launcher import __version__
from workspace_launcher.config.configuration import Configuration, get_default_config_path
from workspace_launcher.config.pydantic_config import format_config_error
from workspace_launcher.core.launch_modes import LaunchOptions
from workspace_launcher.core.management import WorkspaceManager
from workspace_launcher.core.menu import (
    MainMenu,
    open_config_in_editor,
    select_and_launch,
    view_config,
)
from workspace_launcher.utils.console_output import ConsoleReporter
from workspace_launcher.utils.error_handler import ConfigurationError, ValidationError
from workspace_launcher.utils.logging_setup import setup_logging


class CLIInterface:
    """Command line interface for the workspace launcher."""

    def __init__(
        self,
        reporter: Optional[ConsoleReporter] = None,
        stream: Optional[TextIO] = None,
    ):
        self.parser = self._create_parser()
        self.reporter = reporter or ConsoleReporter()
        self.stream = stream

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with one subcommand per operation."""
        parser = argparse.ArgumentParser(
            prog="workspace-launcher",
            description=(
                "Workspace Launcher - launch groups of commands and "
                "bookmark folders with one selection"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=f"""
Examples:
  workspace-launcher                      Show interactive menu
  workspace-launcher launch               Choose workspaces to launch
  workspace-launcher launch 1,3-5         Launch workspaces 1, 3, 4 and 5
  workspace-launcher launch 2 --dry-run   Show what workspace 2 would do
  workspace-launcher add                  Add a new workspace
  workspace-launcher edit                 Edit a workspace
  workspace-launcher delete               Delete workspaces (supports 1,3,5)
  workspace-launcher --config ./work.toml launch 1

Config file: {get_default_config_path()}
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--config",
            "-c",
            help="Custom configuration file path (TOML). "
            "Defaults to $XDG_CONFIG_HOME/workspace-launcher/config.toml.",
        )

        subparsers = parser.add_subparsers(dest="command", metavar="<command>")

        launch = subparsers.add_parser("launch", help="Launch one or more workspaces")
        launch.add_argument(
            "selection",
            nargs="?",
            help="Workspace IDs, comma-separated with ranges (e.g. 1,3-5,7). "
            "Prompted for when omitted.",
        )
        launch.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be executed without running anything",
        )
        launch.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Show command output and detailed logging",
        )

        subparsers.add_parser("add", help="Add a new workspace")
        subparsers.add_parser("edit", help="Edit an existing workspace")
        subparsers.add_parser("delete", help="Delete one or more workspaces")
        subparsers.add_parser("view", help="Print the configuration file")

        open_config = subparsers.add_parser(
            "open-config", help="Open the configuration file in an editor"
        )
        open_config.add_argument(
            "--dry-run",
            action="store_true",
            help="Show which file would be opened",
        )

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> dict:
        """
        Validate arguments and return processed values.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Dictionary of validated arguments

        Raises:
            ValidationError: If the config path is not a file
        """
        config_path = None
        if args.config:
            config_path = Path(args.config).expanduser()
            if config_path.exists() and not config_path.is_file():
                raise ValidationError(f"Config path is not a file: {args.config}")

        return {
            "command": args.command,
            "config_path": config_path,
            "selection": getattr(args, "selection", None),
            "dry_run": getattr(args, "dry_run", False),
            "verbose": getattr(args, "verbose", False),
        }

    def load_configuration(self, config_path: Optional[Path]) -> Configuration:
        """Load the configuration, announcing auto-creation from the example."""
        configuration = Configuration(config_path)

        if configuration.created_from_example:
            self.reporter.blank()
            self.reporter.info(f"Created config file from example: {configuration.path}")
            self.reporter.info("Please edit the config file to customize your workspaces.")
            self.reporter.blank()

        return configuration

    def _report_configuration_error(self, error: ConfigurationError) -> None:
        lines = format_config_error(error).splitlines()
        self.reporter.error(lines[0])
        for line in lines[1:]:
            self.reporter.plain(line)
        self.reporter.blank()

    def handle_terminate(self, signum, frame) -> None:
        """SIGTERM handler: finish the current line and exit cleanly."""
        self.reporter.blank()
        self.reporter.status("Terminated")
        raise SystemExit(0)

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        try:
            parsed_args = self.parse_args(args)
            validated_args = self.validate_args(parsed_args)

            setup_logging(verbose=validated_args["verbose"])
            logger = logging.getLogger(__name__)
            logger.info(f"Command: {validated_args['command'] or 'menu'}")

            configuration = self.load_configuration(validated_args["config_path"])
            verbose = validated_args["verbose"]
            if validated_args["dry_run"]:
                options = LaunchOptions.preview(verbose=verbose)
            else:
                options = LaunchOptions.live(verbose=verbose)
            manager = WorkspaceManager(configuration, self.reporter, self.stream)

            command = validated_args["command"]
            if command == "launch":
                select_and_launch(
                    configuration,
                    validated_args["selection"],
                    options,
                    self.reporter,
                    stream=self.stream,
                )
            elif command == "add":
                manager.add_workspace()
            elif command == "edit":
                manager.edit_workspace()
            elif command == "delete":
                manager.delete_workspaces()
            elif command == "view":
                view_config(configuration, self.reporter)
            elif command == "open-config":
                open_config_in_editor(configuration, options, self.reporter)
            else:
                return MainMenu(configuration, self.reporter, self.stream).run()

            return 0

        except ConfigurationError as e:
            logging.getLogger(__name__).error(f"Configuration error: {e}")
            self._report_configuration_error(e)
            return 1
        except ValidationError as e:
            self.reporter.error(str(e))
            return 1
        except (KeyboardInterrupt, EOFError):
            self.reporter.blank()
            self.reporter.status("Cancelled by user")
            self.reporter.blank()
            return 0


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    signal.signal(signal.SIGTERM, cli.handle_terminate)
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
