"""
Child process execution.

ProcessRunner is the only place the launcher touches subprocess. Every call
blocks until the child exits so workspace items run strictly in order.
"""

import logging
import subprocess
from typing import List, Sequence

from workspace_launcher.config.pydantic_config import DEFAULT_SHELL
from workspace_launcher.utils.error_handler import CommandSpawnError


class ProcessRunner:
    """Runs shell command strings and argv lists, returning exit status."""

    def __init__(self, shell: str = DEFAULT_SHELL):
        self.shell = shell
        self.logger = logging.getLogger(__name__)

    def shell_argv(self, command: str) -> List[str]:
        """argv that lets the shell parse pipes, redirection and globs."""
        return [self.shell, "-c", command]

    def run_shell(self, command: str, quiet: bool = True) -> int:
        """Run a full command string through the shell."""
        return self.run(self.shell_argv(command), quiet=quiet)

    def run(self, argv: Sequence[str], quiet: bool = True) -> int:
        """
        Run argv directly and wait for it to exit.

        Args:
            argv: Program and arguments
            quiet: Discard the child's stdout and stderr

        Returns:
            The child's exit status

        Raises:
            CommandSpawnError: If the program could not be started
        """
        argv = list(argv)
        output = subprocess.DEVNULL if quiet else None
        self.logger.debug(f"Running: {argv}")

        try:
            completed = subprocess.run(argv, stdout=output, stderr=output, check=False)
        except OSError as e:
            self.logger.error(f"Failed to start {argv[0]}: {e}")
            raise CommandSpawnError(argv, str(e)) from e

        self.logger.debug(f"Exit status {completed.returncode}: {argv}")
        return completed.returncode
