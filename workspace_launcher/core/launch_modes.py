"""
Launch mode options.

A LaunchOptions value is built once per invocation from the command line
and passed to the launcher, which only ever reads it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LaunchOptions:
    """
    How a launch pass should behave.

    Attributes:
        dry_run: Report intended actions without spawning any process
        verbose: Let child processes write to the terminal
    """

    dry_run: bool = False
    verbose: bool = False

    @classmethod
    def live(cls, verbose: bool = False) -> "LaunchOptions":
        return cls(dry_run=False, verbose=verbose)

    @classmethod
    def preview(cls, verbose: bool = False) -> "LaunchOptions":
        """Dry-run options."""
        return cls(dry_run=True, verbose=verbose)

    @property
    def quiet(self) -> bool:
        """Whether child process output should be suppressed."""
        return not self.verbose

    def get_description(self) -> str:
        parts = ["dry run" if self.dry_run else "live"]
        if self.verbose:
            parts.append("verbose")
        return ", ".join(parts)
