"""
Terminal output for the Workspace Launcher.

Every user-facing line goes through ConsoleReporter so that the launcher,
the bookmarks reader and the interactive prompts share one rich Console and
one set of line prefixes.
"""

from typing import Optional

from rich.console import Console
from rich.text import Text


# Prefix text and style per message kind
ICONS = {
    "status": ("[✓]", "green"),
    "error": ("[✗]", "red"),
    "info": ("[i]", "yellow"),
    "dry_run": ("[DRY RUN]", "bright_black"),
}


def truncate(text: str, limit: int) -> str:
    """Shorten text to limit characters, appending an ellipsis if cut."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class ConsoleReporter:
    """Prints prefixed status lines to a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def _line(self, kind: str, message: str) -> None:
        prefix, style = ICONS[kind]
        self.console.print(Text.assemble((prefix, style), " ", message))

    def status(self, message: str) -> None:
        self._line("status", message)

    def error(self, message: str) -> None:
        self._line("error", message)

    def info(self, message: str) -> None:
        self._line("info", message)

    def dry_run(self, message: str) -> None:
        self._line("dry_run", message)

    def progress(self, current: int, total: int, message: str) -> None:
        """Print a `[current/total]` progress line."""
        self.console.print(
            Text.assemble((f"[{current}/{total}]", "magenta"), " ", message)
        )

    def workspace(self, workspace_id: int, name: str, has_content: bool = True) -> None:
        """Print a workspace listing line; empty workspaces are shown in yellow."""
        self.console.print(
            Text.assemble(
                (f"[{workspace_id}]", "blue"),
                " ",
                (name, "green" if has_content else "yellow"),
            )
        )

    def workspace_list(self, workspaces) -> None:
        for workspace in workspaces:
            self.workspace(workspace.id, workspace.name, workspace.has_content)

    def heading(self, message: str) -> None:
        self.console.print(Text(message, style="cyan"))

    def muted(self, message: str) -> None:
        self.console.print(Text(message, style="bright_black"))

    def bullet(self, message: str, style: str = "green") -> None:
        self.console.print(Text.assemble("  ", ("•", style), " ", message))

    def plain(self, message: str = "") -> None:
        self.console.print(Text(message))

    def blank(self) -> None:
        self.console.print()
