"""
Data models for the Workspace Launcher.

This module defines the bookmark entries extracted from a browser's
bookmarks file and the per-item outcomes collected while launching a
workspace.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Bookmark:
    """A single `url` node extracted from a bookmarks folder."""

    name: str
    url: str


@dataclass
class LaunchOutcome:
    """Result of one command or one bookmark within a launch."""

    label: str
    succeeded: bool
    kind: str = "command"  # "command", "bookmark" or "bookmarks"
    planned: bool = False  # dry run: recorded but never executed
    detail: Optional[str] = None


@dataclass
class LaunchReport:
    """
    Aggregated outcomes of launching one workspace.

    Used for display only; never persisted.
    """

    workspace_name: str
    outcomes: List[LaunchOutcome] = field(default_factory=list)

    def add(self, outcome: LaunchOutcome) -> LaunchOutcome:
        self.outcomes.append(outcome)
        return outcome

    @property
    def failures(self) -> List[LaunchOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def successes(self) -> List[LaunchOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "workspace_name": self.workspace_name,
            "total": len(self.outcomes),
            "failed": len(self.failures),
            "outcomes": [
                {
                    "label": o.label,
                    "kind": o.kind,
                    "succeeded": o.succeeded,
                    "planned": o.planned,
                    "detail": o.detail,
                }
                for o in self.outcomes
            ],
        }
