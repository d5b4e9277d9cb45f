"""
Pytest configuration and shared fixtures for workspace launcher tests.

This module provides sample bookmark documents, configuration files in
temporary directories, a recording process runner and a scripted input
stream for the interactive prompts.
"""

import json
from io import StringIO
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pytest
from rich.console import Console

from workspace_launcher.config.configuration import Configuration
from workspace_launcher.core.process_runner import ProcessRunner
from workspace_launcher.utils.console_output import ConsoleReporter
from workspace_launcher.utils.error_handler import CommandSpawnError

# ============================================================================
# Test Data
# ============================================================================

SAMPLE_BOOKMARKS = {
    "checksum": "0123456789abcdef",
    "roots": {
        "bookmark_bar": {
            "type": "folder",
            "name": "Bookmarks bar",
            "children": [
                {
                    "type": "folder",
                    "name": "Work",
                    "children": [
                        {"type": "url", "name": "Docs", "url": "https://docs.example.com"},
                        {
                            "type": "folder",
                            "name": "Tools",
                            "children": [
                                {"type": "url", "name": "CI", "url": "https://ci.example.com"}
                            ],
                        },
                        {
                            "type": "url",
                            "name": "Tracker",
                            "url": "https://tracker.example.com",
                        },
                    ],
                },
                {"type": "url", "name": "News", "url": "https://news.example.com"},
                {"type": "folder", "name": "Empty", "children": []},
            ],
        },
        "other": {
            "type": "folder",
            "name": "Other bookmarks",
            "children": [
                {"type": "url", "name": "Recipes", "url": "https://food.example.com"}
            ],
        },
        "synced": {"type": "folder", "name": "Mobile bookmarks", "children": []},
    },
    "version": 1,
}

SAMPLE_CONFIG = """
[settings]
bookmarks_file = "{bookmarks_file}"
bookmarks_open_in = "xdg-open"

[[workspaces]]
id = 1
name = "Development"
commands = ["code ~/projects", "echo ready # announce"]

[[workspaces]]
id = 2
name = "Reading"
commands = []
bookmarks_folder = "Bookmarks bar/Work"

[[workspaces]]
id = 4
name = "Empty"
"""


# ============================================================================
# Helpers
# ============================================================================


class ScriptedInput:
    """
    Input stream for rich prompts.

    Each readline() returns the next scripted answer; running out of
    answers raises EOFError so a test that prompts too often fails loudly
    instead of looping on the default value.
    """

    def __init__(self, answers: Sequence[str]):
        self.answers = list(answers)

    def readline(self) -> str:
        if not self.answers:
            raise EOFError("no scripted input left")
        return self.answers.pop(0) + "\n"

    @property
    def exhausted(self) -> bool:
        return not self.answers


class FakeRunner(ProcessRunner):
    """
    ProcessRunner that records argv lists instead of spawning processes.

    Args:
        results: Maps a substring of the joined argv to an exit status or
            to an exception to raise; the first matching entry wins
        default: Exit status for argv lists with no matching entry
    """

    def __init__(
        self,
        results: Optional[Dict[str, Union[int, Exception]]] = None,
        default: int = 0,
        shell: str = "bash",
    ):
        super().__init__(shell=shell)
        self.results = results or {}
        self.default = default
        self.calls: List[List[str]] = []
        self.quiet_flags: List[bool] = []

    def run(self, argv, quiet=True) -> int:
        argv = list(argv)
        self.calls.append(argv)
        self.quiet_flags.append(quiet)

        joined = " ".join(argv)
        for needle, result in self.results.items():
            if needle in joined:
                if isinstance(result, Exception):
                    raise result
                return result
        return self.default

    @property
    def shell_commands(self) -> List[str]:
        """The command strings passed to `<shell> -c`."""
        return [argv[2] for argv in self.calls if argv[1:2] == ["-c"]]


def spawn_failure(program: str) -> CommandSpawnError:
    return CommandSpawnError([program], "No such file or directory")


def output_of(reporter: ConsoleReporter) -> str:
    """Everything the reporter has printed so far."""
    return reporter.console.file.getvalue()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def reporter() -> ConsoleReporter:
    """Reporter writing to an in-memory console without colour codes."""
    console = Console(file=StringIO(), width=200, highlight=False, color_system=None)
    return ConsoleReporter(console)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def bookmarks_document() -> dict:
    return json.loads(json.dumps(SAMPLE_BOOKMARKS))


@pytest.fixture
def bookmarks_file(tmp_path, bookmarks_document) -> Path:
    """A Chromium Bookmarks JSON file in a temporary directory."""
    path = tmp_path / "Bookmarks"
    path.write_text(json.dumps(bookmarks_document), encoding="utf-8")
    return path


@pytest.fixture
def write_config(tmp_path, bookmarks_file):
    """Factory writing TOML text to config.toml and returning its path."""

    def _write(text: Optional[str] = None, name: str = "config.toml") -> Path:
        if text is None:
            text = SAMPLE_CONFIG.format(bookmarks_file=bookmarks_file.as_posix())
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_path(write_config) -> Path:
    return write_config()


@pytest.fixture
def configuration(config_path) -> Configuration:
    return Configuration(config_path)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep XDG config/state lookups inside the test's temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))
    monkeypatch.delenv("EDITOR", raising=False)
