"""
Input validation utilities for the Workspace Launcher.

This module provides validation functions for command-line arguments
and interactive prompt input.
"""

import re
from typing import Iterable, List, Optional, Tuple

from workspace_launcher.utils.error_handler import ValidationError

MAX_INPUT_LENGTH = 1000
MAX_NAME_LENGTH = 100

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

DANGEROUS_COMMAND_PATTERNS = [
    re.compile(r"^rm\s+-rf\s+/"),
    re.compile(r">\s*/dev/null"),
    re.compile(r":\(\)\s*\{\s*:\|:&\s*\}\s*;"),  # fork bomb
]


def sanitize_input(value: Optional[str]) -> str:
    """Remove control characters and cap the length of raw user input."""
    if not value:
        return ""
    return _CONTROL_CHARS.sub("", value)[:MAX_INPUT_LENGTH]


def parse_selection(selection: Optional[str]) -> List[int]:
    """
    Parse a workspace selection string.

    Accepts comma-separated integers and inclusive ranges, e.g. "1,3-5,7".
    Parts that are not numbers and ranges whose start exceeds their end are
    ignored.

    Args:
        selection: Raw selection string

    Returns:
        Sorted list of unique workspace IDs
    """
    if not selection:
        return []

    ids = set()
    for part in (p.strip() for p in selection.split(",")):
        if not part:
            continue
        if "-" in part:
            start_text, _, end_text = part.partition("-")
            try:
                start, end = int(start_text.strip()), int(end_text.strip())
            except ValueError:
                continue
            if start <= end:
                ids.update(range(start, end + 1))
        else:
            try:
                ids.add(int(part))
            except ValueError:
                continue

    return sorted(ids)


def validate_selection(selection: Optional[str]) -> List[int]:
    """
    Parse a selection and require at least one ID.

    Raises:
        ValidationError: If no valid workspace IDs were given
    """
    ids = parse_selection(selection)
    if not ids:
        raise ValidationError("No valid workspace IDs provided")
    return ids


def validate_workspace_name(
    name: Optional[str], existing_names: Iterable[str] = ()
) -> Tuple[bool, Optional[str]]:
    """
    Validate a workspace name against length and uniqueness rules.

    Args:
        name: Candidate name
        existing_names: Names of the other workspaces

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "Workspace name cannot be empty"

    if len(name) > MAX_NAME_LENGTH:
        return False, f"Workspace name too long (max {MAX_NAME_LENGTH} characters)"

    trimmed = name.strip()
    if any(other.lower() == trimmed.lower() for other in existing_names):
        return False, f'Workspace "{trimmed}" already exists'

    return True, None


def validate_command(command: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Check a command before it is stored in a workspace.

    Returns:
        Tuple of (is_valid, warning); warning is set for commands that look
        dangerous but may still be saved after confirmation.
    """
    if not command or not command.strip():
        return False, None

    trimmed = command.strip()
    for pattern in DANGEROUS_COMMAND_PATTERNS:
        if pattern.search(trimmed):
            return True, "This command may be dangerous. Please verify before saving."

    return True, None
