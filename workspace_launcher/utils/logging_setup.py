"""
Logging configuration for the Workspace Launcher.

This module sets up file logging under the XDG state directory and, in
verbose mode, a stderr handler for debugging output.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional


def get_log_dir() -> Path:
    """Return the directory log files are written to."""
    state_home = os.environ.get("XDG_STATE_HOME") or str(
        Path.home() / ".local" / "state"
    )
    return Path(state_home) / "workspace-launcher" / "logs"


def setup_logging(
    verbose: bool = False,
    log_dir: Optional[Path] = None,
    log_file: str = "workspace_launcher.log",
) -> Path:
    """
    Set up logging configuration.

    Args:
        verbose: Also log DEBUG records to stderr
        log_dir: Optional log directory override
        log_file: Log file name inside log_dir

    Returns:
        Path of the log file
    """
    log_dir = Path(log_dir) if log_dir else get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / log_file

    # Configure logging format
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    handlers = []

    # File handler
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(log_format, date_format))
    handlers.append(file_handler)

    # Console handler, stderr so it never mixes with launch progress lines
    if verbose:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(log_format, date_format))
        handlers.append(console_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Workspace Launcher starting - Log file: {log_path}")

    return log_path
