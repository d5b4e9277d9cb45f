"""
Configuration package: pydantic models and the TOML-backed Configuration.
"""

from .configuration import Configuration, get_config_dir, get_default_config_path
from .pydantic_config import LauncherConfig, LauncherSettings, Workspace

__all__ = [
    "Configuration",
    "get_config_dir",
    "get_default_config_path",
    "LauncherConfig",
    "LauncherSettings",
    "Workspace",
]
