"""
Workspace Launcher: launch groups of shell commands and browser bookmark
folders defined in a TOML configuration file.
"""

__version__ = "0.3.0"
