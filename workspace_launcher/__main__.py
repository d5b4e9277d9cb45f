#!/usr/bin/env python3
"""
Package entry point for the Workspace Launcher.

This allows the package to be executed with: python -m workspace_launcher
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
