"""Command-line interface for polyuntangle.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for batch decomposition
- Verbose/quiet output modes
- Intersection tables and simplicity checks
- Detailed error reporting
"""

from polyuntangle.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
