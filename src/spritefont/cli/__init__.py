"""Command-line interface for spritefont.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Repeatable character region options
- Quiet output mode
- Debug spritesheet output
- Detailed error reporting
"""

from spritefont.cli.app import cli, main

__all__ = ["cli", "main"]
