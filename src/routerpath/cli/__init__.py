"""Command-line interface for routerpath.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- G-code generation from JSON job files
- Dry-run inspection of every operation
- Verbose/quiet output modes
- Detailed error reporting
"""

from routerpath.cli.app import cli, main

__all__ = ["cli", "main"]
