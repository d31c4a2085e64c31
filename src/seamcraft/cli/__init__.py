"""Command-line interface for seamcraft.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Segment and length listing for a pattern piece
- Seam allowance polygon computation with optional JSON export
- Closest-segment queries
"""

from seamcraft.cli.app import cli, main

__all__ = ["cli", "main"]
