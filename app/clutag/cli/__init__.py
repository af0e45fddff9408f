"""CLI package for clutag.

This package contains the Typer application and all subcommands.
"""

from clutag.cli.main import app

__all__ = ["app"]
