"""CLI commands for clutag.

This package contains all subcommand implementations.
"""

from clutag.cli.commands import config, info, init, next_entry, review, shuf, status

__all__ = ["config", "info", "init", "next_entry", "review", "shuf", "status"]
