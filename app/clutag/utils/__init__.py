"""Utility modules for clutag.

This module exports commonly used utility functions.
"""

from clutag.utils.clipboard import copy_to_clipboard
from clutag.utils.formatting import (
    console,
    err_console,
    format_path,
    format_tag,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from clutag.utils.shell import CommandResult, command_exists, first_available, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "copy_to_clipboard",
    "err_console",
    "first_available",
    "format_path",
    "format_tag",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
