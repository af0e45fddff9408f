"""Best-effort clipboard access through external utilities."""

import logging
import subprocess

from clutag.utils.shell import first_available, run_command

logger = logging.getLogger(__name__)

# Tried in order; the first one installed wins
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("xclip", "-selection", "clipboard"),
    ("wl-copy",),
    ("pbcopy",),
)


def find_clipboard_command() -> list[str] | None:
    """Return the first installed clipboard command, or None."""
    return first_available(CLIPBOARD_COMMANDS)


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    Args:
        text: Text to copy, typically an absolute path.

    Returns:
        True if a clipboard utility accepted the text, False if none is
        installed or the utility failed. Callers should show the text
        themselves on False.
    """
    command = find_clipboard_command()
    if command is None:
        logger.debug("No clipboard utility found")
        return False

    try:
        result = run_command(command, input_text=text, timeout=5.0)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Clipboard command %s failed: %s", command[0], e)
        return False

    if not result.success:
        logger.warning("Clipboard command %s failed: %s", command[0], result.error_text)
        return False
    return True
