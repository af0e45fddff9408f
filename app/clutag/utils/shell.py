"""Helpers for running external utilities.

clutag only shells out for small best-effort helpers (clipboard tools),
so commands always run without a shell and with captured output.
"""

import shutil
import subprocess
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a finished external command.

    Attributes:
        stdout: Captured standard output.
        stderr: Captured standard error.
        returncode: Exit status reported by the process.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Trimmed stderr, or the exit status when stderr is empty."""
        return self.stderr.strip() or f"exit status {self.returncode}"


def run_command(
    args: Sequence[str],
    *,
    input_text: str | None = None,
    timeout: float | None = 10.0,
) -> CommandResult:
    """Run a command to completion, feeding it optional stdin.

    Args:
        args: Executable followed by its arguments.
        input_text: Text written to the command's standard input.
        timeout: Seconds to wait before giving up.

    Raises:
        subprocess.TimeoutExpired: The command did not finish in time.
        OSError: The executable could not be started.
    """
    completed = subprocess.run(
        list(args),
        input=input_text,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Return True if an executable called name is on PATH."""
    return shutil.which(name) is not None


def first_available(candidates: Iterable[Sequence[str]]) -> list[str] | None:
    """Return the first candidate command whose executable is installed."""
    for command in candidates:
        if command and command_exists(command[0]):
            return list(command)
    return None
