"""clutag - triage a directory tree by tagging every path beneath it."""

__version__ = "0.1.0"
