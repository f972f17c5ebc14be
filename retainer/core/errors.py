"""Error codes for CLI exit status.

Each failure kind maps to a stable shell exit code:
- 0: Success
- 1: User error (invalid retention count)
- 2: Reserved for command-line usage errors reported by typer/click
- 3: Config error (unreadable or invalid retainer.toml)
- 5: I/O error (data file missing, unreadable or malformed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands. Values must remain stable."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 3
    IO_ERROR = 5
