"""Process exit codes.

The numeric values are part of the CLI contract and must stay stable:
- 0: Success, including runs where single repositories failed
- 1: User error (unsupported shell)
- 2: Environment error (no working directory, no cache directory)
- 5: I/O error (manifest could not be written or removed)
- 70: Internal error (unresolvable command)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5
    INTERNAL_ERROR = 70
