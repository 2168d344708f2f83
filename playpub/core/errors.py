"""Process exit codes.

A publish run ends with exactly one of these codes. They are stable and safe
to branch on in CI scripts.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad input, invalid status/fraction, unknown track)
    - 2: Environment error (missing access token)
    - 4: Network error (store rejected a call or was unreachable)
    - 5: I/O error (release, mapping, notes or symbols file unreadable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
