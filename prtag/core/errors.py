"""Error codes for CLI exit status.

The release action is judged by its exit status in the workflow run, so
these values are part of the public contract:
- 0: Success (including "this pull request is not a release trigger")
- 1: User error (bad action inputs, malformed event, missing base ref)
- 2: Environment error (gh CLI missing)
- 4: Network error (listing tags or publishing failed)
- 5: I/O error (event file unreadable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
