"""Exit codes for the ``bf`` command.

The numeric values are part of the CLI contract and should remain stable:
- 0: Success
- 1: User error (bad ``key=value`` seed, unknown product or platform)
- 2: Environment error (plugin could not be loaded)
- 3: Build error (flow failed, package build command failed)
- 5: I/O error (artifact or folder missing)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
