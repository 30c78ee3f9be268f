"""Exit codes for the tagge CLI.

Values are process exit codes and must stay stable:
- 0: Success (including "no tags yet" and a declined confirmation)
- 1: User error (bad arguments, lightweight tag, missing token)
- 2: Environment error (not a repository, no HEAD, signing unavailable)
- 4: Network error (fetch failed, no remote)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
