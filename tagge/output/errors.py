"""Release error presentation and exit code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tagge.core.errors import ErrorCode
from tagge.output.console import Style
from tagge.release.errors import ReleaseError

if TYPE_CHECKING:
    from tagge.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    # Not an error: the user just has to create the first tag.
    if error.kind == "no_tags":
        console.print(error.message)
    else:
        console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "no_tags":
            return int(ErrorCode.OK)
        case "tag_not_annotated" | "invalid_input" | "missing_token":
            return int(ErrorCode.USER_ERROR)
        case "no_remote" | "fetch_failed":
            return int(ErrorCode.NETWORK_ERROR)
        case "repository_not_found" | "missing_head" | "git_failed" | "signing_failed":
            return int(ErrorCode.ENV_ERROR)
    return int(ErrorCode.ENV_ERROR)
