from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ReleaseErrorKind = Literal[
    "repository_not_found",
    "no_remote",
    "fetch_failed",
    "missing_head",
    "no_tags",
    "tag_not_annotated",
    "missing_token",
    "invalid_input",
    "signing_failed",
    "git_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
