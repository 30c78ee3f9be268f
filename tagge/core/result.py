"""Result type for explicit error handling.

Fallible operations in tagge return ``Result[T, E]`` instead of raising.
Callers branch on the variant, usually with ``isinstance`` or ``match``:

    match resolve_latest_tag(repo):
        case Ok(tag):
            print(tag.name)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
