"""Changelog and tag message rendering. Pure functions, no I/O."""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from tagge.release.model import CommitRecord, PullRequestMap

NO_NEW_COMMITS = "No new commits since the last release."
CHANGELOG_HEADER = "Changelog:"
PR_NOT_FOUND = "(N/A)"


def format_commit_line(
    commit: CommitRecord,
    *,
    include_sha: bool = False,
    pr_lookup: bool = False,
    pr_number: int | None = None,
) -> str:
    """Render ``[<sha7> ]<summary>[ (#N)| (N/A)]``.

    ``(N/A)`` distinguishes "looked up, nothing found" from "not looked up".
    """
    parts: list[str] = []
    if include_sha:
        parts.append(commit.short_id)
    parts.append(commit.summary)
    if pr_number is not None:
        parts.append(f"(#{pr_number})")
    elif pr_lookup:
        parts.append(PR_NOT_FOUND)
    return " ".join(p for p in parts if p)


def format_commit_lines(
    commits: Sequence[CommitRecord],
    *,
    include_sha: bool = False,
    pr_numbers: PullRequestMap | None = None,
) -> list[str]:
    """Format a newest-first range; ``pr_numbers=None`` means no PR lookup ran."""
    return [
        format_commit_line(
            c,
            include_sha=include_sha,
            pr_lookup=pr_numbers is not None,
            pr_number=pr_numbers.get(c.id) if pr_numbers is not None else None,
        )
        for c in commits
    ]


def format_changelog(lines: Sequence[str]) -> str:
    if not lines:
        return NO_NEW_COMMITS
    return "\n".join([CHANGELOG_HEADER, *(f" - {line}" for line in lines)])


def format_release_message(tag: str, changelog: str) -> str:
    return f"Release {tag}\n\n{changelog}"


def format_tag_command(tag: str, message: str) -> str:
    """The ``git tag`` command a dry run would have executed."""
    return shlex.join(["git", "tag", "-a", tag, "-s", "-m", message])
