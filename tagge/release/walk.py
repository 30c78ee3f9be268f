"""Commit range walk: everything reachable from HEAD but not from the tag.

The walk mirrors ``git rev-list HEAD ^<tag>``: commits come out of a
priority queue ordered by commit time (newest first). Commits reachable from
the excluded side are marked uninteresting and the mark spreads to their
ancestors. The walk stops once the queue holds only uninteresting commits,
after a few extra rounds that absorb clock skew between branches.
"""

from __future__ import annotations

import heapq
import itertools
import logging

from tagge.core.result import Err, Ok, Result
from tagge.git.repository import CommitInfo, RepositorySource
from tagge.release.errors import ReleaseError
from tagge.release.model import CommitRecord, TagRef

logger = logging.getLogger(__name__)

# Extra rounds after the queue becomes all-uninteresting (git uses 5 too).
_SLOP = 5


class _AncestryWalk:
    def __init__(self, repo: RepositorySource) -> None:
        self._repo = repo
        self._info: dict[str, CommitInfo] = {}
        self._unreadable: set[str] = set()
        self._uninteresting: set[str] = set()
        self._queued: set[str] = set()
        # queued, not yet popped, and not marked uninteresting
        self._interesting_in_queue: set[str] = set()
        self._heap: list[tuple[int, int, str]] = []
        self._counter = itertools.count()

    def _load(self, commit_id: str) -> CommitInfo | None:
        info = self._info.get(commit_id)
        if info is not None:
            return info
        if commit_id in self._unreadable:
            return None

        result = self._repo.read_commit(commit_id)
        if isinstance(result, Err):
            logger.debug("skipping unreadable commit %s: %s", commit_id, result.error.message)
            self._unreadable.add(commit_id)
            return None

        self._info[commit_id] = result.value
        return result.value

    def _push(self, commit_id: str) -> None:
        if commit_id in self._queued:
            return
        info = self._load(commit_id)
        if info is None:
            return
        self._queued.add(commit_id)
        if commit_id not in self._uninteresting:
            self._interesting_in_queue.add(commit_id)
        heapq.heappush(self._heap, (-info.timestamp, next(self._counter), commit_id))

    def _mark_uninteresting(self, commit_id: str) -> None:
        stack = [commit_id]
        while stack:
            current = stack.pop()
            if current in self._uninteresting:
                continue
            self._uninteresting.add(current)
            self._interesting_in_queue.discard(current)
            # Unloaded commits pick the mark up from the set when popped.
            info = self._info.get(current)
            if info is not None:
                stack.extend(info.parents)

    def _everybody_uninteresting(self) -> bool:
        return not self._interesting_in_queue

    def run(self, start: str, hide: str) -> list[CommitInfo]:
        self._mark_uninteresting(hide)
        self._push(hide)
        self._push(start)

        popped: list[str] = []
        slop = _SLOP
        while self._heap:
            _, _, commit_id = heapq.heappop(self._heap)
            self._interesting_in_queue.discard(commit_id)
            info = self._info[commit_id]

            if commit_id in self._uninteresting:
                for parent in info.parents:
                    self._mark_uninteresting(parent)
            else:
                popped.append(commit_id)

            for parent in info.parents:
                self._push(parent)

            if self._everybody_uninteresting():
                slop -= 1
                if slop <= 0:
                    break
            else:
                slop = _SLOP

        logger.debug(
            "walked %d commits (%d loaded, %d unreadable)",
            len(popped),
            len(self._info),
            len(self._unreadable),
        )
        return [self._info[c] for c in popped if c not in self._uninteresting]


def walk_range(repo: RepositorySource, start: str, hide: str) -> tuple[CommitRecord, ...]:
    """Commits reachable from ``start`` and not from ``hide``, newest first."""
    infos = _AncestryWalk(repo).run(start, hide)
    return tuple(CommitRecord(id=info.id, summary=info.summary) for info in infos)


def commits_between(
    repo: RepositorySource, base: TagRef
) -> Result[tuple[CommitRecord, ...], ReleaseError]:
    """Commits on the current branch since ``base`` was tagged."""
    head = repo.head_commit()
    if isinstance(head, Err):
        return Err(
            ReleaseError(
                kind="missing_head",
                message="Failed to get HEAD!",
                hint=head.error.message,
            )
        )
    return Ok(walk_range(repo, head.value, base.target_id))
