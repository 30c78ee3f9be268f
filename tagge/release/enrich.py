"""Pull request enrichment of a commit range."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from tagge.core.config import DEFAULT_MAX_CONCURRENCY
from tagge.core.result import Err, Ok, Result
from tagge.github.client import GitHubClient
from tagge.release.errors import ReleaseError
from tagge.release.model import PullRequestMap

logger = logging.getLogger(__name__)


class PullRequestEnricher:
    """Maps commits to the pull request that introduced them.

    One lookup per commit runs on a bounded thread pool. A failed lookup only
    loses that commit's PR number; the other lookups are unaffected.
    """

    def __init__(
        self, client: GitHubClient, *, max_workers: int = DEFAULT_MAX_CONCURRENCY
    ) -> None:
        self.client = client
        self.max_workers = max(1, max_workers)

    def _lookup(self, owner: str, repo: str, commit_id: str) -> int | None:
        result = self.client.pull_numbers_for_commit(owner, repo, commit_id)
        if isinstance(result, Err):
            logger.debug("PR lookup failed for %s: %s", commit_id, result.error)
            return None
        return result.value[0] if result.value else None

    def enrich(
        self, owner: str, repo: str, commit_ids: Iterable[str]
    ) -> Result[PullRequestMap, ReleaseError]:
        if not self.client.has_token:
            return Err(
                ReleaseError(
                    kind="missing_token",
                    message="a GitHub token is required to look up pull requests",
                    hint="pass --gh-token or set GITHUB_TOKEN",
                )
            )

        ids = list(dict.fromkeys(commit_ids))
        if not ids:
            return Ok({})

        found: PullRequestMap = {}
        workers = min(self.max_workers, len(ids))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tagge-pr") as pool:
            futures = {pool.submit(self._lookup, owner, repo, cid): cid for cid in ids}
            for future in as_completed(futures):
                commit_id = futures[future]
                number = future.result()
                if number is not None:
                    found[commit_id] = number

        logger.debug("resolved PRs for %d of %d commits", len(found), len(ids))
        return Ok(found)
