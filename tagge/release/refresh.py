from __future__ import annotations

import logging
import time
from pathlib import Path

from tagge.core.result import Err, Ok, Result
from tagge.git.repository import Repository
from tagge.release.errors import ReleaseError

logger = logging.getLogger(__name__)


def refresh_repository(path: Path, remote: str) -> Result[None, ReleaseError]:
    """Fetch tags and branches from ``remote``.

    Opens its own ``Repository`` so it can run on a worker thread while the
    caller keeps reading through a different handle.
    """
    repo = Repository(path)

    url = repo.remote_url(remote)
    if isinstance(url, Err):
        return Err(
            ReleaseError(
                kind="no_remote",
                message=f"Could not find git remote {remote}!",
                hint="add a remote or pass --no-fetch",
            )
        )

    logger.debug("fetching tags from %s (%s)", remote, url.value)
    started = time.monotonic()
    fetched = repo.fetch_tags(remote)
    if isinstance(fetched, Err):
        return Err(
            ReleaseError(
                kind="fetch_failed",
                message=f"git fetch from {remote} failed",
                hint=fetched.error.message,
            )
        )

    logger.debug("fetch finished in %.2fs", time.monotonic() - started)
    return Ok(None)
