"""Latest release tag discovery."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tagge.core.result import Err, Ok, Result
from tagge.git.repository import RepositorySource
from tagge.release.errors import ReleaseError
from tagge.release.model import TagRef
from tagge.release.semver import SemVer, parse_tag

logger = logging.getLogger(__name__)


def highest_version_tag(names: Iterable[str]) -> tuple[str, SemVer] | None:
    """Pick the name with the greatest version.

    Names that do not parse are ignored. On equal versions the first name
    seen wins.
    """
    best: tuple[str, SemVer] | None = None
    for name in names:
        version = parse_tag(name)
        if version is None:
            logger.debug("skipping non-semver tag %r", name)
            continue
        if best is None or version > best[1]:
            best = (name, version)
    return best


def resolve_latest_tag(repo: RepositorySource) -> Result[TagRef, ReleaseError]:
    """Resolve the highest semver tag to an annotated tag.

    A lightweight tag that wins the version comparison fails resolution; there
    is no fallback to the next-highest version.
    """
    names = repo.tag_names()
    if isinstance(names, Err):
        return Err(ReleaseError(kind="git_failed", message=names.error.message))

    best = highest_version_tag(names.value)
    if best is None:
        return Err(
            ReleaseError(
                kind="no_tags",
                message="No tags found! Please create the first tag manually!",
                hint='git tag -a v0.1.0 -s -m "Release v0.1.0"',
            )
        )

    name, version = best
    logger.debug("latest version tag: %s (%s)", name, version)

    peeled = repo.peel_tag(name)
    if isinstance(peeled, Err):
        return Err(
            ReleaseError(
                kind="tag_not_annotated",
                message=f"latest tag {name} cannot be resolved to an annotated tag",
                hint=peeled.error.message,
            )
        )

    tag = peeled.value
    return Ok(TagRef(name=name, tag_id=tag.tag_id, target_id=tag.target_id, version=version))
