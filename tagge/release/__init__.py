"""Release resolution engine.

- semver: tag parsing and version bumps
- tags: latest annotated release tag
- walk: commits since that tag
- enrich: commit -> pull request lookups
- changelog: pure formatting
- orchestrator: sequencing, refresh/enrichment joining, tag creation
"""

from __future__ import annotations

from tagge.release.errors import ReleaseError
from tagge.release.model import (
    CommitRecord,
    ReleaseBump,
    ReleaseContext,
    ReleaseOptions,
    ReleaseOutcome,
    ReleaseStage,
    TagRef,
)
from tagge.release.orchestrator import ReleaseOrchestrator
from tagge.release.semver import SemVer, parse_tag

__all__ = [
    "CommitRecord",
    "ReleaseBump",
    "ReleaseContext",
    "ReleaseError",
    "ReleaseOptions",
    "ReleaseOrchestrator",
    "ReleaseOutcome",
    "ReleaseStage",
    "SemVer",
    "TagRef",
    "parse_tag",
]
