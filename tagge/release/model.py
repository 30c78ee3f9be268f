from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from tagge.release.semver import SemVer


ReleaseBump = Literal["major", "minor", "patch"]

SHORT_SHA_LENGTH = 7


@dataclass(frozen=True, slots=True)
class TagRef:
    """The resolved release tag.

    ``tag_id`` is the annotated tag object, ``target_id`` the commit it peels to.
    """

    name: str
    tag_id: str
    target_id: str
    version: SemVer


@dataclass(frozen=True, slots=True)
class CommitRecord:
    id: str
    summary: str

    @property
    def short_id(self) -> str:
        return self.id[:SHORT_SHA_LENGTH]


# commit id -> first pull request number
PullRequestMap = dict[str, int]


class ReleaseStage(Enum):
    START = "start"
    BRANCH_CHECKED = "branch_checked"
    FETCH_IN_FLIGHT = "fetch_in_flight"
    TAG_RESOLVED = "tag_resolved"
    COMMITS_WALKED = "commits_walked"
    PR_ENRICHMENT_JOINED = "pr_enrichment_joined"
    FORMATTED = "formatted"
    TAG_CREATED = "tag_created"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    bump: ReleaseBump | None = None
    tag_override: str | None = None
    suffix: str | None = None
    use_sha: bool = False
    use_pr: bool = False
    dry_run: bool = False
    fetch: bool = True
    # When False the branch confirmation prompt is skipped.
    interactive: bool = True

    @property
    def wants_tag(self) -> bool:
        return self.bump is not None or self.tag_override is not None


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything one run learned about the repository. Never persisted."""

    resolved_tag: TagRef
    commits: tuple[CommitRecord, ...]
    target_version: SemVer | None = None
    target_tag: str | None = None
    pr_numbers: PullRequestMap | None = None
    changelog: str = ""
    message: str | None = None

    @property
    def latest_version(self) -> SemVer:
        return self.resolved_tag.version


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    context: ReleaseContext | None
    stages: tuple[ReleaseStage, ...] = field(default_factory=tuple)
    created_tag_id: str | None = None
    # "no_tags" or "declined" when the run stopped early without an error
    aborted_reason: str | None = None
