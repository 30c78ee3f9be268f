"""Release run sequencing.

One run moves through the ``ReleaseStage`` states:

    START -> BRANCH_CHECKED -> [FETCH_IN_FLIGHT] -> TAG_RESOLVED
          -> COMMITS_WALKED -> [PR_ENRICHMENT_JOINED] -> FORMATTED
          -> [TAG_CREATED] -> DONE

The refresh (git fetch) and the PR enrichment are the only concurrent
pieces. The refresh is a future on its own single-thread executor with its
own repository handle. Without PR enrichment it is joined before the tag is
resolved; with PR enrichment it overlaps the API calls and is joined right
before formatting, or as soon as tag resolution or the walk fails. A failed
refresh always wins over the error it was joined on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from tagge.core.config import Config
from tagge.core.result import Err, Ok, Result
from tagge.git.remote import GitHubRepo
from tagge.git.repository import RepositorySource
from tagge.output.console import ConsoleProtocol, Style
from tagge.release.changelog import (
    format_changelog,
    format_commit_lines,
    format_release_message,
    format_tag_command,
)
from tagge.release.enrich import PullRequestEnricher
from tagge.release.errors import ReleaseError
from tagge.release.model import (
    PullRequestMap,
    ReleaseContext,
    ReleaseOptions,
    ReleaseOutcome,
    ReleaseStage,
    TagRef,
)
from tagge.release.semver import SemVer, apply_suffix, parse_tag
from tagge.release.signer import TagSigner
from tagge.release.tags import resolve_latest_tag
from tagge.release.walk import commits_between

logger = logging.getLogger(__name__)

RefreshFn = Callable[[], Result[None, ReleaseError]]
ConfirmFn = Callable[[str], bool]

CONFIRM_PROMPT = "Are you sure you want to create a tag on this branch?"


def compute_target(
    latest: SemVer, options: ReleaseOptions
) -> tuple[SemVer | None, str | None]:
    """Target version and tag name for a run (both None without bump/override)."""
    if options.tag_override is not None:
        tag = apply_suffix(options.tag_override.strip(), options.suffix)
        return parse_tag(tag), tag
    if options.bump is not None:
        version = latest.bump(options.bump)
        return version, apply_suffix(version.to_tag(), options.suffix)
    return None, None


class ReleaseOrchestrator:
    def __init__(
        self,
        *,
        repo: RepositorySource,
        console: ConsoleProtocol,
        signer: TagSigner,
        config: Config | None = None,
        refresh: RefreshFn | None = None,
        enricher: PullRequestEnricher | None = None,
        github_repo: GitHubRepo | None = None,
        confirm: ConfirmFn | None = None,
    ) -> None:
        self.repo = repo
        self.console = console
        self.signer = signer
        self.config = config if config is not None else Config()
        self.refresh = refresh
        self.enricher = enricher
        self.github_repo = github_repo
        self.confirm = confirm
        self._stages: list[ReleaseStage] = []

    def _enter(self, stage: ReleaseStage) -> None:
        logger.debug("stage: %s", stage.value)
        self._stages.append(stage)

    def _outcome(self, context: ReleaseContext | None, **kwargs: str | None) -> ReleaseOutcome:
        return ReleaseOutcome(context=context, stages=tuple(self._stages), **kwargs)

    def run(self, options: ReleaseOptions) -> Result[ReleaseOutcome, ReleaseError]:
        self._stages = []
        self._enter(ReleaseStage.START)

        if options.use_pr:
            ready = self._check_enrichment_ready()
            if isinstance(ready, Err):
                return ready

        if not self._check_branch(options):
            self.console.print("Aborted!")
            return Ok(self._outcome(None, aborted_reason="declined"))
        self._enter(ReleaseStage.BRANCH_CHECKED)

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="tagge-refresh") as pool:
            pending: Future[Result[None, ReleaseError]] | None = None
            if options.fetch and self.refresh is not None:
                pending = pool.submit(self.refresh)
                self._enter(ReleaseStage.FETCH_IN_FLIGHT)
                if not options.use_pr:
                    joined = self._join(pending)
                    if isinstance(joined, Err):
                        return joined
                    pending = None

            return self._resolve_and_release(options, pending)

    def _resolve_and_release(
        self,
        options: ReleaseOptions,
        pending: Future[Result[None, ReleaseError]] | None,
    ) -> Result[ReleaseOutcome, ReleaseError]:
        resolved = resolve_latest_tag(self.repo)
        if isinstance(resolved, Err) and pending is not None:
            # The pending fetch may bring in the tags that were missing.
            joined = self._join(pending)
            if isinstance(joined, Err):
                return joined
            pending = None
            resolved = resolve_latest_tag(self.repo)
        if isinstance(resolved, Err):
            if resolved.error.kind == "no_tags":
                self.console.print(resolved.error.message)
                return Ok(self._outcome(None, aborted_reason="no_tags"))
            return resolved
        tag = resolved.value
        self._enter(ReleaseStage.TAG_RESOLVED)

        walked = commits_between(self.repo, tag)
        if isinstance(walked, Err):
            return self._refresh_error_or(pending, walked.error)
        commits = walked.value
        self._enter(ReleaseStage.COMMITS_WALKED)

        pr_numbers: PullRequestMap | None = None
        if options.use_pr:
            enriched = self._enrich([c.id for c in commits])
            # Join before acting on the enrichment result so a failed
            # refresh is never masked.
            if pending is not None:
                joined = self._join(pending)
                if isinstance(joined, Err):
                    return joined
            if isinstance(enriched, Err):
                return enriched
            pr_numbers = enriched.value
            self._enter(ReleaseStage.PR_ENRICHMENT_JOINED)

        target_version, target_tag = compute_target(tag.version, options)
        lines = format_commit_lines(commits, include_sha=options.use_sha, pr_numbers=pr_numbers)
        changelog = format_changelog(lines)
        message = format_release_message(target_tag, changelog) if target_tag else None
        context = ReleaseContext(
            resolved_tag=tag,
            commits=commits,
            target_version=target_version,
            target_tag=target_tag,
            pr_numbers=pr_numbers,
            changelog=changelog,
            message=message,
        )
        self._enter(ReleaseStage.FORMATTED)

        self._print_latest(tag)

        if target_tag is None or message is None:
            self._print_commits(lines)
            self._enter(ReleaseStage.DONE)
            return Ok(self._outcome(context))

        exists = self._ensure_tag_absent(target_tag)
        if isinstance(exists, Err):
            return exists

        if options.dry_run:
            self.console.print(f"New version: {target_tag}")
            self.console.newline()
            self.console.print("Command:", Style.BOLD)
            self.console.print(format_tag_command(target_tag, message))
            self.console.newline()
            self.console.print(changelog)
            self._enter(ReleaseStage.DONE)
            return Ok(self._outcome(context))

        created = self.signer.create_signed_tag(target_tag, message)
        if isinstance(created, Err):
            return created
        self._enter(ReleaseStage.TAG_CREATED)

        self.console.success(f"Created tag {target_tag}")
        self.console.print(f"  SHA: {created.value}")
        self.console.print(f"  Version: {target_tag}")
        self.console.newline()
        self.console.print(changelog)
        self._enter(ReleaseStage.DONE)
        return Ok(self._outcome(context, created_tag_id=created.value))

    def _check_enrichment_ready(self) -> Result[None, ReleaseError]:
        if self.enricher is None or not self.enricher.client.has_token:
            return Err(
                ReleaseError(
                    kind="missing_token",
                    message="--use-pr needs a GitHub token",
                    hint="pass --gh-token or set GITHUB_TOKEN",
                )
            )
        if self.github_repo is None:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message="cannot determine the GitHub repository for PR lookups",
                    hint="set github.repo = \"owner/name\" in .tagge.toml",
                )
            )
        return Ok(None)

    def _check_branch(self, options: ReleaseOptions) -> bool:
        """Warn off release branches; False if the user declined to continue."""
        branch = self.repo.current_branch()
        allowed = self.config.release.branches
        if branch is None or branch in allowed:
            return True

        expected = " or ".join(f"'{b}'" for b in allowed)
        self.console.warning(f"You are on branch '{branch}', not {expected}!")

        needs_confirmation = options.interactive and not options.dry_run and options.wants_tag
        if not needs_confirmation or self.confirm is None:
            return True
        return self.confirm(CONFIRM_PROMPT)

    def _join(
        self, pending: Future[Result[None, ReleaseError]]
    ) -> Result[None, ReleaseError]:
        result = pending.result()
        if isinstance(result, Ok):
            logger.debug("refresh joined")
        return result

    def _refresh_error_or(
        self,
        pending: Future[Result[None, ReleaseError]] | None,
        error: ReleaseError,
    ) -> Err[ReleaseError]:
        """Join a still-pending refresh; its failure takes precedence over ``error``."""
        if pending is not None:
            joined = self._join(pending)
            if isinstance(joined, Err):
                return joined
        return Err(error)

    def _enrich(self, commit_ids: list[str]) -> Result[PullRequestMap, ReleaseError]:
        assert self.enricher is not None and self.github_repo is not None
        return self.enricher.enrich(self.github_repo.owner, self.github_repo.name, commit_ids)

    def _ensure_tag_absent(self, name: str) -> Result[None, ReleaseError]:
        names = self.repo.tag_names()
        if isinstance(names, Err):
            return Err(ReleaseError(kind="git_failed", message=names.error.message))
        if name in names.value:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"tag {name} already exists",
                    hint="choose another bump or pass --tag",
                )
            )
        return Ok(None)

    def _print_latest(self, tag: TagRef) -> None:
        self.console.print("Latest tag:", Style.BOLD)
        self.console.print(f"  SHA: {tag.tag_id}")
        self.console.print(f"  Version: {tag.version.to_tag()}")
        self.console.newline()

    def _print_commits(self, lines: list[str]) -> None:
        self.console.print("Commits:", Style.BOLD)
        if not lines:
            self.console.print(f"  {format_changelog(lines)}")
        for line in lines:
            self.console.print(f"  {line}")
