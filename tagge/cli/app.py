from __future__ import annotations

from enum import Enum
from functools import partial
from pathlib import Path

import typer

from tagge import __version__
from tagge.cli.context import build_context, is_interactive_terminal, resolve_github_repo
from tagge.core.errors import ErrorCode
from tagge.core.result import Err
from tagge.github.client import GitHubClient
from tagge.output.errors import print_release_error, release_error_exit_code
from tagge.output.logging import setup_logging
from tagge.release.enrich import PullRequestEnricher
from tagge.release.model import ReleaseOptions
from tagge.release.orchestrator import ReleaseOrchestrator
from tagge.release.refresh import refresh_repository
from tagge.release.signer import GitTagSigner


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Semantic versioning and tagging for git repositories.",
)


class BumpKind(str, Enum):
    patch = "patch"
    minor = "minor"
    major = "major"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def _confirm(prompt: str) -> bool:
    return typer.confirm(prompt, default=False)


@app.command()
def release(
    bump: BumpKind | None = typer.Argument(
        None,
        help="patch: v1.0.0 -> v1.0.1, minor: v1.0.0 -> v1.1.0, major: v1.0.0 -> v2.0.0",
        show_default=False,
    ),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Override the auto-generated tag"),
    suffix: str | None = typer.Option(None, "--suffix", help="Extra suffix for the tag"),
    use_sha: bool = typer.Option(False, "--use-sha", "-s", help="Use commit SHA in changelog"),
    use_pr: bool = typer.Option(False, "--use-pr", "-r", help="Use PR numbers in changelog"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Only print the tag command, do not create a tag"
    ),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Path to the git repository"),
    no_fetch: bool = typer.Option(False, "--no-fetch", help="Skip fetching git tags"),
    gh_token: str | None = typer.Option(
        None,
        "--gh-token",
        envvar="GITHUB_TOKEN",
        help="GitHub token for pull request lookups",
        show_envvar=True,
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    debug: bool = typer.Option(False, "--debug", help="Add additional debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Show the latest release tag and the commits since; optionally tag the next version."""
    setup_logging(debug=debug)
    ctx = build_context(path)

    enricher: PullRequestEnricher | None = None
    github_repo = None
    if use_pr:
        client = GitHubClient(token=gh_token or "")
        enricher = PullRequestEnricher(client, max_workers=ctx.config.github.max_concurrency)
        github_repo = resolve_github_repo(ctx.repo, ctx.config)

    orchestrator = ReleaseOrchestrator(
        repo=ctx.repo,
        console=ctx.console,
        signer=GitTagSigner(ctx.repo),
        config=ctx.config,
        refresh=partial(refresh_repository, ctx.repo.path, ctx.config.release.remote),
        enricher=enricher,
        github_repo=github_repo,
        confirm=_confirm,
    )

    options = ReleaseOptions(
        bump=bump.value if bump is not None else None,
        tag_override=tag,
        suffix=suffix,
        use_sha=use_sha,
        use_pr=use_pr,
        dry_run=dry_run,
        fetch=not no_fetch,
        interactive=not yes and is_interactive_terminal(),
    )

    result = orchestrator.run(options)
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))

    raise typer.Exit(code=int(ErrorCode.OK))


def main() -> None:
    app()
