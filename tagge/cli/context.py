from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import typer

from tagge.core.config import Config, load_repo_config
from tagge.core.errors import ErrorCode
from tagge.core.result import Err
from tagge.git.remote import GitHubRepo, parse_github_remote, parse_github_slug
from tagge.git.repository import Repository
from tagge.output.console import ConsoleProtocol, RichConsole
from tagge.output.errors import print_release_error
from tagge.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Repository
    config: Config
    console: ConsoleProtocol


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def resolve_repo_path(path: Path) -> Path:
    """Absolute repository path; relative paths are taken from the cwd."""
    path = path.expanduser()
    return path if path.is_absolute() else (Path.cwd() / path).resolve()


def build_context(path: Path, *, console: ConsoleProtocol | None = None) -> CLIContext:
    console = console if console is not None else RichConsole()
    root = resolve_repo_path(path)

    if not root.exists():
        console.error(f"Path {root} doesn't exist!")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    repo = Repository(root)
    if not repo.exists():
        print_release_error(
            ReleaseError(
                kind="repository_not_found",
                message=f"Repository not found in: {root}",
                hint="Please check the path.",
            ),
            console,
        )
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_result = load_repo_config(root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(repo=repo, config=config_result.value, console=console)


def resolve_github_repo(repo: Repository, config: Config) -> GitHubRepo | None:
    """GitHub owner/name from ``github.repo`` or the configured remote's URL."""
    if config.github.repo is not None:
        return parse_github_slug(config.github.repo)

    url = repo.remote_url(config.release.remote)
    if isinstance(url, Err):
        return None
    return parse_github_remote(url.value)
