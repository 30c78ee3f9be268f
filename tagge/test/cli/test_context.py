from __future__ import annotations

from pathlib import Path

import pytest

from tagge.cli.context import resolve_github_repo, resolve_repo_path
from tagge.core.config import Config, GitHubConfig, ReleaseConfig
from tagge.core.result import Err, Ok
from tagge.git.remote import GitHubRepo
from tagge.git.repository import GitError, Repository


def test_resolve_relative_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()

    assert resolve_repo_path(Path("sub")) == (tmp_path / "sub").resolve()


def test_resolve_absolute_path(tmp_path: Path) -> None:
    assert resolve_repo_path(tmp_path) == tmp_path


def test_github_repo_from_config(tmp_path: Path) -> None:
    config = Config(github=GitHubConfig(repo="octo/repo"))

    assert resolve_github_repo(Repository(tmp_path), config) == GitHubRepo("octo", "repo")


def test_github_repo_from_configured_remote(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    remotes: list[str] = []

    def remote_url(self: Repository, remote: str) -> Ok[str]:
        remotes.append(remote)
        return Ok("git@github.com:octo/repo.git")

    monkeypatch.setattr(Repository, "remote_url", remote_url)
    config = Config(release=ReleaseConfig(remote="upstream"))

    assert resolve_github_repo(Repository(tmp_path), config) == GitHubRepo("octo", "repo")
    assert remotes == ["upstream"]


def test_github_repo_without_remote(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        Repository,
        "remote_url",
        lambda self, remote: Err(GitError(command="remote get-url", message="no remote")),
    )

    assert resolve_github_repo(Repository(tmp_path), Config()) is None
