"""Tests for the tagge command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tagge import __version__
from tagge.cli import app as app_mod
from tagge.cli.app import app
from tagge.cli.context import CLIContext
from tagge.core.config import Config, GitHubConfig
from tagge.git.repository import Repository
from tagge.output.console import MockConsole

from ..release._fakes import FakeRepository, FakeTag, linear_history

runner = CliRunner()


def _fake_context(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    repo: FakeRepository,
    config: Config | None = None,
) -> MockConsole:
    console = MockConsole()
    repo.path = tmp_path  # type: ignore[attr-defined]

    def build(path: Path) -> CLIContext:
        return CLIContext(
            repo=repo,  # type: ignore[arg-type]
            config=config or Config(),
            console=console,
        )

    monkeypatch.setattr(app_mod, "build_context", build)
    return console


def _tagged_repo() -> FakeRepository:
    repo = FakeRepository()
    linear_history(repo, ["a", "b", "c", "d"])
    repo.tags = {"v1.3.0": FakeTag(target="b")}
    return repo


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COLUMNS", "500")

    result = runner.invoke(app, ["--path", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert "doesn't exist!" in result.output


def test_not_a_repository(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COLUMNS", "500")
    monkeypatch.setattr(Repository, "exists", lambda self: False)

    result = runner.invoke(app, ["--path", str(tmp_path)])

    assert result.exit_code == 2
    assert f"Repository not found in: {tmp_path}" in result.output
    assert "Please check the path." in result.output


def test_invalid_bump_is_rejected() -> None:
    result = runner.invoke(app, ["huge"])

    assert result.exit_code == 2


def test_dry_run(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    console = _fake_context(monkeypatch, tmp_path, _tagged_repo())

    result = runner.invoke(app, ["minor", "--dry-run", "--no-fetch", "--suffix", "rc1"])

    assert result.exit_code == 0
    assert "New version: v1.4.0-rc1" in console.messages
    assert console.find("Changelog:")


def test_list_only(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    console = _fake_context(monkeypatch, tmp_path, _tagged_repo())

    result = runner.invoke(app, ["--no-fetch", "-s"])

    assert result.exit_code == 0
    assert console.messages[-2:] == ["  d commit d", "  c commit c"]


def test_no_tags_exits_zero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    repo = _tagged_repo()
    repo.tags = {}
    console = _fake_context(monkeypatch, tmp_path, repo)

    result = runner.invoke(app, ["patch", "--no-fetch"])

    assert result.exit_code == 0
    assert console.find("No tags found! Please create the first tag manually!")


def test_lightweight_tag_is_user_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    repo = _tagged_repo()
    repo.tags = {"v2.0.0": FakeTag(target="c", annotated=False)}
    console = _fake_context(monkeypatch, tmp_path, repo)

    result = runner.invoke(app, ["--no-fetch"])

    assert result.exit_code == 1
    assert console.has_error()


def test_use_pr_without_token(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    config = Config(github=GitHubConfig(repo="octo/repo"))
    console = _fake_context(monkeypatch, tmp_path, _tagged_repo(), config)

    result = runner.invoke(app, ["--use-pr", "--no-fetch"])

    assert result.exit_code == 1
    assert console.find("GitHub token")
