"""Typed loading of the optional per-repository ``.tagge.toml``.

Example:

    [release]
    branches = ["main", "master"]
    remote = "origin"

    [github]
    repo = "owner/name"
    max_concurrency = 8
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "GitHubConfig",
    "ReleaseConfig",
    "load_config",
    "load_repo_config",
]

CONFIG_FILE_NAME = ".tagge.toml"

DEFAULT_RELEASE_BRANCHES = ("main", "master")
DEFAULT_REMOTE = "origin"
DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    branches: tuple[str, ...] = DEFAULT_RELEASE_BRANCHES
    remote: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    # owner/name; None means "derive from the remote URL"
    repo: str | None = None
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY


@dataclass(frozen=True, slots=True)
class Config:
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def from_dict(cls, data: StrDict) -> Config:
        """Build a Config from a parsed TOML table.

        Raises:
            ValueError: if a known key has the wrong shape.
        """
        release = get_table(data, "release") or {}
        github = get_table(data, "github") or {}

        branches: tuple[str, ...] = DEFAULT_RELEASE_BRANCHES
        if "branches" in release:
            parsed = get_str_list(release, "branches")
            if not parsed:
                raise ValueError("release.branches must be a non-empty list of strings")
            branches = tuple(parsed)

        repo = get_str(github, "repo")
        if repo is not None and repo.count("/") != 1:
            raise ValueError(f"github.repo must look like owner/name, got {repo!r}")

        max_concurrency = DEFAULT_MAX_CONCURRENCY
        if "max_concurrency" in github:
            value = get_int(github, "max_concurrency")
            if value is None or value < 1:
                raise ValueError("github.max_concurrency must be a positive integer")
            max_concurrency = value

        return cls(
            release=ReleaseConfig(
                branches=branches,
                remote=get_str(release, "remote") or DEFAULT_REMOTE,
            ),
            github=GitHubConfig(repo=repo, max_concurrency=max_concurrency),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate a config file.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_repo_config(repo_root: Path) -> Result[Config, ConfigError]:
    """Load ``.tagge.toml`` from a repository root; defaults when absent."""
    path = repo_root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
