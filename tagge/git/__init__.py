"""Git operations used by the release engine.

Usage:
    from tagge.git import Repository

    repo = Repository(Path("/path/to/repo"))
    names = repo.tag_names()
"""

from tagge.git.remote import GitHubRepo, parse_github_remote
from tagge.git.repository import (
    AnnotatedTag,
    CommitInfo,
    GitError,
    Repository,
    RepositorySource,
)

__all__ = [
    "AnnotatedTag",
    "CommitInfo",
    "GitError",
    "GitHubRepo",
    "Repository",
    "RepositorySource",
    "parse_github_remote",
]
