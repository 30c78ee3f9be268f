from __future__ import annotations

import re
from dataclasses import dataclass


_HTTPS_RE = re.compile(
    r"^https://(?:[^@/]+@)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"
)
_SCP_RE = re.compile(r"^(?:[^@/]+@)?github\.com:(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?$")
_SSH_RE = re.compile(
    r"^ssh://(?:[^@/]+@)?github\.com(?::\d+)?/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True, slots=True)
class GitHubRepo:
    owner: str
    name: str


def parse_github_slug(slug: str) -> GitHubRepo | None:
    """Parse ``owner/name``."""
    parts = slug.strip().split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return GitHubRepo(owner=parts[0], name=parts[1])


def parse_github_remote(url: str) -> GitHubRepo | None:
    """Extract owner/name from a github.com remote URL (https, scp-like or ssh://)."""
    url = url.strip()
    for pattern in (_HTTPS_RE, _SCP_RE, _SSH_RE):
        m = pattern.match(url)
        if m is not None:
            return GitHubRepo(owner=m.group("owner"), name=m.group("repo"))
    return None
