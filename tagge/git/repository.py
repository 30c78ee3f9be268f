"""Git repository access through the git CLI.

``Repository`` is the production repository source used by the release
engine. Every operation returns a Result; nothing here raises on git failure.

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.peel_tag("v1.2.0"):
        case Ok(tag):
            print(f"{tag.tag_id} -> {tag.target_id}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from tagge.core.result import Err, Ok, Result
from tagge.platform.process import ProcessError
from tagge.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# NUL-separated so summaries may contain any printable character.
_COMMIT_FORMAT = "%H%x00%P%x00%ct%x00%B"
_TAG_REF_FORMAT = "%(refname)%00%(objecttype)%00%(objectname)"

__all__ = [
    "AnnotatedTag",
    "CommitInfo",
    "GitError",
    "Repository",
    "RepositorySource",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class AnnotatedTag:
    """A tag ref that peels to a tag object.

    Attributes:
        name: Short tag name (without refs/tags/)
        tag_id: Id of the tag object itself
        target_id: Id of the commit the tag points at
    """

    name: str
    tag_id: str
    target_id: str


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Commit metadata needed by the ancestry walk."""

    id: str
    parents: tuple[str, ...]
    timestamp: int
    summary: str


class RepositorySource(Protocol):
    """What the release engine needs from a repository."""

    def tag_names(self) -> Result[list[str], GitError]: ...

    def peel_tag(self, name: str) -> Result[AnnotatedTag, GitError]: ...

    def head_commit(self) -> Result[str, GitError]: ...

    def current_branch(self) -> str | None: ...

    def read_commit(self, commit_id: str) -> Result[CommitInfo, GitError]: ...


class Repository:
    """Single git repository driven through the ``git`` executable.

    Instances hold no mutable state besides the path, so a background
    refresh can safely use its own instance for the same directory.

    Attributes:
        path: Path to the repository work tree
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """True if ``path`` is inside a git work tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        return isinstance(result, Ok) and result.value.strip() == "true"

    def tag_names(self) -> Result[list[str], GitError]:
        """All tag names, in whatever order git lists them."""
        result = self._run(["tag", "--list"])
        if isinstance(result, Err):
            return Err(self._error("tag --list", result.error, "failed to list tags"))
        return Ok([ln.strip() for ln in result.value.splitlines() if ln.strip()])

    def peel_tag(self, name: str) -> Result[AnnotatedTag, GitError]:
        """Resolve ``refs/tags/<name>`` to an annotated tag object.

        Fails when the ref is missing or is a lightweight tag. The target is
        the commit at the end of the tag chain, so a tag of a tag still
        resolves to a commit.
        """
        refname = f"refs/tags/{name}"
        result = self._run(["for-each-ref", f"--format={_TAG_REF_FORMAT}", refname])
        if isinstance(result, Err):
            return Err(self._error("for-each-ref", result.error, f"failed to read {refname}"))

        for line in result.value.splitlines():
            fields = line.split("\0")
            # for-each-ref also matches refs nested below the pattern
            if len(fields) != 3 or fields[0] != refname:
                continue
            objecttype, objectname = fields[1], fields[2]
            if objecttype != "tag":
                return Err(
                    GitError(
                        command="for-each-ref",
                        message=f"{name} is not an annotated tag (points at a {objecttype})",
                    )
                )

            target = self._run(["rev-parse", "--verify", "--quiet", f"{refname}^{{commit}}"])
            if isinstance(target, Err):
                return Err(
                    self._error("rev-parse", target.error, f"{name} does not point at a commit")
                )
            return Ok(AnnotatedTag(name=name, tag_id=objectname, target_id=target.value.strip()))

        return Err(GitError(command="for-each-ref", message=f"tag not found: {name}"))

    def head_commit(self) -> Result[str, GitError]:
        """Commit id HEAD points at; fails on an unborn branch."""
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        if isinstance(result, Err):
            return Err(self._error("rev-parse HEAD", result.error, "HEAD does not resolve"))
        return Ok(result.value.strip())

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def read_commit(self, commit_id: str) -> Result[CommitInfo, GitError]:
        result = self._run(
            ["log", "-1", "--no-show-signature", f"--format={_COMMIT_FORMAT}", commit_id, "--"]
        )
        if isinstance(result, Err):
            return Err(self._error("log", result.error, f"cannot read commit {commit_id}"))

        fields = result.value.split("\0", 3)
        if len(fields) != 4:
            return Err(GitError(command="log", message=f"unexpected commit format: {commit_id}"))

        full_id, parents, timestamp, body = fields
        try:
            ts = int(timestamp)
        except ValueError:
            return Err(GitError(command="log", message=f"invalid commit time: {timestamp!r}"))

        lines = body.strip().splitlines()
        return Ok(
            CommitInfo(
                id=full_id.strip(),
                parents=tuple(parents.split()),
                timestamp=ts,
                summary=lines[0].strip() if lines else "",
            )
        )

    def remote_url(self, remote: str) -> Result[str, GitError]:
        result = self._run(["remote", "get-url", remote])
        if isinstance(result, Err):
            return Err(self._error("remote get-url", result.error, f"no remote named {remote}"))
        return Ok(result.value.strip())

    def fetch_tags(self, remote: str) -> Result[str, GitError]:
        """Fetch all tags and branches from ``remote``.

        Credentials come from git's own configuration (ssh-agent for SSH
        remotes, credential helpers for HTTPS).
        """
        result = self._run(
            [
                "fetch",
                remote,
                "refs/tags/*:refs/tags/*",
                f"refs/heads/*:refs/remotes/{remote}/*",
            ]
        )
        if isinstance(result, Err):
            return Err(self._error(f"fetch {remote}", result.error, "fetch failed"))
        return Ok(result.value.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if command == "fetch" else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    @staticmethod
    def _error(command: str, error: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=error.stderr.strip() or fallback,
            returncode=error.returncode,
        )
