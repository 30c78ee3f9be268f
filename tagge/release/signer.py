from __future__ import annotations

from typing import Protocol

from tagge.core.result import Err, Ok, Result
from tagge.git.repository import Repository
from tagge.platform.process import run as run_process
from tagge.release.errors import ReleaseError

_SIGN_TIMEOUT_SECONDS = 2 * 60.0


class TagSigner(Protocol):
    def create_signed_tag(self, name: str, message: str) -> Result[str, ReleaseError]:
        """Create a signed annotated tag at HEAD; returns the tag object id."""
        ...


class GitTagSigner:
    """Signs tags with ``git tag -s``, using the user's configured signing key.

    Signing can prompt for a passphrase (gpg-agent, ssh-agent), so the
    timeout is generous.
    """

    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    def create_signed_tag(self, name: str, message: str) -> Result[str, ReleaseError]:
        result = run_process(
            ["git", "-C", str(self.repo.path), "tag", "-a", name, "-s", "-m", message],
            cwd=self.repo.path,
            timeout=_SIGN_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="signing_failed",
                    message=f"failed to create signed tag {name}",
                    hint=result.error.stderr.strip() or "check user.signingkey / gpg.format",
                )
            )

        peeled = self.repo.peel_tag(name)
        if isinstance(peeled, Err):
            return Err(
                ReleaseError(
                    kind="signing_failed",
                    message=f"tag {name} was not created as an annotated tag",
                    hint=peeled.error.message,
                )
            )
        return Ok(peeled.value.tag_id)
