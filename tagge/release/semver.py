from __future__ import annotations

import re
from dataclasses import dataclass, field

from tagge.release.model import ReleaseBump


# semver.org 2.0.0 grammar
_NUM = r"0|[1-9]\d*"
_PRE_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_IDENT = r"[0-9a-zA-Z-]+"
_SEMVER_RE = re.compile(
    rf"^(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<pre>{_PRE_IDENT}(?:\.{_PRE_IDENT})*))?"
    rf"(?:\+(?P<build>{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*))?$"
)


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    """A semantic version ordered by (major, minor, patch) only.

    Prerelease and build metadata are kept for display and ignored by
    comparisons, so ``1.3.0-rc.1 == 1.3.0``.
    """

    major: int
    minor: int
    patch: int
    prerelease: str = field(default="", compare=False)
    build: str = field(default="", compare=False)

    def __str__(self) -> str:
        s = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            s += f"-{self.prerelease}"
        if self.build:
            s += f"+{self.build}"
        return s

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: ReleaseBump) -> SemVer:
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> SemVer | None:
    m = _SEMVER_RE.match(text)
    if m is None:
        return None
    return SemVer(
        int(m.group("major")),
        int(m.group("minor")),
        int(m.group("patch")),
        prerelease=m.group("pre") or "",
        build=m.group("build") or "",
    )


def parse_tag(name: str) -> SemVer | None:
    """Parse a tag name, allowing one leading ``v``.

    Malformed names return None; they are expected in real repositories.
    """
    return parse_version(name.removeprefix("v"))


def apply_suffix(tag: str, suffix: str | None) -> str:
    """Append ``suffix`` to ``tag`` as ``<tag>-<suffix>``."""
    if suffix is None or not suffix.strip():
        return tag
    return f"{tag}-{suffix.strip().lstrip('-')}"
