from __future__ import annotations

from tagge.core.result import Err, Ok
from tagge.release.semver import SemVer
from tagge.release.tags import highest_version_tag, resolve_latest_tag

from ._fakes import FakeRepository, FakeTag


def test_highest_version_tag_picks_greatest() -> None:
    best = highest_version_tag(["v1.2.0", "v1.10.0", "v1.9.5", "v0.99.0"])
    assert best == ("v1.10.0", SemVer(1, 10, 0))


def test_highest_version_tag_ignores_malformed_names() -> None:
    best = highest_version_tag(["nightly-build", "latest", "v2.0", "v1.0.0"])
    assert best == ("v1.0.0", SemVer(1, 0, 0))


def test_highest_version_tag_first_seen_wins_on_tie() -> None:
    best = highest_version_tag(["1.3.0", "v1.3.0", "v1.3.0-rc.1"])
    assert best is not None
    assert best[0] == "1.3.0"


def test_highest_version_tag_none_when_nothing_parses() -> None:
    assert highest_version_tag(["nightly", "foo"]) is None
    assert highest_version_tag([]) is None


def test_resolve_latest_tag_scenario() -> None:
    repo = FakeRepository(
        tags={
            "v1.2.0": FakeTag(target="c1"),
            "nightly-build": FakeTag(target="c3", annotated=False),
            "v1.3.0": FakeTag(target="c2"),
        }
    )

    result = resolve_latest_tag(repo)

    assert isinstance(result, Ok)
    tag = result.value
    assert tag.name == "v1.3.0"
    assert tag.version == SemVer(1, 3, 0)
    assert tag.target_id == "c2"
    assert tag.tag_id == "tagobj-v1.3.0"
    assert tag.version.bump("minor").to_tag() == "v1.4.0"


def test_resolve_latest_tag_no_tags() -> None:
    repo = FakeRepository(tags={"nightly-build": FakeTag(target="c1")})

    result = resolve_latest_tag(repo)

    assert isinstance(result, Err)
    assert result.error.kind == "no_tags"


def test_resolve_latest_tag_lightweight_winner_fails_without_fallback() -> None:
    repo = FakeRepository(
        tags={
            "v1.0.0": FakeTag(target="c1"),
            "v2.0.0": FakeTag(target="c2", annotated=False),
        }
    )

    result = resolve_latest_tag(repo)

    assert isinstance(result, Err)
    assert result.error.kind == "tag_not_annotated"
    assert "v2.0.0" in result.error.message


def test_resolve_latest_tag_lightweight_lower_version_is_harmless() -> None:
    repo = FakeRepository(
        tags={
            "v0.9.0": FakeTag(target="c0", annotated=False),
            "v1.0.0": FakeTag(target="c1"),
        }
    )

    result = resolve_latest_tag(repo)

    assert isinstance(result, Ok)
    assert result.value.name == "v1.0.0"
