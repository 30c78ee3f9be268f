"""Tests for git/repository.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from tagge.core.result import Err, Ok
from tagge.git.repository import AnnotatedTag, CommitInfo, Repository


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    """Create a mock CompletedProcess."""
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


def git_args(mock_run: MagicMock) -> list[str]:
    """Arguments after ``git -C <path>`` of the last call."""
    cmd = mock_run.call_args.args[0]
    assert cmd[:2] == ["git", "-C"]
    return cmd[3:]


# =============================================================================
# Repository Tests - Mocked subprocess
# =============================================================================


class TestRepository:
    """Tests for Repository class."""

    @patch("subprocess.run")
    def test_exists(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="true\n")

        assert Repository(tmp_path).exists() is True
        assert git_args(mock_run) == ["rev-parse", "--is-inside-work-tree"]

    @patch("subprocess.run")
    def test_exists_outside_work_tree(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: not a git repository", returncode=128
        )

        assert Repository(tmp_path).exists() is False

    @patch("subprocess.run")
    def test_tag_names(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="v1.2.0\nv1.3.0\n\nnightly-build\n")

        result = Repository(tmp_path).tag_names()

        assert result == Ok(["v1.2.0", "v1.3.0", "nightly-build"])

    @patch("subprocess.run")
    def test_tag_names_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stderr="fatal: bad\n", returncode=128)

        result = Repository(tmp_path).tag_names()

        assert isinstance(result, Err)
        assert result.error.message == "fatal: bad"
        assert result.error.returncode == 128

    @patch("subprocess.run")
    def test_peel_annotated_tag(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = [
            make_completed_process(stdout="refs/tags/v1.3.0\0tag\0tagsha\n"),
            make_completed_process(stdout="commitsha\n"),
        ]

        result = Repository(tmp_path).peel_tag("v1.3.0")

        assert result == Ok(AnnotatedTag(name="v1.3.0", tag_id="tagsha", target_id="commitsha"))
        for_each_ref = mock_run.call_args_list[0].args[0]
        assert for_each_ref[-1] == "refs/tags/v1.3.0"
        assert git_args(mock_run)[-1] == "refs/tags/v1.3.0^{commit}"

    @patch("subprocess.run")
    def test_peel_tag_of_tag_targets_the_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        # v2 is an annotated tag whose object is another annotated tag
        mock_run.side_effect = [
            make_completed_process(stdout="refs/tags/v2.0.0\0tag\0outertag\n"),
            make_completed_process(stdout="commitsha\n"),
        ]

        result = Repository(tmp_path).peel_tag("v2.0.0")

        assert isinstance(result, Ok)
        assert result.value.tag_id == "outertag"
        assert result.value.target_id == "commitsha"

    @patch("subprocess.run")
    def test_peel_tag_not_pointing_at_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = [
            make_completed_process(stdout="refs/tags/tree-tag\0tag\0tagsha\n"),
            make_completed_process(returncode=1),
        ]

        result = Repository(tmp_path).peel_tag("tree-tag")

        assert isinstance(result, Err)
        assert result.error.message == "tree-tag does not point at a commit"

    @patch("subprocess.run")
    def test_peel_lightweight_tag(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="refs/tags/v1.3.0\0commit\0commitsha\n"
        )

        result = Repository(tmp_path).peel_tag("v1.3.0")

        assert isinstance(result, Err)
        assert "not an annotated tag" in result.error.message
        assert mock_run.call_count == 1

    @patch("subprocess.run")
    def test_peel_ignores_nested_refs(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="refs/tags/v1/beta\0tag\0t1\n"
        )

        result = Repository(tmp_path).peel_tag("v1")

        assert isinstance(result, Err)
        assert "tag not found" in result.error.message

    @patch("subprocess.run")
    def test_head_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="abc123\n")

        assert Repository(tmp_path).head_commit() == Ok("abc123")

    @patch("subprocess.run")
    def test_head_commit_unborn(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=1)

        result = Repository(tmp_path).head_commit()

        assert isinstance(result, Err)
        assert result.error.message == "HEAD does not resolve"

    @patch("subprocess.run")
    def test_current_branch(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="main\n")

        assert Repository(tmp_path).current_branch() == "main"

    @patch("subprocess.run")
    def test_current_branch_detached(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="HEAD\n")

        assert Repository(tmp_path).current_branch() is None

    @patch("subprocess.run")
    def test_read_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stdout="c0ffee\0p1 p2\x001700000000\0Merge feature\n\nLonger body\n"
        )

        result = Repository(tmp_path).read_commit("c0ffee")

        assert result == Ok(
            CommitInfo(
                id="c0ffee",
                parents=("p1", "p2"),
                timestamp=1700000000,
                summary="Merge feature",
            )
        )

    @patch("subprocess.run")
    def test_read_root_commit(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="root\0\x00100\0Initial\n")

        result = Repository(tmp_path).read_commit("root")

        assert isinstance(result, Ok)
        assert result.value.parents == ()

    @patch("subprocess.run")
    def test_read_commit_bad_object(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: bad object deadbeef\n", returncode=128
        )

        result = Repository(tmp_path).read_commit("deadbeef")

        assert isinstance(result, Err)
        assert "bad object" in result.error.message

    @patch("subprocess.run")
    def test_fetch_tags_refspecs(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        result = Repository(tmp_path).fetch_tags("origin")

        assert isinstance(result, Ok)
        assert git_args(mock_run) == [
            "fetch",
            "origin",
            "refs/tags/*:refs/tags/*",
            "refs/heads/*:refs/remotes/origin/*",
        ]

    @patch("subprocess.run")
    def test_remote_url_missing(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=2)

        result = Repository(tmp_path).remote_url("upstream")

        assert isinstance(result, Err)
        assert result.error.message == "no remote named upstream"
