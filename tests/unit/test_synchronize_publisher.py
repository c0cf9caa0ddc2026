"""Unit tests for publishing a tree delta to a branch."""

from typing import Sequence
from unittest.mock import AsyncMock

import pytest

from board_site_sync.github.abc import GitHubClientBase
from board_site_sync.github.exceptions import GitHubRefNotFastForwardError, GitHubRequestError
from board_site_sync.schemas.tree import TreeDeltaModel, TreeEntryModel
from board_site_sync.synchronize.exceptions import (
    BranchTipReadError,
    CommitCreateError,
    PublishError,
    RefUpdateError,
    RefUpdateRejectedError,
    TreeCreateError,
)
from board_site_sync.synchronize.models import BranchTipModel, PublishStage
from board_site_sync.synchronize.publisher import publish_tree_delta, read_branch_tip
from tests.unit.utils import make_github_adapter

DELTA = TreeDeltaModel(
    entries=(
        TreeEntryModel(path="_data/lists.json", content="{}"),
        TreeEntryModel(path="_data/all.json", content="[]"),
    )
)
TIP = BranchTipModel(ref="heads/main", commit_sha="parent-sha", tree_sha="base-tree-sha")


class FakeRepositoryHost(GitHubClientBase):
    """In-memory repository host that enforces fast-forward-only reference updates."""

    def __init__(self, branch_sha: str = "parent-sha") -> None:
        """Start with a single branch pointing at a single commit."""
        self.refs: dict[str, str] = {"heads/main": branch_sha}
        self.commits: dict[str, dict] = {branch_sha: {"tree": "base-tree-sha", "parents": []}}
        self.trees: dict[str, dict[str, str]] = {"base-tree-sha": {"README.md": "hello"}}
        self.calls: list[str] = []

    async def get_ref_sha(self, ref: str) -> str:
        """Return the commit a reference points at."""
        self.calls.append("get_ref_sha")
        return self.refs[ref]

    async def get_commit_tree_sha(self, commit_sha: str) -> str:
        """Return a commit's tree."""
        self.calls.append("get_commit_tree_sha")
        return self.commits[commit_sha]["tree"]

    async def create_tree(self, base_tree_sha: str, entries: Sequence[TreeEntryModel]) -> str:
        """Layer the entries onto the base tree."""
        self.calls.append("create_tree")
        files = dict(self.trees[base_tree_sha])
        files.update({entry.path: entry.content for entry in entries})
        sha = f"tree-{len(self.trees)}"
        self.trees[sha] = files
        return sha

    async def create_commit(self, message: str, tree_sha: str, parents: Sequence[str]) -> str:
        """Record a commit object."""
        self.calls.append("create_commit")
        sha = f"commit-{len(self.commits)}"
        self.commits[sha] = {"tree": tree_sha, "parents": list(parents), "message": message}
        return sha

    async def update_ref(self, ref: str, sha: str, force: bool = False) -> str:
        """Move the reference, rejecting anything but a fast forward unless forced."""
        self.calls.append("update_ref")
        if not force and self.refs[ref] not in self.commits[sha]["parents"]:
            raise GitHubRefNotFastForwardError("update_ref", "Update is not a fast forward", status_code=422)
        self.refs[ref] = sha
        return sha


@pytest.mark.asyncio
async def test_read_branch_tip() -> None:
    """Test that the tip is read from the branch reference and its commit."""
    host = make_github_adapter()
    tip = await read_branch_tip(host, "main")
    assert tip == TIP
    host.get_ref_sha.assert_awaited_once_with("heads/main")
    host.get_commit_tree_sha.assert_awaited_once_with("parent-sha")


@pytest.mark.asyncio
async def test_read_branch_tip_failure() -> None:
    """Test that a missing branch surfaces as BranchTipReadError."""
    host = make_github_adapter()
    host.get_ref_sha = AsyncMock(side_effect=GitHubRequestError("get_ref_sha", "Not Found", status_code=404))
    with pytest.raises(BranchTipReadError) as exc_info:
        await read_branch_tip(host, "missing")
    assert "error reading branch tip" in str(exc_info.value)
    assert "Not Found" in str(exc_info.value)
    host.get_commit_tree_sha.assert_not_awaited()


@pytest.mark.asyncio
async def test_publish_success() -> None:
    """Test the full chain: tree on the base tree, commit on the tip, non-forced ref update."""
    host = make_github_adapter()
    result = await publish_tree_delta(host, TIP, DELTA)

    host.create_tree.assert_awaited_once_with(base_tree_sha="base-tree-sha", entries=DELTA.entries)
    host.create_commit.assert_awaited_once_with(message="updating cards", tree_sha="new-tree-sha", parents=["parent-sha"])
    host.update_ref.assert_awaited_once_with(ref="heads/main", sha="new-commit-sha", force=False)
    assert result.stage == PublishStage.REF_UPDATED
    assert result.tree_sha == "new-tree-sha"
    assert result.commit_sha == "new-commit-sha"
    assert result.parent_sha == "parent-sha"
    assert result.ref == "heads/main"


@pytest.mark.asyncio
async def test_publish_custom_message() -> None:
    """Test that the commit message can be overridden."""
    host = make_github_adapter()
    await publish_tree_delta(host, TIP, DELTA, message="sync board")
    assert host.create_commit.await_args.kwargs["message"] == "sync board"


@pytest.mark.asyncio
async def test_publish_tree_failure_creates_no_commit() -> None:
    """Test that a failed tree creation stops before the commit and the ref update."""
    host = make_github_adapter()
    host.create_tree = AsyncMock(side_effect=GitHubRequestError("create_tree", "Server Error", status_code=500))

    with pytest.raises(TreeCreateError) as exc_info:
        await publish_tree_delta(host, TIP, DELTA)

    assert str(exc_info.value).startswith("error creating tree")
    assert exc_info.value.stage == PublishStage.START
    host.create_commit.assert_not_awaited()
    host.update_ref.assert_not_awaited()


@pytest.mark.asyncio
async def test_publish_commit_failure_leaves_ref_untouched() -> None:
    """Test that a failed commit creation never updates the reference."""
    host = make_github_adapter()
    host.create_commit = AsyncMock(side_effect=GitHubRequestError("create_commit", "Validation Failed", status_code=422))

    with pytest.raises(CommitCreateError) as exc_info:
        await publish_tree_delta(host, TIP, DELTA)

    assert str(exc_info.value).startswith("error creating commit")
    assert exc_info.value.stage == PublishStage.TREE_CREATED
    assert exc_info.value.tree_sha == "new-tree-sha"
    host.update_ref.assert_not_awaited()


@pytest.mark.asyncio
async def test_publish_ref_failure() -> None:
    """Test that a generic reference update failure is a RefUpdateError but not a rejection."""
    host = make_github_adapter()
    host.update_ref = AsyncMock(side_effect=GitHubRequestError("update_ref", "Server Error", status_code=502))

    with pytest.raises(RefUpdateError) as exc_info:
        await publish_tree_delta(host, TIP, DELTA)

    assert not isinstance(exc_info.value, RefUpdateRejectedError)
    assert str(exc_info.value).startswith("error updating ref")
    assert exc_info.value.stage == PublishStage.COMMIT_CREATED
    assert exc_info.value.commit_sha == "new-commit-sha"


@pytest.mark.asyncio
async def test_publish_ref_rejected_is_distinguishable() -> None:
    """Test that a non-fast-forward rejection raises RefUpdateRejectedError."""
    host = make_github_adapter()
    host.update_ref = AsyncMock(side_effect=GitHubRefNotFastForwardError("update_ref", "Update is not a fast forward", status_code=422))

    with pytest.raises(RefUpdateRejectedError) as exc_info:
        await publish_tree_delta(host, TIP, DELTA)

    assert isinstance(exc_info.value, RefUpdateError)
    assert isinstance(exc_info.value, PublishError)


@pytest.mark.asyncio
async def test_publish_empty_delta_is_rejected_before_any_call() -> None:
    """Test that an empty delta never reaches the repository host."""
    host = make_github_adapter()
    with pytest.raises(TreeCreateError):
        await publish_tree_delta(host, TIP, TreeDeltaModel())
    host.create_tree.assert_not_awaited()


@pytest.mark.asyncio
async def test_publish_keeps_unrelated_files_and_extends_history() -> None:
    """Test against an in-memory host that the new commit extends the tip and keeps existing files."""
    host = FakeRepositoryHost()
    tip = await read_branch_tip(host, "main")
    result = await publish_tree_delta(host, tip, DELTA)

    assert host.calls == ["get_ref_sha", "get_commit_tree_sha", "create_tree", "create_commit", "update_ref"]
    assert host.refs["heads/main"] == result.commit_sha
    new_commit = host.commits[result.commit_sha]
    assert new_commit["parents"] == ["parent-sha"]
    assert host.trees[new_commit["tree"]] == {
        "README.md": "hello",
        "_data/lists.json": "{}",
        "_data/all.json": "[]",
    }


@pytest.mark.asyncio
async def test_publish_concurrent_change_is_not_clobbered() -> None:
    """Test that a branch that moved after the tip was read is left pointing at the other writer's commit."""
    host = FakeRepositoryHost()
    tip = await read_branch_tip(host, "main")

    # Another writer advances the branch in the meantime.
    host.commits["other-sha"] = {"tree": "base-tree-sha", "parents": ["parent-sha"]}
    host.refs["heads/main"] = "other-sha"

    with pytest.raises(RefUpdateRejectedError):
        await publish_tree_delta(host, tip, DELTA)

    assert host.refs["heads/main"] == "other-sha"

    # A later run re-reads the tip and succeeds.
    retry_tip = await read_branch_tip(host, "main")
    result = await publish_tree_delta(host, retry_tip, DELTA)
    assert host.refs["heads/main"] == result.commit_sha
    assert host.commits[result.commit_sha]["parents"] == ["other-sha"]


@pytest.mark.asyncio
async def test_publish_programming_error_is_not_reported_as_stage_failure() -> None:
    """Test that an error that is not a GitHub request failure propagates unwrapped."""
    host = make_github_adapter()
    host.create_commit = AsyncMock(side_effect=TypeError("unexpected keyword argument"))

    with pytest.raises(TypeError):
        await publish_tree_delta(host, TIP, DELTA)

    host.update_ref.assert_not_awaited()


@pytest.mark.asyncio
async def test_read_branch_tip_programming_error_propagates() -> None:
    """Test that reading the tip only wraps GitHub request failures."""
    host = make_github_adapter()
    host.get_ref_sha = AsyncMock(side_effect=KeyError("heads/main"))

    with pytest.raises(KeyError):
        await read_branch_tip(host, "main")
