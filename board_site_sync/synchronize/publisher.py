"""Publishes a tree delta to a branch as a single commit.

The publish is a strictly ordered chain of remote calls:

    START -> TREE_CREATED -> COMMIT_CREATED -> REF_UPDATED

Each step needs the previous step's SHA, so a failure stops the chain. Tree and
commit objects are inert until a reference points at them, which means the
branch is either advanced to a commit containing the whole delta or left
exactly where it was. The reference update is never forced.
"""

import structlog

from board_site_sync.github.abc import GitHubClientBase
from board_site_sync.github.exceptions import GitHubRefNotFastForwardError, GitHubRequestError
from board_site_sync.schemas.tree import TreeDeltaModel
from board_site_sync.synchronize.exceptions import (
    BranchTipReadError,
    CommitCreateError,
    RefUpdateError,
    RefUpdateRejectedError,
    TreeCreateError,
)
from board_site_sync.synchronize.models import BranchTipModel, PublishStage
from board_site_sync.synchronize.results import PublishResult
from board_site_sync.utils.constants import DEFAULT_COMMIT_MESSAGE
from board_site_sync.utils.helpers import branch_ref

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def read_branch_tip(github_adapter: GitHubClientBase, branch: str) -> BranchTipModel:
    """Read the commit a branch points at and the SHA of that commit's tree."""
    ref = branch_ref(branch)
    try:
        commit_sha = await github_adapter.get_ref_sha(ref)
        tree_sha = await github_adapter.get_commit_tree_sha(commit_sha)
    except GitHubRequestError as exc:
        logger.error("Failed to read branch tip", ref=ref, error=str(exc))
        raise BranchTipReadError(str(exc), stage=PublishStage.START) from exc
    logger.info("Read branch tip", ref=ref, commit_sha=commit_sha, tree_sha=tree_sha)
    return BranchTipModel(ref=ref, commit_sha=commit_sha, tree_sha=tree_sha)


async def publish_tree_delta(
    github_adapter: GitHubClientBase,
    tip: BranchTipModel,
    tree_delta: TreeDeltaModel,
    message: str = DEFAULT_COMMIT_MESSAGE,
) -> PublishResult:
    """Commit the tree delta on top of the branch tip and advance the branch to it.

    Raises:
        TreeCreateError: The tree was not created; nothing else was attempted.
        CommitCreateError: The tree exists unreferenced; the reference was not touched.
        RefUpdateRejectedError: The branch moved since the tip was read; it was left unchanged.
        RefUpdateError: The reference update failed for another reason.
    """
    stage = PublishStage.START
    if not tree_delta.entries:
        raise TreeCreateError("the tree delta is empty", stage=stage)

    try:
        tree_sha = await github_adapter.create_tree(base_tree_sha=tip.tree_sha, entries=tree_delta.entries)
    except GitHubRequestError as exc:
        logger.error("Publish aborted", stage=stage.value, step="create_tree", error=str(exc))
        raise TreeCreateError(str(exc), stage=stage) from exc
    stage = PublishStage.TREE_CREATED
    logger.debug("Publish stage reached", stage=stage.value, tree_sha=tree_sha)

    try:
        commit_sha = await github_adapter.create_commit(message=message, tree_sha=tree_sha, parents=[tip.commit_sha])
    except GitHubRequestError as exc:
        logger.error("Publish aborted", stage=stage.value, step="create_commit", tree_sha=tree_sha, error=str(exc))
        raise CommitCreateError(str(exc), stage=stage, tree_sha=tree_sha) from exc
    stage = PublishStage.COMMIT_CREATED
    logger.debug("Publish stage reached", stage=stage.value, commit_sha=commit_sha)

    try:
        await github_adapter.update_ref(ref=tip.ref, sha=commit_sha, force=False)
    except GitHubRefNotFastForwardError as exc:
        logger.warning(
            "Branch moved since its tip was read, reference left unchanged",
            ref=tip.ref,
            expected_parent_sha=tip.commit_sha,
            commit_sha=commit_sha,
        )
        raise RefUpdateRejectedError(str(exc), stage=stage, tree_sha=tree_sha, commit_sha=commit_sha) from exc
    except GitHubRequestError as exc:
        logger.error("Publish aborted", stage=stage.value, step="update_ref", commit_sha=commit_sha, error=str(exc))
        raise RefUpdateError(str(exc), stage=stage, tree_sha=tree_sha, commit_sha=commit_sha) from exc
    stage = PublishStage.REF_UPDATED

    logger.info("Published tree delta", ref=tip.ref, parent_sha=tip.commit_sha, tree_sha=tree_sha, commit_sha=commit_sha)
    return PublishResult(ref=tip.ref, parent_sha=tip.commit_sha, tree_sha=tree_sha, commit_sha=commit_sha, stage=stage)
