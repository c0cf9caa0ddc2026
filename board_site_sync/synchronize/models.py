"""Contains data models for publishing a tree delta to a branch."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PublishStage(str, Enum):
    """Stages of the publish state machine, in the only order they can be reached.

    A raised PublishError is the aborted state; it records the last stage reached.
    """

    START = "start"
    TREE_CREATED = "tree_created"
    COMMIT_CREATED = "commit_created"
    REF_UPDATED = "ref_updated"


class BranchTipModel(BaseModel):
    """The commit a branch pointed at when it was read, and that commit's tree."""

    model_config = ConfigDict(frozen=True)

    ref: str
    commit_sha: str
    tree_sha: str
