"""Contains results of application execution."""

from board_site_sync.schemas.tree import TreeDeltaModel
from board_site_sync.synchronize.models import PublishStage


class PublishResult:
    """Contains results of a successful publish."""

    def __init__(self, ref: str, parent_sha: str, tree_sha: str, commit_sha: str, stage: PublishStage = PublishStage.REF_UPDATED) -> None:
        """Initialize the result with the objects created and the reference moved."""
        self.ref = ref
        self.parent_sha = parent_sha
        self.tree_sha = tree_sha
        self.commit_sha = commit_sha
        self.stage = stage


class SyncResult:
    """Contains results of the sync workflow."""

    def __init__(self, board_id: str, tree_delta: TreeDeltaModel, publish_result: PublishResult | None = None) -> None:
        """Initialize the result with the delta built and, unless this was a dry run, the publish result."""
        self.board_id = board_id
        self.tree_delta = tree_delta
        self.publish_result = publish_result

    @property
    def published(self) -> bool:
        """Return True when the branch was advanced."""
        return self.publish_result is not None
