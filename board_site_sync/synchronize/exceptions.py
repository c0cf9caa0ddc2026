"""Custom exceptions for the synchronize module."""

from board_site_sync.synchronize.models import PublishStage


class PublishError(Exception):
    """Raised when publishing a tree delta to a branch aborts.

    ``stage`` is the last stage that completed before the failure. Objects
    created before the failure (a tree, a commit) are left unreferenced.
    """

    action = "publishing"

    def __init__(self, detail: str, stage: PublishStage, tree_sha: str | None = None, commit_sha: str | None = None) -> None:
        """Initializes the exception with the failure detail and how far the run got."""
        super().__init__(f"error {self.action}: {detail}")
        self.detail = detail
        self.stage = stage
        self.tree_sha = tree_sha
        self.commit_sha = commit_sha


class BranchTipReadError(PublishError):
    """Raised when the branch reference or its commit cannot be read."""

    action = "reading branch tip"


class TreeCreateError(PublishError):
    """Raised when the tree cannot be created; no commit is attempted."""

    action = "creating tree"


class CommitCreateError(PublishError):
    """Raised when the commit cannot be created; the reference is not touched."""

    action = "creating commit"


class RefUpdateError(PublishError):
    """Raised when the branch reference cannot be moved to the new commit."""

    action = "updating ref"


class RefUpdateRejectedError(RefUpdateError):
    """Raised when the branch moved since its tip was read and the non-forced update was rejected.

    The branch is unchanged; running again re-reads the tip and retries cleanly.
    """

    pass
