"""Base ABC for the git data primitives of a repository host."""

from abc import ABC, abstractmethod
from typing import Sequence

from board_site_sync.schemas.tree import TreeEntryModel


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients.

    Only the git object level operations needed to extend a branch with a
    single commit are exposed. Every method returns plain SHAs.
    """

    # Reference Operations
    @abstractmethod
    async def get_ref_sha(self, ref: str) -> str:
        """Get the commit SHA a reference (e.g. 'heads/main') points at."""
        pass

    @abstractmethod
    async def update_ref(self, ref: str, sha: str, force: bool = False) -> str:
        """Move a reference to a new commit SHA and return the SHA it now points at."""
        pass

    # Commit Operations
    @abstractmethod
    async def get_commit_tree_sha(self, commit_sha: str) -> str:
        """Get the SHA of the tree recorded in a commit."""
        pass

    @abstractmethod
    async def create_commit(self, message: str, tree_sha: str, parents: Sequence[str]) -> str:
        """Create a commit object and return its SHA."""
        pass

    # Tree Operations
    @abstractmethod
    async def create_tree(self, base_tree_sha: str, entries: Sequence[TreeEntryModel]) -> str:
        """Create a tree layering the entries onto the base tree and return its SHA."""
        pass
