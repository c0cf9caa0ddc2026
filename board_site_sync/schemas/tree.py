"""Pydantic schema for the tree entries submitted to the repository host."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from board_site_sync.utils.constants import BLOB_FILE_MODE, BLOB_TYPE


class TreeEntryModel(BaseModel):
    """A single file written by a sync run, addressed by its repository-relative path."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    mode: Literal["100644"] = BLOB_FILE_MODE
    type: Literal["blob"] = BLOB_TYPE

    def as_git_tree_item(self) -> dict[str, str]:
        """Return the entry in the shape expected by the git trees API."""
        return {
            "path": self.path,
            "mode": self.mode,
            "type": self.type,
            "content": self.content,
        }


class TreeDeltaModel(BaseModel):
    """Ordered set of entries layered onto the branch tip's tree by a single commit.

    Paths not present in the delta are left untouched by the repository host.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[TreeEntryModel, ...] = ()

    def __len__(self) -> int:
        """Return the number of entries in the delta."""
        return len(self.entries)

    @property
    def paths(self) -> list[str]:
        """Return the entry paths in submission order."""
        return [entry.path for entry in self.entries]

    def get(self, path: str) -> TreeEntryModel | None:
        """Return the entry written at the given path, if any."""
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None
