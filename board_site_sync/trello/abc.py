"""Base ABC for kanban service clients."""

from abc import ABC, abstractmethod

from board_site_sync.schemas.board import BoardModel


class KanbanClientBase(ABC):
    """Base ABC for kanban service clients."""

    @abstractmethod
    async def get_board(self, board_id: str) -> BoardModel:
        """Fetch a board snapshot with its open lists and cards."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any underlying transport."""
        pass
