"""Contains exceptions raised while fetching a board from the kanban service."""


class BoardFetchError(Exception):
    """Raised when the board snapshot cannot be retrieved or parsed."""

    def __init__(self, board_id: str, message: str, status_code: int | None = None) -> None:
        """Initializes the exception with the board and the service's explanation."""
        detail = f"status {status_code}: {message}" if status_code is not None else message
        super().__init__(f"Unable to retrieve board '{board_id}': {detail}")
        self.board_id = board_id
        self.message = message
        self.status_code = status_code
