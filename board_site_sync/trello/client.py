"""Trello REST client used to fetch the board snapshot."""

from types import TracebackType
from typing import Any, Self

import httpx
import structlog
from pydantic import ValidationError

from board_site_sync.schemas.board import BoardModel
from board_site_sync.utils.constants import (
    BOARD_FIELDS,
    CARD_ATTACHMENT_FIELDS,
    CARD_FIELDS,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_TRELLO_API_URL,
)

from .abc import KanbanClientBase
from .exceptions import BoardFetchError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def build_board_query_parameters(api_key: str, user_token: str) -> dict[str, str]:
    """Build the query string for a board fetch.

    Open lists and cards only, a fixed card field list and attachment name/URL
    metadata, so that the payload stays bounded.
    """
    return {
        "key": api_key,
        "token": user_token,
        "lists": "open",
        "cards": "open",
        "card_fields": ",".join(CARD_FIELDS),
        "fields": ",".join(BOARD_FIELDS),
        "card_attachments": "true",
        "card_attachment_fields": ",".join(CARD_ATTACHMENT_FIELDS),
    }


class TrelloClient(KanbanClientBase):
    """Async Trello client holding an API key and user token."""

    def __init__(
        self,
        api_key: str,
        user_token: str,
        api_url: str = DEFAULT_TRELLO_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client; the HTTP connection pool is created lazily by httpx."""
        self.api_key = api_key
        self.user_token = user_token
        self.api_url = api_url.rstrip("/")
        self.http = httpx.AsyncClient(base_url=self.api_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> Self:
        """Enter the async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the HTTP client on exit."""
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http.aclose()

    async def get_board(self, board_id: str) -> BoardModel:
        """Fetch a single board snapshot. A single attempt is made; errors raise BoardFetchError."""
        if not board_id:
            raise BoardFetchError(board_id, "a board identifier is required")

        params = build_board_query_parameters(self.api_key, self.user_token)
        logger.info("Fetching board", board_id=board_id, api_url=self.api_url)
        try:
            response = await self.http.get(f"/1/boards/{board_id}", params=params)
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.TimeoutException as exc:
            raise BoardFetchError(board_id, "request timed out") from exc
        except httpx.HTTPStatusError as exc:
            # Trello answers errors with a plain text body such as "invalid token".
            message = exc.response.text.strip() or exc.response.reason_phrase
            raise BoardFetchError(board_id, message, status_code=exc.response.status_code) from exc
        except httpx.RequestError as exc:
            raise BoardFetchError(board_id, f"network error: {exc}") from exc
        except ValueError as exc:
            raise BoardFetchError(board_id, f"response is not valid JSON: {exc}") from exc

        try:
            board = BoardModel.model_validate(payload)
        except ValidationError as exc:
            raise BoardFetchError(board_id, f"unexpected board payload: {exc}") from exc

        logger.info(
            "Fetched board",
            board_id=board.id,
            board_name=board.name,
            list_count=len(board.lists),
            card_count=len(board.cards),
        )
        return board
