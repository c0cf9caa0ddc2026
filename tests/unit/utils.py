"""Shared helpers for unit tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

from board_site_sync.configuration.models import GitHubAuthenticationType, SyncConfig
from board_site_sync.github.abc import GitHubClientBase
from board_site_sync.schemas.board import BoardModel
from board_site_sync.trello.abc import KanbanClientBase


def make_config(**overrides: Any) -> SyncConfig:
    """Build a sync configuration for tests."""
    values: dict[str, Any] = {
        "debug": False,
        "trello_api_url": "https://api.trello.com",
        "trello_api_key": "key",
        "trello_user_token": "token",
        "trello_board_id": "board-1",
        "http_timeout": 30.0,
        "github_api_url": "https://api.github.com",
        "github_authentication_type": GitHubAuthenticationType.PAT,
        "github_pat_token": "pat",
        "github_app_id": None,
        "github_app_private_key_path": None,
        "github_app_installation_id": None,
        "repo": "owner/site",
        "branch": "main",
        "item_path": "items",
        "commit_message": "updating cards",
        "private_prefix": "PRIVATE",
    }
    values.update(overrides)
    return SyncConfig(**values)


def make_kanban_client(board: BoardModel | None = None, error: Exception | None = None) -> MagicMock:
    """Build a mocked kanban client returning the board or raising the error."""
    client = MagicMock(spec=KanbanClientBase)
    client.get_board = AsyncMock(return_value=board, side_effect=error)
    client.close = AsyncMock()
    return client


def make_github_adapter() -> MagicMock:
    """Build a mocked repository host whose steps all succeed."""
    adapter = MagicMock(spec=GitHubClientBase)
    adapter.get_ref_sha = AsyncMock(return_value="parent-sha")
    adapter.get_commit_tree_sha = AsyncMock(return_value="base-tree-sha")
    adapter.create_tree = AsyncMock(return_value="new-tree-sha")
    adapter.create_commit = AsyncMock(return_value="new-commit-sha")
    adapter.update_ref = AsyncMock(return_value="new-commit-sha")
    return adapter
