"""Configuration models for the board-site-sync CLI."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


@dataclass
class SyncConfig:
    """Reconciled configuration for a single sync run."""

    debug: bool

    # Kanban service
    trello_api_url: str
    trello_api_key: str
    trello_user_token: str
    trello_board_id: str
    http_timeout: float

    # Repository host
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
    repo: str
    branch: str

    # Site content
    item_path: str
    commit_message: str
    private_prefix: str
