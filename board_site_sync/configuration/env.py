"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from board_site_sync.utils.constants import (
    DEFAULT_BRANCH,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_TRELLO_API_URL,
    PRIVATE_LIST_PREFIX,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    CONFIG_FILE: Path | None = None
    HTTP_TIMEOUT: float = DEFAULT_HTTP_TIMEOUT

    # Trello settings
    TRELLO_API_URL: str = DEFAULT_TRELLO_API_URL
    TRELLO_API_KEY: str | None = None
    TRELLO_USER_TOKEN: str | None = None
    TRELLO_BOARD_ID: str | None = None

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    REPO: str | None = None
    BRANCH: str = DEFAULT_BRANCH

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None

    # Site content settings
    ITEM_PATH: str | None = None
    COMMIT_MESSAGE: str = DEFAULT_COMMIT_MESSAGE
    PRIVATE_PREFIX: str = PRIVATE_LIST_PREFIX


settings = Settings()
