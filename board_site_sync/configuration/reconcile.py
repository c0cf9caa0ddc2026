"""Reconciles configuration between CLI arguments, the JSON configuration file and environment variables."""

from pathlib import Path
from typing import TypeVar

from board_site_sync.configuration.config_file import resolve_config_file
from board_site_sync.configuration.env import settings
from board_site_sync.configuration.exceptions import (
    GitHubAuthenticationConfigurationUndefinedError,
    InvalidConfigurationElementError,
    RequiredConfigurationElementError,
)
from board_site_sync.configuration.models import GitHubAuthenticationType, SyncConfig
from board_site_sync.utils.github import split_repository_in_configuration

T = TypeVar("T")


def first_defined(*values: T | None) -> T | None:
    """Return the first value that is neither None nor an empty string."""
    for value in values:
        if value is not None and value != "":
            return value
    return None


def require(value: T | None, name: str, cli_name: str, env_name: str) -> T:
    """Return the value, or raise RequiredConfigurationElementError when it is missing."""
    if value is None or value == "":
        raise RequiredConfigurationElementError(name=name, cli_name=cli_name, env_name=env_name)
    return value


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If both or neither of the PAT and App configurations are defined.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    if github_pat_token and (github_app_id or github_app_private_key_path or github_app_installation_id):
        raise GitHubAuthenticationConfigurationUndefinedError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if github_app_id and github_app_private_key_path and github_app_installation_id:
        return GitHubAuthenticationType.APP
    elif github_app_id or github_app_private_key_path or github_app_installation_id:
        missing_settings: list[dict[str, str]] = []
        if not github_app_id:
            missing_settings.append(
                {
                    "name": "GitHub App ID",
                    "cli_name": "github_app_id",
                    "env_name": "GITHUB_APP_ID",
                }
            )
        if not github_app_private_key_path:
            missing_settings.append(
                {
                    "name": "GitHub App private key path",
                    "cli_name": "github_app_private_key_path",
                    "env_name": "GITHUB_APP_PRIVATE_KEY_PATH",
                }
            )
        if not github_app_installation_id:
            missing_settings.append(
                {
                    "name": "GitHub App installation ID",
                    "cli_name": "github_app_installation_id",
                    "env_name": "GITHUB_APP_INSTALLATION_ID",
                }
            )
        msg = "Incomplete GitHub App configuration - missing settings include " + ", ".join(
            f"{setting['name']} (command line option {setting['cli_name']}, environment variable {setting['env_name']})"
            for setting in missing_settings
        )
        raise GitHubAuthenticationConfigurationUndefinedError(msg)
    else:
        raise GitHubAuthenticationConfigurationUndefinedError(
            "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
        )


async def reconcile_sync_configuration(
    cli_debug: bool = False,
    cli_config_file: Path | None = None,
    cli_trello_api_url: str | None = None,
    cli_trello_api_key: str | None = None,
    cli_trello_user_token: str | None = None,
    cli_trello_board_id: str | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_repo: str | None = None,
    cli_branch: str | None = None,
    cli_item_path: str | None = None,
    cli_commit_message: str | None = None,
    cli_private_prefix: str | None = None,
) -> SyncConfig:
    """Reconciles the sync configuration.

    Command line options (which typer also reads from process environment
    variables) take precedence over the JSON configuration file, which takes
    precedence over the settings loaded from the .env file and the defaults.
    The .env file is read by Settings only, never copied into the process
    environment.

    Raises:
        ConfigurationFileError: If the configuration file is unreadable or invalid.
        RequiredConfigurationElementError: If a required element is missing everywhere.
        InvalidConfigurationElementError: If the repository or item path is malformed.
        GitHubAuthenticationConfigurationUndefinedError: If GitHub authentication is missing or ambiguous.
    """
    config_file = resolve_config_file(first_defined(cli_config_file, settings.CONFIG_FILE))

    trello_api_key = require(
        first_defined(cli_trello_api_key, config_file and config_file.trello_api_key, settings.TRELLO_API_KEY),
        name="Trello API key",
        cli_name="trello-api-key",
        env_name="TRELLO_API_KEY",
    )
    trello_user_token = require(
        first_defined(cli_trello_user_token, config_file and config_file.trello_user_token, settings.TRELLO_USER_TOKEN),
        name="Trello user token",
        cli_name="trello-user-token",
        env_name="TRELLO_USER_TOKEN",
    )
    trello_board_id = require(
        first_defined(cli_trello_board_id, config_file and config_file.trello_board_id, settings.TRELLO_BOARD_ID),
        name="Trello board ID",
        cli_name="trello-board-id",
        env_name="TRELLO_BOARD_ID",
    )
    repo = require(
        first_defined(cli_repo, config_file and config_file.repo, settings.REPO),
        name="Repository",
        cli_name="repo",
        env_name="REPO",
    )
    try:
        owner, repository = await split_repository_in_configuration(repo)
    except ValueError as exc:
        raise InvalidConfigurationElementError("repo", str(exc)) from exc

    item_path = require(
        first_defined(cli_item_path, config_file and config_file.item_path, settings.ITEM_PATH),
        name="Item path",
        cli_name="item-path",
        env_name="ITEM_PATH",
    )
    item_path = item_path.strip("/")
    if not item_path:
        raise InvalidConfigurationElementError("item_path", "must contain at least one character other than '/'")

    github_pat_token = first_defined(cli_github_pat_token, config_file and config_file.github_token, settings.GITHUB_PAT_TOKEN)
    github_app_id = first_defined(cli_github_app_id, settings.GITHUB_APP_ID)
    github_app_private_key_path = first_defined(cli_github_app_private_key_path, settings.GITHUB_APP_PRIVATE_KEY_PATH)
    github_app_installation_id = first_defined(cli_github_app_installation_id, settings.GITHUB_APP_INSTALLATION_ID)
    github_authentication_type = await validate_github_authentication_configuration(
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
    )

    return SyncConfig(
        debug=cli_debug or settings.DEBUG,
        trello_api_url=first_defined(cli_trello_api_url, settings.TRELLO_API_URL) or "",
        trello_api_key=trello_api_key,
        trello_user_token=trello_user_token,
        trello_board_id=trello_board_id,
        http_timeout=settings.HTTP_TIMEOUT,
        github_api_url=first_defined(cli_github_api_url, settings.GITHUB_API_URL) or "",
        github_authentication_type=github_authentication_type,
        github_pat_token=github_pat_token if github_authentication_type == GitHubAuthenticationType.PAT else None,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        repo=f"{owner}/{repository}",
        branch=first_defined(cli_branch, config_file and config_file.github_branch, settings.BRANCH) or "",
        item_path=item_path,
        commit_message=first_defined(cli_commit_message, settings.COMMIT_MESSAGE) or "",
        private_prefix=first_defined(cli_private_prefix, settings.PRIVATE_PREFIX) or "",
    )
