"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
from pathlib import Path

import structlog
import typer
from typer import Option
from typing_extensions import Annotated

from board_site_sync.configuration.env import settings
from board_site_sync.configuration.exceptions import ConfigurationError
from board_site_sync.configuration.reconcile import reconcile_sync_configuration
from board_site_sync.synchronize.driver import run_sync_workflow
from board_site_sync.synchronize.exceptions import PublishError, RefUpdateRejectedError
from board_site_sync.trello.exceptions import BoardFetchError

EXIT_RUN_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_REF_UPDATE_REJECTED = 3

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Publish a kanban board's public lists and cards to a static-site repository.")


def configure_logging(debug: bool) -> None:
    """Configure structlog to emit INFO and above, or everything in debug mode."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO))


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Set up logging for the current context."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug or settings.DEBUG
    configure_logging(ctx.obj["debug"])


@typer_app.command(name="sync")
def sync_cli(
    ctx: typer.Context,
    config_file: Annotated[Path | None, Option(envvar="CONFIG_FILE", help="Path to a JSON configuration file (defaults to config/config.json when present).")] = None,
    trello_api_url: Annotated[str | None, Option(envvar="TRELLO_API_URL", help="Trello API URL.")] = None,
    trello_api_key: Annotated[str | None, Option(envvar="TRELLO_API_KEY", help="Trello API key.")] = None,
    trello_user_token: Annotated[str | None, Option(envvar="TRELLO_USER_TOKEN", help="Trello user token.")] = None,
    trello_board_id: Annotated[str | None, Option(envvar="TRELLO_BOARD_ID", help="Trello board ID.")] = None,
    repo: Annotated[str | None, Option(envvar="REPO", help="Repository name (owner/repo).")] = None,
    branch: Annotated[str | None, Option(envvar="BRANCH", help="Branch to commit to.")] = None,
    item_path: Annotated[str | None, Option(envvar="ITEM_PATH", help="Collection name for card documents (written under _<item-path>/).")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
    commit_message: Annotated[str | None, Option(envvar="COMMIT_MESSAGE", help="Message of the commit created.")] = None,
    private_prefix: Annotated[str | None, Option(envvar="PRIVATE_PREFIX", help="Lists whose name starts with this prefix are not published.")] = None,
    dry_run: Annotated[bool, Option(envvar="DRY_RUN", help="Fetch the board and build the files without committing them.")] = False,
) -> None:
    """Synchronize the board to the repository branch in a single commit."""
    debug: bool = ctx.obj["debug"]

    try:
        config = asyncio.run(
            reconcile_sync_configuration(
                cli_debug=debug,
                cli_config_file=config_file,
                cli_trello_api_url=trello_api_url,
                cli_trello_api_key=trello_api_key,
                cli_trello_user_token=trello_user_token,
                cli_trello_board_id=trello_board_id,
                cli_github_api_url=github_api_url,
                cli_github_pat_token=github_pat_token,
                cli_github_app_id=github_app_id,
                cli_github_app_private_key_path=github_app_private_key_path,
                cli_github_app_installation_id=github_app_installation_id,
                cli_repo=repo,
                cli_branch=branch,
                cli_item_path=item_path,
                cli_commit_message=commit_message,
                cli_private_prefix=private_prefix,
            )
        )
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIGURATION_ERROR) from exc

    typer.echo(f"Synchronizing board {config.trello_board_id} to {config.repo}@{config.branch}")

    try:
        result = asyncio.run(run_sync_workflow(config, dry_run=dry_run))
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIGURATION_ERROR) from exc
    except RefUpdateRejectedError as exc:
        typer.echo(str(exc), err=True)
        typer.echo("The branch changed while this run was in progress and was left untouched; run again to retry.", err=True)
        raise typer.Exit(EXIT_REF_UPDATE_REJECTED) from exc
    except (BoardFetchError, PublishError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_RUN_ERROR) from exc

    if result.publish_result is None:
        typer.echo(f"Dry run: {len(result.tree_delta)} file(s) would be committed")
        for entry in result.tree_delta.entries:
            typer.echo(f"  {entry.path} ({len(entry.content)} characters)")
        return

    typer.echo(f"Committed {len(result.tree_delta)} file(s) as {result.publish_result.commit_sha} on {result.publish_result.ref}")
