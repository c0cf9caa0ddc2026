"""Orchestrates a board to site synchronization run."""

import time

import structlog

from board_site_sync.configuration.models import SyncConfig
from board_site_sync.github.abc import GitHubClientBase
from board_site_sync.github.adapter import GitHubKitAdapter
from board_site_sync.processing.tree_builder import build_tree_delta
from board_site_sync.synchronize.publisher import publish_tree_delta, read_branch_tip
from board_site_sync.synchronize.results import SyncResult
from board_site_sync.trello.abc import KanbanClientBase
from board_site_sync.trello.client import TrelloClient

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def create_kanban_client(config: SyncConfig) -> KanbanClientBase:
    """Create the kanban service client described by the configuration."""
    return TrelloClient(
        api_key=config.trello_api_key,
        user_token=config.trello_user_token,
        api_url=config.trello_api_url,
        timeout=config.http_timeout,
    )


async def create_github_adapter(config: SyncConfig) -> GitHubClientBase:
    """Create the GitHub adapter for the target repository."""
    return await GitHubKitAdapter.create(
        repo=config.repo,
        github_auth_type=config.github_authentication_type,
        github_pat_token=config.github_pat_token,
        github_app_id=config.github_app_id,
        github_app_private_key_path=config.github_app_private_key_path,
        github_app_installation_id=config.github_app_installation_id,
        github_api_url=config.github_api_url,
    )


async def run_sync_workflow(
    config: SyncConfig,
    dry_run: bool = False,
    kanban_client: KanbanClientBase | None = None,
    github_adapter: GitHubClientBase | None = None,
) -> SyncResult:
    """Run the sync workflow: fetch the board, build the tree delta and publish it.

    The steps run one after the other and the first failure propagates. The
    branch tip is read only once the board has been fetched. With dry_run the
    delta is built and returned without contacting GitHub.
    """
    start_time = time.time()
    if kanban_client is None:
        kanban_client = create_kanban_client(config)
    try:
        board = await kanban_client.get_board(config.trello_board_id)
    finally:
        await kanban_client.close()

    tree_delta = build_tree_delta(board, item_path=config.item_path, private_prefix=config.private_prefix)
    if dry_run:
        logger.info("Dry run, skipping publish", board_id=board.id, entry_count=len(tree_delta))
        return SyncResult(board_id=board.id, tree_delta=tree_delta)

    if github_adapter is None:
        github_adapter = await create_github_adapter(config)
    tip = await read_branch_tip(github_adapter, config.branch)
    publish_result = await publish_tree_delta(github_adapter, tip, tree_delta, message=config.commit_message)

    logger.info(
        "Synchronized board to repository",
        board_id=board.id,
        repo=config.repo,
        branch=config.branch,
        commit_sha=publish_result.commit_sha,
        duration=round(time.time() - start_time, 2),
    )
    return SyncResult(board_id=board.id, tree_delta=tree_delta, publish_result=publish_result)
