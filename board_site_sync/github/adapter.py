"""GitHub client adapter for the githubkit library."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, Sequence, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, RequestFailed
from githubkit.versions.latest.models import GitCommit, GitRef, GitTree

from board_site_sync.configuration.models import GitHubAuthenticationType
from board_site_sync.schemas.tree import TreeEntryModel
from board_site_sync.utils.constants import DEFAULT_GITHUB_API_URL
from board_site_sync.utils.github import split_repository_in_configuration

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client
from .exceptions import GitHubRefNotFastForwardError, GitHubRequestError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def extract_error_details(exc: RequestFailed) -> tuple[str, list[Any]]:
    """Return the message and error list from a failed GitHub response body."""
    try:
        error_data = exc.response.json()
    except Exception:
        error_data = {}
    if not isinstance(error_data, dict):
        error_data = {}
    message = error_data.get("message") or str(exc)
    errors = error_data.get("errors") or []
    return message, errors


def is_not_fast_forward(exc: RequestFailed) -> bool:
    """Return True when GitHub rejected a reference update because it is not a fast forward."""
    if exc.response.status_code != 422:
        return False
    message, _ = extract_error_details(exc)
    return "fast forward" in message.lower()


def handle_github_request_failed(func: F) -> F:
    """Decorator translating githubkit errors into GitHubRequestError, logging the details.

    RequestFailed carries the status code and the service message; any other
    githubkit error (timeout, transport failure, expired credentials) has no status code.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            message, errors = extract_error_details(exc)
            status_code = exc.response.status_code
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                message=message,
                errors=errors,
                url=getattr(exc.response, "url", None),
                status_code=status_code,
            )
            if func.__name__ == "update_ref" and is_not_fast_forward(exc):
                raise GitHubRefNotFastForwardError(func.__name__, message, status_code=status_code, errors=errors) from exc
            raise GitHubRequestError(func.__name__, message, status_code=status_code, errors=errors) from exc
        except GitHubException as exc:
            message = f"{type(exc).__name__}: {getattr(exc, 'exc', exc)}"
            logger.error("GitHub request failed", function=func.__name__, message=message)
            raise GitHubRequestError(func.__name__, message) from exc

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = DEFAULT_GITHUB_API_URL,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
            RuntimeError: If required parameters for the chosen auth type are missing
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    # Reference Operations
    @handle_github_request_failed
    async def get_ref_sha(self, ref: str) -> str:
        """Get the commit SHA a reference such as 'heads/main' points at."""
        response: Response[GitRef] = await self.client.rest.git.async_get_ref(owner=self.owner, repo=self.repo_name, ref=ref)
        sha = response.parsed_data.object_.sha
        logger.debug("Read reference", ref=ref, sha=sha)
        return sha

    @handle_github_request_failed
    async def update_ref(self, ref: str, sha: str, force: bool = False) -> str:
        """Move a reference to a new commit.

        With force disabled GitHub only accepts a fast forward, so a branch that
        moved since its tip was read is rejected instead of overwritten.
        """
        response: Response[GitRef] = await self.client.rest.git.async_update_ref(
            owner=self.owner,
            repo=self.repo_name,
            ref=ref,
            sha=sha,
            force=force,
        )
        new_sha = response.parsed_data.object_.sha
        logger.info("Updated reference", ref=ref, sha=new_sha, force=force)
        return new_sha

    # Commit Operations
    @handle_github_request_failed
    async def get_commit_tree_sha(self, commit_sha: str) -> str:
        """Get the SHA of the tree recorded in a commit."""
        response: Response[GitCommit] = await self.client.rest.git.async_get_commit(
            owner=self.owner,
            repo=self.repo_name,
            commit_sha=commit_sha,
        )
        return response.parsed_data.tree.sha

    @handle_github_request_failed
    async def create_commit(self, message: str, tree_sha: str, parents: Sequence[str]) -> str:
        """Create a commit object and return its SHA."""
        response: Response[GitCommit] = await self.client.rest.git.async_create_commit(
            owner=self.owner,
            repo=self.repo_name,
            message=message,
            tree=tree_sha,
            parents=list(parents),
        )
        sha = response.parsed_data.sha
        logger.info("Created commit", sha=sha, tree_sha=tree_sha, parents=list(parents))
        return sha

    # Tree Operations
    @handle_github_request_failed
    async def create_tree(self, base_tree_sha: str, entries: Sequence[TreeEntryModel]) -> str:
        """Create a tree from inline file contents layered onto the base tree."""
        response: Response[GitTree] = await self.client.rest.git.async_create_tree(
            owner=self.owner,
            repo=self.repo_name,
            base_tree=base_tree_sha,
            tree=[entry.as_git_tree_item() for entry in entries],  # type: ignore[misc]
        )
        sha = response.parsed_data.sha
        logger.info("Created tree", sha=sha, base_tree_sha=base_tree_sha, entry_count=len(entries))
        return sha
