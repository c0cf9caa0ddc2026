"""Contains exceptions raised by the GitHub client adapter."""


class GitHubRequestError(Exception):
    """Raised when a GitHub API call fails, carrying the service's own message."""

    def __init__(self, operation: str, message: str, status_code: int | None = None, errors: list | None = None) -> None:
        """Initializes the exception with the failed operation and the service's explanation."""
        detail = f"{message} (status {status_code})" if status_code is not None else message
        if errors:
            detail = f"{detail} | errors: {errors}"
        super().__init__(f"GitHub {operation} failed: {detail}")
        self.operation = operation
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class GitHubRefNotFastForwardError(GitHubRequestError):
    """Raised when a non-forced reference update is rejected because the branch moved."""

    pass
