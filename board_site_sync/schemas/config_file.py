"""Pydantic schema for the JSON configuration file (config/config.json)."""

from pydantic import BaseModel, ConfigDict, Field


class ConfigFileModel(BaseModel):
    """Pydantic model for the JSON configuration file.

    Every key is optional here; required settings are enforced once the file
    has been reconciled with command line options and environment variables.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    trello_api_key: str | None = Field(default=None, alias="TrelloApiKey")
    trello_user_token: str | None = Field(default=None, alias="TrelloUserToken")
    trello_board_id: str | None = Field(default=None, alias="TrelloBoardId")
    github_token: str | None = Field(default=None, alias="GithubToken")
    github_user: str | None = Field(default=None, alias="GithubUser")
    github_repo: str | None = Field(default=None, alias="GithubRepo")
    github_branch: str | None = Field(default=None, alias="GithubBranch")
    item_path: str | None = Field(default=None, alias="ItemPath")

    @property
    def repo(self) -> str | None:
        """Return the target repository as 'owner/repo' when both halves are set."""
        if self.github_user and self.github_repo:
            return f"{self.github_user}/{self.github_repo}"
        return None
