"""Contains exceptions raised when reconciling application configuration."""

from pathlib import Path


class ConfigurationError(Exception):
    """Base class for configuration errors; these are fatal and stop a run before any remote call."""

    pass


class GitHubAuthenticationConfigurationUndefinedError(ConfigurationError):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class RequiredConfigurationElementError(ConfigurationError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(f"Missing required configuration element: {name} (command line option --{cli_name}, environment variable {env_name})")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class InvalidConfigurationElementError(ConfigurationError):
    """Raised when a configuration element is present but malformed."""

    def __init__(self, name: str, reason: str) -> None:
        """Initializes the exception with the offending element and why it was rejected."""
        super().__init__(f"Invalid configuration element {name}: {reason}")
        self.name = name
        self.reason = reason


class ConfigurationFileError(ConfigurationError):
    """Raised when the JSON configuration file cannot be read or is invalid."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initializes the exception with the file path and the failure reason."""
        super().__init__(f"{reason} ({path})")
        self.path = path
        self.reason = reason
