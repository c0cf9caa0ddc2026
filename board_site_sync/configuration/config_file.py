"""Loads the JSON configuration file."""

from pathlib import Path

import structlog
from pydantic import ValidationError

from board_site_sync.configuration.exceptions import ConfigurationFileError
from board_site_sync.schemas.config_file import ConfigFileModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE_PATH = Path("config") / "config.json"


def load_config_file(path: Path) -> ConfigFileModel:
    """Load and validate the JSON configuration file at the given path."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationFileError(path, "Cannot read configuration file.") from exc
    try:
        config_file = ConfigFileModel.model_validate_json(content)
    except ValidationError as exc:
        raise ConfigurationFileError(path, f"Invalid configuration file: {exc.errors(include_url=False)}") from exc
    logger.debug("Loaded configuration file", path=str(path))
    return config_file


def resolve_config_file(path: Path | None) -> ConfigFileModel | None:
    """Load an explicitly given configuration file, or the default one when it exists."""
    if path is not None:
        return load_config_file(path)
    if DEFAULT_CONFIG_FILE_PATH.is_file():
        return load_config_file(DEFAULT_CONFIG_FILE_PATH)
    return None
