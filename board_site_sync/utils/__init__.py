"""Utility modules for shared functionality."""

from .constants import (
    CARDS_DATA_PATH,
    DEFAULT_COMMIT_MESSAGE,
    LISTS_DATA_PATH,
    PRIVATE_LIST_PREFIX,
)
from .helpers import slugify

__all__ = [
    "CARDS_DATA_PATH",
    "LISTS_DATA_PATH",
    "DEFAULT_COMMIT_MESSAGE",
    "PRIVATE_LIST_PREFIX",
    "slugify",
]
