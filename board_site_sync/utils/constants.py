"""Shared constants used across the application."""

# This file is intended to hold shared constants.

# Kanban Board Constants
# ----------------------

DEFAULT_TRELLO_API_URL = "https://api.trello.com"
"""Default base URL of the Trello REST API."""

PRIVATE_LIST_PREFIX = "PRIVATE"
"""Lists whose name starts with this prefix are never published (case-sensitive)."""

BOARD_FIELDS = ("name", "pos", "desc")
"""Board fields requested from the kanban service."""

CARD_FIELDS = ("name", "desc", "pos", "idList", "labels", "due")
"""Card fields requested from the kanban service. Anything else stays at its default."""

CARD_ATTACHMENT_FIELDS = ("name", "url")
"""Attachment fields requested for every card."""

DEFAULT_HTTP_TIMEOUT = 30.0
"""Default timeout in seconds for a single request to the kanban service."""

# Site Content Constants
# ----------------------

LISTS_DATA_PATH = "_data/lists.json"
"""Repository path of the list-id to list-name mapping."""

CARDS_DATA_PATH = "_data/all.json"
"""Repository path of the full filtered card list."""

CARD_INDEX_PATH_TEMPLATE = "_{item_path}/{slug}/index.html"
"""Repository path of the stub document generated for every published card."""

CARD_INDEX_TEMPLATE_NAME = "card_index.j2"
"""Jinja2 template (under the package templates directory) for the card stub."""

JSON_INDENT = "\t"
"""Indentation used for the generated JSON data files."""

JSON_ESCAPED_CHARACTERS = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
"""Characters written as \\u escapes in the generated JSON data files."""

# Git Data Constants
# ------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL."""

DEFAULT_BRANCH = "main"
"""Branch updated when none is configured."""

DEFAULT_COMMIT_MESSAGE = "updating cards"
"""Message of the commit created by every run."""

BLOB_FILE_MODE = "100644"
"""Git file mode of every generated entry (regular, non-executable file)."""

BLOB_TYPE = "blob"
"""Git object type of every generated entry."""
