"""Builds the outgoing tree delta for a board snapshot.

Everything in this module is pure: a board goes in, path/content entries come
out, and nothing talks to a remote service. Three kinds of files are produced:

- ``_data/lists.json``: list id to list name for every public list,
- ``_<item_path>/<slug>/index.html``: a front matter stub per public card,
- ``_data/all.json``: the public cards, as fetched.

A list is public when its name does not start with the private prefix; a card
is public when its list is public. Cards on private or unknown lists are
dropped without error.
"""

import json
from functools import lru_cache
from typing import Any

import jinja2
import structlog

from board_site_sync.schemas.board import BoardModel, CardModel
from board_site_sync.schemas.tree import TreeDeltaModel, TreeEntryModel
from board_site_sync.utils.constants import (
    CARD_INDEX_PATH_TEMPLATE,
    CARD_INDEX_TEMPLATE_NAME,
    CARDS_DATA_PATH,
    JSON_ESCAPED_CHARACTERS,
    JSON_INDENT,
    LISTS_DATA_PATH,
    PRIVATE_LIST_PREFIX,
)
from board_site_sync.utils.helpers import slugify
from board_site_sync.utils.templates import TEMPLATES_DIR, construct_jinja2_template_from_file, render_template_with_model

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def get_card_index_template() -> jinja2.Template:
    """Return the (cached) template used to render card stub documents."""
    return construct_jinja2_template_from_file(TEMPLATES_DIR / CARD_INDEX_TEMPLATE_NAME)


def dump_json(data: Any, sort_keys: bool = False) -> str:
    """Serialize data as pretty-printed JSON for a site data file.

    Non-ASCII text is kept as is; "<", ">", "&" and the Unicode line separators
    are written as \\u escapes. These characters only ever occur inside strings.
    """
    content = json.dumps(data, indent=JSON_INDENT, ensure_ascii=False, sort_keys=sort_keys)
    for character, escape in JSON_ESCAPED_CHARACTERS.items():
        content = content.replace(character, escape)
    return content


def build_list_map(board: BoardModel, private_prefix: str = PRIVATE_LIST_PREFIX) -> dict[str, str]:
    """Map list id to list name for every list whose name does not start with the private prefix."""
    return {board_list.id: board_list.name for board_list in board.lists if not board_list.name.startswith(private_prefix)}


def filter_cards(board: BoardModel, list_map: dict[str, str]) -> list[CardModel]:
    """Return the cards whose list is in the list map, in board order."""
    return [card for card in board.cards if card.id_list in list_map]


def card_index_path(card: CardModel, item_path: str) -> str:
    """Return the repository path of a card's stub document.

    Cards whose names slugify identically share a path.
    """
    return CARD_INDEX_PATH_TEMPLATE.format(item_path=item_path, slug=slugify(card.name))


def render_card_index(card: CardModel) -> str:
    """Render the front matter stub for a card."""
    return render_template_with_model(model=card, template=get_card_index_template())


def build_tree_delta(board: BoardModel, item_path: str, private_prefix: str = PRIVATE_LIST_PREFIX) -> TreeDeltaModel:
    """Build the tree delta for a board snapshot.

    The list mapping comes first, then one stub per public card in board order,
    then the card list. When two cards map to the same stub path the later card
    wins and the entry keeps the position of the first one.
    """
    list_map = build_list_map(board, private_prefix=private_prefix)
    cards = filter_cards(board, list_map)

    card_entries: dict[str, TreeEntryModel] = {}
    for card in cards:
        path = card_index_path(card, item_path)
        if path in card_entries:
            logger.warning("Card path collision, later card wins", path=path, card_id=card.id, card_name=card.name)
        card_entries[path] = TreeEntryModel(path=path, content=render_card_index(card))

    entries = [
        TreeEntryModel(path=LISTS_DATA_PATH, content=dump_json(list_map, sort_keys=True)),
        *card_entries.values(),
        TreeEntryModel(
            path=CARDS_DATA_PATH,
            content=dump_json([card.model_dump(mode="json", by_alias=True) for card in cards]),
        ),
    ]

    logger.info(
        "Built tree delta",
        board_id=board.id,
        included_list_count=len(list_map),
        excluded_list_count=len(board.lists) - len(list_map),
        included_card_count=len(cards),
        excluded_card_count=len(board.cards) - len(cards),
        entry_count=len(entries),
    )
    return TreeDeltaModel(entries=tuple(entries))
