"""Pydantic schema for the kanban board snapshot consumed by a sync run.

Field names follow the Trello REST API so that a card serializes back to the
same shape it was fetched in. Only the fields requested by the board fetch are
modelled; anything else returned by the service is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class CardLabelModel(BaseModel):
    """Pydantic model for a label attached to a card."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    name: str = ""
    color: str | None = None


class CardAttachmentModel(BaseModel):
    """Pydantic model for a card attachment (only name and URL are requested)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    name: str = ""
    url: str = ""


class CardModel(BaseModel):
    """Pydantic model for a kanban card."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    desc: str = ""
    pos: int | float = 0
    id_list: str = Field(default="", alias="idList")
    labels: tuple[CardLabelModel, ...] = ()
    due: str | None = None
    attachments: tuple[CardAttachmentModel, ...] = ()


class BoardListModel(BaseModel):
    """Pydantic model for a kanban list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""
    closed: bool = False
    pos: int | float = 0


class BoardModel(BaseModel):
    """Pydantic model for a board snapshot with its open lists and cards."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""
    desc: str = ""
    lists: tuple[BoardListModel, ...] = ()
    cards: tuple[CardModel, ...] = ()
