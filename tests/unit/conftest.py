"""Fixtures for unit tests."""

from typing import Generator

import pytest
import structlog

from board_site_sync.schemas.board import BoardListModel, BoardModel, CardModel


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def example_board() -> BoardModel:
    """A board with one private list, one public list and one card on each."""
    return BoardModel(
        id="board-1",
        name="Podcast",
        lists=(
            BoardListModel(id="id1", name="PRIVATE-notes"),
            BoardListModel(id="id2", name="Tasks"),
        ),
        cards=(
            CardModel(id="c0", name="Secret plan", id_list="id1"),
            CardModel(id="c1", name="Fix bug", id_list="id2", desc="Crash on start", pos=16384),
        ),
    )


@pytest.fixture
def empty_board() -> BoardModel:
    """A board with no lists and no cards."""
    return BoardModel(id="board-empty")
