"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases
or the network.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from stickyboard.backend.schemas.sticky import ColorClass
from stickyboard.board.models import NoteSnapshot, Position, Size
from stickyboard.board.stacking import StackingOrder
from stickyboard.board.surface import Document


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = StickyRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = Sticky(id="123")
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    return result


# =============================================================================
# HTTP Mock Fixtures
# =============================================================================


class MockResponse:
    """Mock HTTP response for testing."""

    def __init__(
        self,
        status_code: int,
        json_data: Any = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.text = text or str(json_data)

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON body")
        return self._json_data


@pytest.fixture
def mock_response() -> type[MockResponse]:
    """Provide MockResponse class for creating mock HTTP responses."""
    return MockResponse


@pytest.fixture
def mock_api() -> MagicMock:
    """
    Mock APIClient for the persistence client.

    Usage:
        async def test_update(mock_api, mock_response):
            mock_api.request.return_value = mock_response(200, {...})
            store = StickyStoreClient(mock_api)
    """
    api = MagicMock()
    api.request = AsyncMock()
    api.close = AsyncMock()
    return api


# =============================================================================
# Board Fixtures
# =============================================================================


@pytest.fixture
def snapshot() -> NoteSnapshot:
    """A stored note at (50, 50), 250x250, z-index 1."""
    return NoteSnapshot(
        id="note-1",
        color=ColorClass.YELLOW,
        position=Position(50, 50),
        size=Size(250, 250),
        z_index=1,
        text="",
    )


@pytest.fixture
def mock_store() -> MagicMock:
    """Persistence client double whose calls all succeed."""
    store = MagicMock()
    store.update = AsyncMock(side_effect=lambda snap: snap)
    store.create = AsyncMock()
    store.delete = AsyncMock(return_value=None)
    store.list_all = AsyncMock(return_value=[])
    return store


@pytest.fixture
def stacking() -> StackingOrder:
    return StackingOrder()


@pytest.fixture
def document() -> Document:
    return Document()


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                ...
                mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
