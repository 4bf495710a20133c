"""
Tests for QueueEntryRepository - queue entry database operations.
"""
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from smartq.models.queue_entry import QueueEntry
from smartq.repositories.queue_entry import QueueEntryRepository


@pytest.fixture
def mock_session():
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    return session


@pytest.fixture
def entry_repo(mock_session):
    return QueueEntryRepository(mock_session)


def _scalars_result(first=None, all_=None):
    mock_scalars = MagicMock()
    mock_scalars.first.return_value = first
    mock_scalars.all.return_value = all_ or []
    mock_result = MagicMock()
    mock_result.scalars.return_value = mock_scalars
    return mock_result


class TestQueueEntryRepositoryInit:

    def test_init(self, mock_session):
        repo = QueueEntryRepository(mock_session)
        assert repo.session == mock_session
        assert repo.model == QueueEntry


class TestGetById:

    @pytest.mark.asyncio
    async def test_found(self, entry_repo, mock_session):
        mock_entry = MagicMock(spec=QueueEntry)
        mock_session.execute.return_value = _scalars_result(first=mock_entry)

        entry = await entry_repo.get_by_id(uuid.uuid4())

        assert entry == mock_entry
        mock_session.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_with_user_loads_relationship(self, entry_repo, mock_session):
        mock_session.execute.return_value = _scalars_result(first=None)

        entry = await entry_repo.get_by_id(uuid.uuid4(), with_user=True)

        assert entry is None
        query = mock_session.execute.call_args[0][0]
        assert query.get_execution_options().get("populate_existing") is True

    @pytest.mark.asyncio
    async def test_for_update_locks_row(self, entry_repo, mock_session):
        mock_session.execute.return_value = _scalars_result(first=None)

        await entry_repo.get_by_id(uuid.uuid4(), for_update=True)

        query = mock_session.execute.call_args[0][0]
        assert "FOR UPDATE" in str(query)
        assert query.get_execution_options().get("populate_existing") is True


class TestGetLastEntry:

    @pytest.mark.asyncio
    async def test_orders_by_number_descending(self, entry_repo, mock_session):
        mock_entry = MagicMock(spec=QueueEntry)
        mock_entry.queue_number = 4
        mock_session.execute.return_value = _scalars_result(first=mock_entry)

        entry = await entry_repo.get_last_entry(uuid.uuid4())

        assert entry.queue_number == 4
        compiled = str(mock_session.execute.call_args[0][0])
        assert "ORDER BY queue_entries.queue_number DESC" in compiled
        assert "LIMIT" in compiled

    @pytest.mark.asyncio
    async def test_empty_queue(self, entry_repo, mock_session):
        mock_session.execute.return_value = _scalars_result(first=None)
        assert await entry_repo.get_last_entry(uuid.uuid4()) is None


class TestGetActiveForUser:

    @pytest.mark.asyncio
    async def test_filters_on_waiting_status(self, entry_repo, mock_session):
        mock_session.execute.return_value = _scalars_result(first=None)

        await entry_repo.get_active_for_user(uuid.uuid4(), uuid.uuid4())

        compiled = str(mock_session.execute.call_args[0][0])
        assert "queue_entries.status" in compiled
        assert "queue_entries.user_id" in compiled


class TestGetAllForQueue:

    @pytest.mark.asyncio
    async def test_returns_entries_in_ascending_order(self, entry_repo, mock_session):
        mock_entries = [MagicMock(spec=QueueEntry) for _ in range(3)]
        mock_session.execute.return_value = _scalars_result(all_=mock_entries)

        entries = await entry_repo.get_all_for_queue(uuid.uuid4())

        assert entries == mock_entries
        compiled = str(mock_session.execute.call_args[0][0])
        assert "ORDER BY queue_entries.queue_number ASC" in compiled


class TestCountWaitingAhead:

    @pytest.mark.asyncio
    async def test_returns_scalar_count(self, entry_repo, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = 2
        mock_session.execute.return_value = mock_result

        assert await entry_repo.count_waiting_ahead(uuid.uuid4(), 5) == 2


class TestSave:

    @pytest.mark.asyncio
    async def test_save_adds_and_flushes(self, entry_repo, mock_session):
        entry = QueueEntry(queue_id=uuid.uuid4(), user_id=uuid.uuid4(), queue_number=1)

        result = await entry_repo.save(entry)

        assert result is entry
        mock_session.add.assert_called_once_with(entry)
        mock_session.flush.assert_awaited_once()
        mock_session.refresh.assert_awaited_once_with(entry)
