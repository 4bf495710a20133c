import uuid
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from smartq.models.queue_entry import EntryStatus, QueueEntry
from smartq.repositories.base import BaseRepository


class QueueEntryRepository(BaseRepository[QueueEntry]):
    def __init__(self, session: AsyncSession):
        super().__init__(QueueEntry, session)

    async def get_by_id(
        self, entry_id: uuid.UUID, with_user: bool = False, for_update: bool = False
    ) -> QueueEntry | None:
        """
        With ``for_update`` the row stays locked until the surrounding
        transaction ends (ignored by SQLite).
        """
        query = select(self.model).where(self.model.id == entry_id)
        if with_user:
            query = query.options(selectinload(self.model.user))
        if for_update:
            query = query.with_for_update()
        if with_user or for_update:
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def get_last_entry(self, queue_id: uuid.UUID) -> QueueEntry | None:
        """
        Returns the entry holding the highest queue_number in the queue.
        queue_number is unique per queue, so no tie-break is needed.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.queue_id == queue_id)
            .order_by(self.model.queue_number.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def get_active_for_user(self, queue_id: uuid.UUID, user_id: uuid.UUID) -> QueueEntry | None:
        """
        Returns the user's waiting entry in the queue, if any.
        """
        result = await self.session.execute(
            select(self.model).where(
                self.model.queue_id == queue_id,
                self.model.user_id == user_id,
                self.model.status == EntryStatus.WAITING.value,
            )
        )
        return result.scalars().first()

    async def get_all_for_queue(self, queue_id: uuid.UUID) -> List[QueueEntry]:
        """
        All entries of a queue in line order (queue_number ascending).
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.queue_id == queue_id)
            .options(selectinload(self.model.user))
            .order_by(self.model.queue_number.asc())
        )
        return result.scalars().all()

    async def get_all_for_user(self, user_id: uuid.UUID, limit: int = 100) -> List[QueueEntry]:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.joined_at.desc(), self.model.queue_number.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def count_waiting_ahead(self, queue_id: uuid.UUID, queue_number: int) -> int:
        """
        Number of waiting entries in the queue with a lower queue_number.
        """
        result = await self.session.execute(
            select(func.count(self.model.id)).where(
                self.model.queue_id == queue_id,
                self.model.status == EntryStatus.WAITING.value,
                self.model.queue_number < queue_number,
            )
        )
        return result.scalar_one()

    async def save(self, entry: QueueEntry) -> QueueEntry:
        return await self.create(entry)
