import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from smartq.models.queue import Queue
from smartq.models.queue_entry import QueueEntry
from smartq.repositories.base import BaseRepository


class QueueRepository(BaseRepository[Queue]):
    def __init__(self, session: AsyncSession):
        super().__init__(Queue, session)

    async def get_by_id(self, queue_id: uuid.UUID, for_update: bool = False) -> Queue | None:
        """
        Retrieves a queue by id. With ``for_update`` the row stays locked
        until the surrounding transaction ends (ignored by SQLite).
        """
        query = select(self.model).where(self.model.id == queue_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def get_with_relations(self, queue_id: uuid.UUID) -> Queue | None:
        """
        Retrieves a queue with its service and its entries (and their users).
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == queue_id)
            .options(
                selectinload(self.model.service),
                selectinload(self.model.entries).selectinload(QueueEntry.user),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_all_with_service(self) -> list[Queue]:
        result = await self.session.execute(
            select(self.model)
            .options(selectinload(self.model.service))
            .order_by(self.model.created_at)
        )
        return result.scalars().all()

    async def save(self, queue: Queue) -> Queue:
        return await self.update(queue)
