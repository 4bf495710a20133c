import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from smartq.models.service import Service
from smartq.repositories.base import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    def __init__(self, session: AsyncSession):
        super().__init__(Service, session)

    async def get_with_relations(self, service_id: uuid.UUID) -> Service | None:
        """
        Retrieves a service with its provider and queues loaded.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == service_id)
            .options(selectinload(self.model.provider), selectinload(self.model.queues))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_all_with_provider(self) -> list[Service]:
        result = await self.session.execute(
            select(self.model)
            .options(selectinload(self.model.provider))
            .order_by(self.model.created_at)
        )
        return result.scalars().all()
