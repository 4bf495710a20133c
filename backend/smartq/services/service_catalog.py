import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from smartq.exceptions import NotFoundError
from smartq.models.service import Service
from smartq.repositories.service import ServiceRepository

logger = logging.getLogger(__name__)


class ServiceCatalogService:
    def __init__(self, session: AsyncSession, service_repository_class=ServiceRepository):
        self.session = session
        self.service_repo = service_repository_class(session)

    async def create_service(self, provider_id: uuid.UUID, name: str, location: Optional[str] = None) -> Service:
        service = Service(name=name, location=location, provider_id=provider_id)
        await self.service_repo.create(service)
        await self.session.commit()
        logger.info(f"Provider {provider_id} created service {service.id} '{name}'")
        return await self.get_service(service.id)

    async def list_services(self) -> List[Service]:
        return await self.service_repo.get_all_with_provider()

    async def get_service(self, service_id: uuid.UUID) -> Service:
        service = await self.service_repo.get_with_relations(service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service
