import logging
import uuid
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from smartq.exceptions import NotFoundError
from smartq.models.queue import Queue, QueueStatus
from smartq.repositories.queue import QueueRepository
from smartq.repositories.service import ServiceRepository

logger = logging.getLogger(__name__)


class QueueService:
    """
    Provider-side queue management: creation, open/closed toggle, lookups.
    Instantiated per request around the request's session.
    """

    def __init__(
        self,
        session: AsyncSession,
        queue_repository_class=QueueRepository,
        service_repository_class=ServiceRepository,
    ):
        self.session = session
        self.queue_repo = queue_repository_class(session)
        self.service_repo = service_repository_class(session)

    async def create_queue(self, service_id: uuid.UUID, max_capacity: Optional[int] = None) -> Queue:
        service = await self.service_repo.get(service_id)
        if not service:
            raise NotFoundError("Service not found")

        queue = Queue(
            service_id=service.id,
            status=QueueStatus.OPEN.value,
            max_capacity=max_capacity,
            current_size=0,
            last_queue_number=0,
        )
        await self.queue_repo.create(queue)
        await self.session.commit()
        logger.info(f"Created queue {queue.id} for service {service_id} (capacity {max_capacity or 'unbounded'})")
        return await self.get_queue(queue.id)

    async def get_queue(self, queue_id: uuid.UUID) -> Queue:
        queue = await self.queue_repo.get_with_relations(queue_id)
        if not queue:
            raise NotFoundError("Queue not found")
        return queue

    async def update_queue_status(self, queue_id: uuid.UUID, status: Union[str, QueueStatus]) -> Queue:
        queue = await self.queue_repo.get_by_id(queue_id, for_update=True)
        if not queue:
            raise NotFoundError("Queue not found")

        queue.status = QueueStatus(status).value
        await self.queue_repo.save(queue)
        await self.session.commit()
        logger.info(f"Queue {queue_id} is now {queue.status}")
        return await self.get_queue(queue_id)

    async def list_queues(self) -> List[Queue]:
        return await self.queue_repo.get_all_with_service()
