from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from smartq.api.dependencies.users import require_provider
from smartq.db.database import get_db_session
from smartq.models.user import User
from smartq.schemas.queue import (
    QueueCreate,
    QueueDetail,
    QueueListResponse,
    QueueRead,
    QueueResponse,
    QueueStatusUpdate,
)
from smartq.services.queue_service import QueueService

router = APIRouter()


def get_queue_service(db: AsyncSession = Depends(get_db_session)) -> QueueService:
    return QueueService(db)


@router.post("/", response_model=QueueResponse, status_code=status.HTTP_201_CREATED)
async def register_queue(
    queue_in: QueueCreate,
    queue_service: QueueService = Depends(get_queue_service),
    current_user: User = Depends(require_provider),
):
    queue = await queue_service.create_queue(queue_in.service_id, max_capacity=queue_in.max_capacity)
    return QueueResponse(message="Queue successfully created", queue=QueueDetail.model_validate(queue))


@router.get("/", response_model=QueueListResponse)
async def fetch_all_queues(queue_service: QueueService = Depends(get_queue_service)):
    queues = await queue_service.list_queues()
    return QueueListResponse(
        message="Queues successfully fetched",
        queues=[QueueRead.model_validate(q) for q in queues],
    )


@router.get("/{queue_id}", response_model=QueueResponse)
async def fetch_queue_details(
    queue_id: uuid.UUID,
    queue_service: QueueService = Depends(get_queue_service),
):
    queue = await queue_service.get_queue(queue_id)
    return QueueResponse(message="Queue successfully fetched", queue=QueueDetail.model_validate(queue))


@router.patch("/{queue_id}/status", response_model=QueueResponse)
async def update_queue_status(
    queue_id: uuid.UUID,
    status_in: QueueStatusUpdate,
    queue_service: QueueService = Depends(get_queue_service),
    current_user: User = Depends(require_provider),
):
    """
    Opens or closes a queue. Closed queues reject new joiners.
    """
    queue = await queue_service.update_queue_status(queue_id, status_in.status)
    return QueueResponse(message="Queue successfully updated", queue=QueueDetail.model_validate(queue))
