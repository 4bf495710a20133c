from typing import Optional
import uuid

from fastapi import APIRouter, Body, Depends, Request, status

from smartq.api.dependencies.users import get_current_active_user, has_role, require_provider
from smartq.exceptions import PermissionDeniedError
from smartq.models.user import User, UserRole
from smartq.schemas.queue_entry import (
    EntryListResponse,
    EntryPositionResponse,
    EntryResponse,
    EntryStatusUpdate,
    JoinQueueRequest,
    QueueEntryRead,
    QueueEntryWithPosition,
)
from smartq.services.queue_entry_service import QueueEntryService

router = APIRouter()


def get_queue_entry_service(request: Request) -> QueueEntryService:
    return request.app.state.queue_entry_service


@router.get("/mine", response_model=EntryListResponse)
async def fetch_my_entries(
    entry_service: QueueEntryService = Depends(get_queue_entry_service),
    current_user: User = Depends(get_current_active_user),
):
    entries = await entry_service.get_entries_for_user(current_user.id)
    return EntryListResponse(
        message="Queue entries successfully fetched",
        entries=[QueueEntryRead.model_validate(e) for e in entries],
    )


@router.post("/{queue_id}/join", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
async def join_queue(
    queue_id: uuid.UUID,
    join_in: Optional[JoinQueueRequest] = Body(default=None),
    entry_service: QueueEntryService = Depends(get_queue_entry_service),
    current_user: User = Depends(get_current_active_user),
):
    """
    Adds a waiting entry to the queue and returns it with its position number.
    """
    user_id = current_user.id
    if join_in and join_in.user_id and join_in.user_id != current_user.id:
        if not has_role(current_user, UserRole.SERVICE_PROVIDER, UserRole.ADMIN):
            raise PermissionDeniedError("Cannot join a queue on behalf of another user")
        user_id = join_in.user_id

    entry = await entry_service.join_queue(queue_id, user_id)
    return EntryResponse(message="Queue entry successfully created", entry=QueueEntryRead.model_validate(entry))


@router.get("/{queue_id}/entries", response_model=EntryListResponse)
async def fetch_queue_entries(
    queue_id: uuid.UUID,
    entry_service: QueueEntryService = Depends(get_queue_entry_service),
):
    entries = await entry_service.get_queue_entries(queue_id)
    return EntryListResponse(
        message="Queue entries successfully fetched",
        entries=[QueueEntryRead.model_validate(e) for e in entries],
    )


@router.patch("/{entry_id}/status", response_model=EntryResponse)
async def update_queue_entry_status(
    entry_id: uuid.UUID,
    status_in: EntryStatusUpdate,
    entry_service: QueueEntryService = Depends(get_queue_entry_service),
    current_user: User = Depends(require_provider),
):
    entry = await entry_service.update_entry_status(entry_id, status_in.status)
    return EntryResponse(message="Queue entry status successfully changed", entry=QueueEntryRead.model_validate(entry))


@router.get("/{entry_id}/position", response_model=EntryPositionResponse)
async def fetch_entry_position(
    entry_id: uuid.UUID,
    entry_service: QueueEntryService = Depends(get_queue_entry_service),
    current_user: User = Depends(get_current_active_user),
):
    entry, position = await entry_service.get_entry_with_position(entry_id)
    data = QueueEntryRead.model_validate(entry).model_dump()
    return EntryPositionResponse(
        message="Queue entry position successfully fetched",
        entry=QueueEntryWithPosition(**data, position=position),
    )
