import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt

from smartq.models.queue import QueueStatus
from smartq.schemas.queue_entry import QueueEntryRead
from smartq.schemas.service import ServiceRead


class QueueCreate(BaseModel):
    service_id: uuid.UUID
    max_capacity: Optional[PositiveInt] = None


class QueueStatusUpdate(BaseModel):
    status: QueueStatus


class QueueRead(BaseModel):
    id: uuid.UUID
    service_id: uuid.UUID
    status: QueueStatus
    max_capacity: Optional[int] = None
    current_size: int = 0
    last_queue_number: int = 0
    created_at: Optional[datetime] = None
    service: Optional[ServiceRead] = None

    model_config = ConfigDict(from_attributes=True)


class QueueDetail(QueueRead):
    entries: List[QueueEntryRead] = []


class QueueResponse(BaseModel):
    success: bool = True
    message: str
    queue: QueueDetail


class QueueListResponse(BaseModel):
    success: bool = True
    message: str
    queues: List[QueueRead]
