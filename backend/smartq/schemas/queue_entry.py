import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from smartq.models.queue_entry import EntryStatus
from smartq.schemas.user import UserRead


class JoinQueueRequest(BaseModel):
    # Only honoured for providers/admins joining on behalf of someone;
    # regular users always join as themselves.
    user_id: Optional[uuid.UUID] = None


class EntryStatusUpdate(BaseModel):
    status: EntryStatus


class QueueEntryRead(BaseModel):
    id: uuid.UUID
    queue_id: uuid.UUID
    user_id: uuid.UUID
    queue_number: int
    status: EntryStatus
    joined_at: datetime
    served_at: Optional[datetime] = None
    user: Optional[UserRead] = None

    model_config = ConfigDict(from_attributes=True)


class QueueEntryWithPosition(QueueEntryRead):
    # 1-based place among waiting entries; None once served or cancelled
    position: Optional[int] = None


class EntryResponse(BaseModel):
    success: bool = True
    message: str
    entry: QueueEntryRead


class EntryPositionResponse(BaseModel):
    success: bool = True
    message: str
    entry: QueueEntryWithPosition


class EntryListResponse(BaseModel):
    success: bool = True
    message: str
    entries: List[QueueEntryRead]
