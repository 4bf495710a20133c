import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from smartq.models.queue import QueueStatus
from smartq.schemas.user import UserRead


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    location: Optional[str] = Field(default=None, max_length=255)


class ServiceRead(BaseModel):
    id: uuid.UUID
    name: str
    location: Optional[str] = None
    provider_id: uuid.UUID
    created_at: Optional[datetime] = None
    provider: Optional[UserRead] = None

    model_config = ConfigDict(from_attributes=True)


class QueueSummary(BaseModel):
    """Queue as listed under its service."""
    id: uuid.UUID
    status: QueueStatus
    max_capacity: Optional[int] = None
    current_size: int = 0
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ServiceDetail(ServiceRead):
    queues: List[QueueSummary] = []


class ServiceResponse(BaseModel):
    success: bool = True
    message: str
    service: ServiceDetail


class ServiceListResponse(BaseModel):
    success: bool = True
    message: str
    services: List[ServiceRead]
