from .base import Base
from .queue import Queue, QueueStatus
from .queue_entry import EntryStatus, QueueEntry
from .service import Service
from .user import User, UserRole

__all__ = [
    "Base",
    "EntryStatus",
    "Queue",
    "QueueEntry",
    "QueueStatus",
    "Service",
    "User",
    "UserRole",
]
