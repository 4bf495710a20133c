import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Column,
    DateTime,
    Enum as SQLAlchemyEnum,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from smartq.db.types import GUID
from smartq.models.base import Base


class EntryStatus(str, Enum):
    WAITING = "waiting"
    SERVED = "served"
    CANCELLED = "cancelled"


class QueueEntry(Base):
    """
    One user's claim to a position in a queue.
    """

    __tablename__ = "queue_entries"

    __table_args__ = (
        # Last line of defence for position numbering if two writers race
        UniqueConstraint("queue_id", "queue_number", name="uq_queue_entries_queue_number"),
        Index("ix_queue_entries_queue_user_status", "queue_id", "user_id", "status"),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    queue_id = Column(GUID, ForeignKey("queues.id"), nullable=False)
    user_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)

    queue_number = Column(Integer, nullable=False)
    status = Column(
        SQLAlchemyEnum(EntryStatus, name="entry_status_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=EntryStatus.WAITING.value,
    )

    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    served_at = Column(DateTime, nullable=True)

    queue = relationship("Queue", back_populates="entries", lazy="noload")
    user = relationship("User", back_populates="queue_entries", lazy="noload")
