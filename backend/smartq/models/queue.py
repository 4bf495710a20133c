import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum as SQLAlchemyEnum,
    ForeignKey,
    Integer,
)
from sqlalchemy.orm import relationship

from smartq.db.types import GUID
from smartq.models.base import Base


class QueueStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class Queue(Base):
    """
    A line attached to one service. Holds entries ordered by queue_number.

    current_size counts successful joins and is never decremented.
    last_queue_number is the last position number handed out; the next
    joiner receives last_queue_number + 1.
    """

    __tablename__ = "queues"

    __table_args__ = (
        CheckConstraint("current_size >= 0", name="ck_queues_current_size_non_negative"),
        CheckConstraint("max_capacity IS NULL OR max_capacity > 0", name="ck_queues_max_capacity_positive"),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    service_id = Column(GUID, ForeignKey("services.id"), nullable=False, index=True)

    status = Column(
        SQLAlchemyEnum(QueueStatus, name="queue_status_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=QueueStatus.OPEN.value,
    )
    max_capacity = Column(Integer, nullable=True)
    current_size = Column(Integer, nullable=False, default=0)
    last_queue_number = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)

    service = relationship("Service", back_populates="queues", lazy="noload")
    entries = relationship(
        "QueueEntry",
        back_populates="queue",
        lazy="noload",
        order_by="QueueEntry.queue_number",
    )

    @property
    def is_full(self) -> bool:
        if not self.max_capacity:
            return False
        return (self.current_size or 0) >= self.max_capacity
