import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from smartq.db.types import GUID
from smartq.models.base import Base


class Service(Base):
    """
    A bookable service offered by a provider. Owns its queues.
    """

    __tablename__ = "services"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    location = Column(String, nullable=True)
    provider_id = Column(GUID, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    provider = relationship("User", back_populates="services", lazy="noload")
    queues = relationship("Queue", back_populates="service", lazy="noload")
