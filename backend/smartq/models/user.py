import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, Enum as SQLAlchemyEnum, String
from sqlalchemy.orm import relationship

from smartq.db.types import GUID
from smartq.models.base import Base


class UserRole(str, Enum):
    USER = "user"
    SERVICE_PROVIDER = "service provider"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    role = Column(
        SQLAlchemyEnum(UserRole, name="user_role_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=UserRole.USER.value,
    )
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    services = relationship("Service", back_populates="provider", lazy="noload")
    queue_entries = relationship("QueueEntry", back_populates="user", lazy="noload")
