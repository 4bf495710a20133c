import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from smartq.models.user import UserRole


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=32)


class UserCreate(UserBase):
    password: str = Field(min_length=6, max_length=72)
    role: UserRole = UserRole.USER

    @field_validator("role")
    @classmethod
    def no_self_registered_admins(cls, v: UserRole) -> UserRole:
        # Admin accounts are created with scripts/create_admin.py
        if v == UserRole.ADMIN:
            raise ValueError("Admin accounts cannot be self-registered")
        return v


class UserRead(UserBase):
    id: uuid.UUID
    role: UserRole
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    success: bool = True
    message: str
    user: UserRead


class UserListResponse(BaseModel):
    success: bool = True
    message: str
    users: List[UserRead]


class TokenResponse(BaseModel):
    success: bool = True
    message: str = "login successful"
    access_token: str
    token_type: str = "bearer"
    user: UserRead
