from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartq.models.user import User
from smartq.repositories.base import BaseRepository
from smartq.schemas.user import UserCreate


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).filter(User.email == email.lower()))
        return result.scalars().first()

    async def create_user(self, user_in: UserCreate, hashed_password: str) -> User:
        db_user = User(
            name=user_in.name,
            email=user_in.email.lower(),
            phone=user_in.phone,
            role=user_in.role.value,
            hashed_password=hashed_password,
        )
        return await self.create(db_user)

    async def get_all_users(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.created_at))
        return result.scalars().all()
