from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from smartq.api.dependencies.users import require_admin
from smartq.db.database import get_db_session
from smartq.repositories.user import UserRepository
from smartq.schemas.user import UserListResponse, UserRead

router = APIRouter()


@router.get("/users", response_model=UserListResponse, dependencies=[Depends(require_admin)])
async def fetch_all_users(db: AsyncSession = Depends(get_db_session)):
    users = await UserRepository(db).get_all_users()
    return UserListResponse(
        message="Users successfully fetched",
        users=[UserRead.model_validate(u) for u in users],
    )
