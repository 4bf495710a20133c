from typing import Optional
import logging
import uuid

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from smartq.core.security import decode_token
from smartq.db.database import get_db_session
from smartq.models.user import User, UserRole
from smartq.repositories.user import UserRepository

logger = logging.getLogger(__name__)

# Token is optional here so the cookie can be used instead of the header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/users/login", auto_error=False)

COOKIE_NAME = "access_token"


def get_token_from_cookie(request: Request) -> Optional[str]:
    """Extract token from httpOnly cookie."""
    cookie_value = request.cookies.get(COOKIE_NAME)
    if cookie_value and cookie_value.startswith("Bearer "):
        return cookie_value[7:]
    return None


async def get_current_user(
    request: Request,
    header_token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    # Try header token first, then cookie
    token = header_token or get_token_from_cookie(request)
    if not token:
        raise credentials_exception

    payload = decode_token(token)
    if payload is None or payload.get("sub") is None:
        raise credentials_exception

    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        raise credentials_exception

    user = await UserRepository(db).get(user_id)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return current_user


def has_role(user: User, *roles: UserRole) -> bool:
    return user.role in roles or user.role in [r.value for r in roles]


def require_roles(*roles: UserRole):
    """
    Dependency factory restricting an endpoint to the given roles.

        @router.post("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """
    async def _checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not has_role(current_user, *roles):
            logger.warning(f"User {current_user.id} with role '{current_user.role}' denied; requires {[r.value for r in roles]}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
        return current_user

    return _checker


require_provider = require_roles(UserRole.SERVICE_PROVIDER, UserRole.ADMIN)
require_admin = require_roles(UserRole.ADMIN)
