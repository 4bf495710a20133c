from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from smartq.api.dependencies.users import COOKIE_NAME, get_current_active_user
from smartq.core.config import settings
from smartq.core.security import create_access_token, get_password_hash, verify_password
from smartq.db.database import get_db_session
from smartq.models.user import User
from smartq.rate_limiter import limiter
from smartq.repositories.user import UserRepository
from smartq.schemas.user import TokenResponse, UserCreate, UserRead, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def set_auth_cookie(response: Response, token: str, max_age: int):
    """Set httpOnly cookie with the access token."""
    response.set_cookie(
        key=COOKIE_NAME,
        value=f"Bearer {token}",
        httponly=True,
        secure=settings.ENVIRONMENT == "production",  # HTTPS only in production
        samesite="lax",
        max_age=max_age,
        path="/",
    )


def clear_auth_cookie(response: Response):
    response.delete_cookie(key=COOKIE_NAME, path="/")


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
async def register_user(
    request: Request,
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db_session),
):
    user_repo = UserRepository(db)
    existing_email = await user_repo.get_by_email(user_in.email)
    if existing_email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    hashed_password = get_password_hash(user_in.password)
    try:
        user = await user_repo.create_user(user_in, hashed_password)
        await db.commit()
    except IntegrityError:
        # A concurrent registration claimed the email after the check above
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    logger.info(f"Registered user {user.id} with role '{user.role.value}'")
    return UserResponse(message="User successfully created", user=UserRead.model_validate(user))


@router.post("/login", response_model=TokenResponse)
@limiter.limit("10/minute")
async def login_for_access_token(
    request: Request,
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db_session),
):
    # The OAuth2 form field is called "username"; users log in with their email
    user_repo = UserRepository(db)
    user = await user_repo.get_by_email(form_data.username)
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    role = user.role.value if hasattr(user.role, "value") else user.role
    access_token, expires_in = create_access_token(data={"sub": str(user.id), "role": role})
    set_auth_cookie(response, access_token, max_age=expires_in)

    return TokenResponse(access_token=access_token, user=UserRead.model_validate(user))


@router.post("/logout")
async def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True, "message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_active_user)):
    return UserResponse(message="User successfully fetched", user=UserRead.model_validate(current_user))
