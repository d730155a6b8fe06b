"""
Authentication Router
Endpoints for registration, login, and current user information.

Tokens are stateless: logging out only discards the token on the client,
and a discarded token stays valid until it expires.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Settings
from app.database import get_db
from app.exceptions import InvalidCredentialsError, NotFoundError
from app.schemas.user import LoginResponse, TokenData, UserCreate, UserLogin, UserResponse
from app.services import auth_service, user_service
from app.api.dependencies import get_current_claims, get_settings

logger = logging.getLogger(__name__)


def create_limiter(settings: Settings) -> Limiter:
    """Per-application limiter; counters live in its own in-memory storage."""
    return Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def create_router(limiter: Limiter) -> APIRouter:
    """Build the auth router with its rate limits bound to one application's limiter."""
    router = APIRouter()

    @router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
    @limiter.limit("10/hour")
    async def register(
        request: Request,
        user_data: UserCreate,
        db: AsyncSession = Depends(get_db)
    ):
        """
        Register a regular (non-admin) user.
        Rate limited to 10 registrations per hour per client.
        """
        return await user_service.register_user(db, user_data)

    @router.post("/login", response_model=LoginResponse)
    @limiter.limit("5/15minutes")
    async def login(
        request: Request,
        login_data: UserLogin,
        db: AsyncSession = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        """
        Verify credentials and issue a signed access token.
        Rate limited to 5 attempts per 15 minutes to prevent brute force attacks.
        """
        try:
            user = await auth_service.authenticate_user(db, login_data.username, login_data.password)
        except (NotFoundError, InvalidCredentialsError):
            logger.warning(f"Failed login for username {login_data.username!r}")
            raise InvalidCredentialsError("Wrong credentials")

        token = auth_service.create_access_token(user, settings)
        logger.info(f"User {user.id} logged in")

        profile = UserResponse.model_validate(user).model_dump()
        return LoginResponse(**profile, token=token, access_token=token)

    @router.get("/me", response_model=UserResponse)
    async def get_me(
        claims: TokenData = Depends(get_current_claims),
        db: AsyncSession = Depends(get_db)
    ):
        """
        Get current user information based on the bearer token.
        Requires authentication.
        """
        return await user_service.get_user(db, claims.id)

    return router
