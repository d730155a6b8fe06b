"""
Authentication Service
Handles password hashing, credential verification, JWT creation, and validation.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt import ExpiredSignatureError, PyJWTError
from passlib.context import CryptContext
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.exceptions import (
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from app.models.user import User
from app.schemas.user import TokenData

logger = logging.getLogger(__name__)

# Password hashing configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check if plain password matches hashed version."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate bcrypt hash of password."""
    return pwd_context.hash(password)

async def authenticate_user(db: AsyncSession, username: str, password: str) -> User:
    """
    Verify a username/password pair and return the matching user.

    Raises NotFoundError when no user has that username and
    InvalidCredentialsError when the password does not match. Both paths
    perform one bcrypt verification.
    """
    if not username:
        raise ValidationError("Username is required")

    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()

    if user is None:
        pwd_context.dummy_verify()
        raise NotFoundError("User not found")

    if not verify_password(password, user.hashed_password):
        raise InvalidCredentialsError("Wrong credentials")

    return user

def create_access_token(user: User, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create a new JWT access token carrying the user's id and admin flag."""
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(user.id),
        "id": user.id,
        "isAdmin": bool(user.is_admin),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)

def decode_access_token(token: str, settings: Settings) -> TokenData:
    """
    Decode and validate a JWT access token.
    Raises UnauthenticatedError if the token is malformed, forged or expired.
    """
    if not token:
        raise UnauthenticatedError("You are not authenticated!")

    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except ExpiredSignatureError:
        raise UnauthenticatedError("Token has expired!")
    except PyJWTError:
        raise UnauthenticatedError("Token is not valid!")

    try:
        return TokenData.model_validate(payload)
    except SchemaValidationError:
        raise UnauthenticatedError("Token is not valid!")
