"""
User Service
Registration and profile management for user accounts.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import commit_or_conflict
from app.exceptions import ConflictError, ForbiddenError, NotFoundError
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.services import auth_service

logger = logging.getLogger(__name__)


async def _ensure_unique(db: AsyncSession, username: Optional[str], email: Optional[str],
                         exclude_id: Optional[int] = None):
    clauses = []
    if username is not None:
        clauses.append(User.username == username)
    if email is not None:
        clauses.append(User.email == email)
    if not clauses:
        return

    stmt = select(User).where(or_(*clauses))
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    result = await db.execute(stmt)
    existing = result.scalars().first()
    if existing is None:
        return
    if username is not None and existing.username == username:
        raise ConflictError("Username already registered")
    raise ConflictError("Email already registered")


async def register_user(db: AsyncSession, data: UserCreate, is_admin: bool = False) -> User:
    """Create an account. The password is hashed once here and never stored in plaintext."""
    await _ensure_unique(db, data.username, data.email)

    user = User(
        username=data.username,
        email=data.email,
        hashed_password=auth_service.get_password_hash(data.password),
        is_admin=is_admin,
    )
    db.add(user)
    await commit_or_conflict(db, "Username or email already registered")
    await db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username!r}, admin={user.is_admin})")
    return user


async def list_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def update_user(db: AsyncSession, user_id: int, update_data: UserUpdate,
                      allow_role_change: bool = False) -> User:
    """
    Partially update a profile. The password is rehashed when supplied;
    changing the admin flag requires allow_role_change.
    """
    user = await get_user(db, user_id)
    changes = update_data.model_dump(exclude_unset=True, exclude_none=True)

    if "is_admin" in changes and changes["is_admin"] != user.is_admin and not allow_role_change:
        raise ForbiddenError("Only administrators can change admin status")

    await _ensure_unique(db, changes.get("username"), changes.get("email"), exclude_id=user_id)

    if "username" in changes:
        user.username = changes["username"]
    if "email" in changes:
        user.email = changes["email"]
    if "password" in changes:
        user.hashed_password = auth_service.get_password_hash(changes["password"])
    if "is_admin" in changes:
        user.is_admin = changes["is_admin"]

    await commit_or_conflict(db, "Username or email already registered")
    await db.refresh(user)

    logger.info(f"Updated user {user.id}: {sorted(changes.keys() - {'password'})}")
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await get_user(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info(f"Deleted user {user_id}")
