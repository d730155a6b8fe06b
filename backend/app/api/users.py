"""
Users Router
Self-service profile endpoints and admin user management.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.user import TokenData, UserResponse, UserUpdate
from app.services import user_service
from app.api.dependencies import require_admin, require_owner_or_admin

router = APIRouter()

@router.get("", response_model=List[UserResponse], dependencies=[Depends(require_admin)])
async def list_users(db: AsyncSession = Depends(get_db)):
    """
    List all users (Admin only).
    """
    return await user_service.list_users(db)

@router.get("/find/{user_id}", response_model=UserResponse, dependencies=[Depends(require_admin)])
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user(db, user_id)

@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    update_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    claims: TokenData = Depends(require_owner_or_admin)
):
    """
    Update a user (owner or admin).
    Only administrators may change the admin flag.
    """
    return await user_service.update_user(db, user_id, update_data, allow_role_change=claims.is_admin)

@router.delete("/{user_id}", response_model=MessageResponse, dependencies=[Depends(require_owner_or_admin)])
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a user account (owner or admin)."""
    await user_service.delete_user(db, user_id)
    return {"message": "User has been deleted..."}
