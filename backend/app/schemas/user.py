"""
User Schemas
Pydantic models for user-related data.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel

class UserBase(CamelModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)

class UserCreate(UserBase):
    password: str = Field(..., min_length=1)

class UserUpdate(CamelModel):
    username: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=1, max_length=255)
    password: Optional[str] = Field(None, min_length=1)
    is_admin: Optional[bool] = None

class UserResponse(UserBase):
    id: int
    is_admin: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

class LoginResponse(UserResponse):
    token: str
    access_token: str

class UserLogin(CamelModel):
    username: str = Field(..., min_length=1)
    password: str

class TokenData(CamelModel):
    """Claims carried by an access token."""
    id: int
    is_admin: bool = False
    exp: Optional[datetime] = None
