"""
Product Schemas
Request and response models for catalog products.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator

from app.schemas.common import CamelModel


DESC_MAX_LENGTH = 20000


class ProductBase(CamelModel):
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    size: Optional[str] = Field(None, max_length=64)
    color: Optional[str] = Field(None, max_length=64)


class ProductCreate(ProductBase):
    title: str = Field(..., min_length=1, max_length=255)
    desc: str = Field(..., min_length=1, max_length=DESC_MAX_LENGTH)
    img: str = Field(..., min_length=1, max_length=2048)
    categories: List[str] = Field(default_factory=list)


class ProductUpdate(ProductBase):
    """Partial update; only fields present in the request are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    desc: Optional[str] = Field(None, min_length=1, max_length=DESC_MAX_LENGTH)
    img: Optional[str] = Field(None, min_length=1, max_length=2048)
    categories: Optional[List[str]] = None

    @field_validator("title", "desc", "img", "categories")
    @classmethod
    def reject_null(cls, v):
        # Runs only for values present in the payload
        if v is None:
            raise ValueError("field cannot be null")
        return v


class ProductResponse(CamelModel):
    id: int
    title: str
    desc: str
    img: str
    price: Optional[float] = None
    categories: List[str] = []
    size: Optional[str] = None
    color: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
