"""
Products Router
Catalog reads for any authenticated user; writes for administrators.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from app.services import product_service
from app.api.dependencies import get_current_claims, require_admin

router = APIRouter()


@router.get("", response_model=List[ProductResponse], dependencies=[Depends(get_current_claims)])
async def list_products(db: AsyncSession = Depends(get_db)):
    """List every product, oldest first."""
    return await product_service.list_products(db)

@router.get("/find/{product_id}", response_model=ProductResponse, dependencies=[Depends(get_current_claims)])
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    return await product_service.get_product(db, product_id)

@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_product(product_data: ProductCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a product (Admin only).
    Title, description and image must each be unique.
    """
    return await product_service.create_product(db, product_data)

@router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(
    product_id: int,
    patch: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Update a product (Admin only).
    Fields left out of the body are not modified.
    """
    return await product_service.update_product(db, product_id, patch)

@router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a product permanently (Admin only)."""
    await product_service.delete_product(db, product_id)
    return {"message": "Product has been deleted..."}
