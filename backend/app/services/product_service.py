"""
Product Service
CRUD operations over the product catalog.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import commit_or_conflict
from app.exceptions import ConflictError, NotFoundError
from app.models.product import Product, content_digest
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("title", "desc", "img")


async def _ensure_unique(db: AsyncSession, values: dict, exclude_id: Optional[int] = None):
    """Raise ConflictError if another product already uses one of the unique values."""
    clauses = []
    if values.get("title") is not None:
        clauses.append(Product.title == values["title"])
    if values.get("desc") is not None:
        clauses.append(Product.desc_hash == content_digest(values["desc"]))
    if values.get("img") is not None:
        clauses.append(Product.img_hash == content_digest(values["img"]))
    if not clauses:
        return

    stmt = select(Product).where(or_(*clauses))
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)
    result = await db.execute(stmt)
    existing = result.scalars().first()
    if existing is None:
        return

    for field in UNIQUE_FIELDS:
        if values.get(field) is not None and getattr(existing, field) == values[field]:
            raise ConflictError(f"A product with this {field} already exists")


async def list_products(db: AsyncSession) -> List[Product]:
    result = await db.execute(select(Product).order_by(Product.id))
    return list(result.scalars().all())


async def get_product(db: AsyncSession, product_id: int) -> Product:
    product = await db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
    """
    Insert a new product.
    The pre-check gives a precise message; the unique constraints settle races.
    """
    values = data.model_dump()
    await _ensure_unique(db, values)

    product = Product(**values)
    db.add(product)
    await commit_or_conflict(db, "A product with this title, desc or img already exists")
    await db.refresh(product)

    logger.info(f"Created product {product.id} ({product.title!r})")
    return product


async def update_product(db: AsyncSession, product_id: int, patch: ProductUpdate) -> Product:
    """Apply only the fields present in the patch."""
    product = await get_product(db, product_id)

    changes = patch.model_dump(exclude_unset=True)
    if not changes:
        return product

    await _ensure_unique(db, changes, exclude_id=product_id)

    for field, value in changes.items():
        setattr(product, field, value)
    await commit_or_conflict(db, "A product with this title, desc or img already exists")
    await db.refresh(product)

    logger.info(f"Updated product {product.id}: {sorted(changes)}")
    return product


async def delete_product(db: AsyncSession, product_id: int) -> None:
    product = await get_product(db, product_id)
    await db.delete(product)
    await db.commit()
    logger.info(f"Deleted product {product_id}")
