"""
Product Model
Catalog items managed by administrators.
"""

import hashlib
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, JSON
from sqlalchemy.orm import validates
from app.database import Base


def content_digest(value: str) -> str:
    """SHA-256 hex digest used to index unbounded text for uniqueness."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class Product(Base):
    """
    Catalog product. Title, description and image are each unique across
    all products. Description and image are unique through their digests,
    which keeps index entries small on PostgreSQL whatever the text length.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), unique=True, nullable=False)
    desc = Column(Text, nullable=False)
    desc_hash = Column(String(64), unique=True, nullable=False)
    img = Column(String(2048), nullable=False)
    img_hash = Column(String(64), unique=True, nullable=False)
    price = Column(Float, nullable=True)
    categories = Column(JSON, default=list, nullable=False)
    size = Column(String(64), nullable=True)
    color = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @validates("desc", "img")
    def _set_digest(self, key, value):
        setattr(self, f"{key}_hash", content_digest(value))
        return value

    def __repr__(self):
        return f"<Product(id={self.id}, title='{self.title}')>"
