"""
ShopAdmin Database Models
Exports all models for use throughout the application.
"""

from app.models.user import User
from app.models.product import Product

__all__ = [
    "User",
    "Product",
]
