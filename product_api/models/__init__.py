"""SQLAlchemy ORM models."""

from product_api.models.base import Base
from product_api.models.product import Item, Product
from product_api.models.user import User, UserRole

__all__ = ["Base", "Item", "Product", "User", "UserRole"]
