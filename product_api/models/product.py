"""ORM models for products and their stock items."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from product_api.models.base import Base


class Product(Base):
    """
    Product with audit fields.

    created_by/created_on are stamped once on creation; modified_by/modified_on
    on every update. Items are removed together with the product.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_name = Column(String(255), nullable=False, index=True)
    created_by = Column(String(100), nullable=False, index=True)
    created_on = Column(DateTime(timezone=True), nullable=False)
    modified_by = Column(String(100), nullable=True)
    modified_on = Column(DateTime(timezone=True), nullable=True)

    items = relationship("Item", back_populates="product", passive_deletes=True)


class Item(Base):
    """Stock line of a product; quantity is never negative."""

    __tablename__ = "items"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_items_quantity_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="items")
