"""Request/response schemas for products, items and product pages."""

from datetime import datetime

from pydantic import Field

from product_api.schemas.auth import NonBlankStr
from product_api.schemas.common import CamelModel


class ProductRequest(CamelModel):
    """Body for create and update."""

    product_name: NonBlankStr = Field(
        ..., min_length=1, max_length=255, description="Product name"
    )


class ProductResponse(CamelModel):
    """Product with its audit fields."""

    id: int
    product_name: str
    created_by: str
    created_on: datetime
    modified_by: str | None = None
    modified_on: datetime | None = None


class ProductPage(CamelModel):
    """One page of products ordered by id ascending; page is zero-based."""

    content: list[ProductResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int


class ItemRequest(CamelModel):
    """Body for adding an item to a product."""

    quantity: int = Field(..., ge=0, description="Quantity (>= 0)")


class ItemResponse(CamelModel):
    """Stock item of a product."""

    id: int
    product_id: int
    quantity: int
