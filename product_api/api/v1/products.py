"""Product and item endpoints; every route requires a bearer access token."""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from product_api.api.v1.auth import get_current_principal
from product_api.core.config import settings
from product_api.core.database import get_db
from product_api.schemas.auth import Principal
from product_api.schemas.common import ApiResponse
from product_api.schemas.product import (
    ItemRequest,
    ItemResponse,
    ProductPage,
    ProductRequest,
    ProductResponse,
)
from product_api.services import products as product_service

router = APIRouter()


@router.get("", response_model=ApiResponse[ProductPage])
def list_products(
    db: Annotated[Session, Depends(get_db)],
    _principal: Annotated[Principal, Depends(get_current_principal)],
    page: Annotated[int, Query(ge=0, description="Zero-based page number")] = 0,
    size: Annotated[
        int, Query(ge=1, le=settings.PAGE_SIZE_MAX, description="Page size")
    ] = settings.PAGE_SIZE_DEFAULT,
) -> ApiResponse[ProductPage]:
    """Return a page of products ordered by id ascending."""
    return ApiResponse.ok(product_service.list_products(db, page, size))


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
def get_product(
    product_id: int,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    _principal: Annotated[Principal, Depends(get_current_principal)],
) -> ApiResponse[ProductResponse]:
    """Return one product. The access is recorded after the response is sent."""
    product = product_service.get_product(db, product_id)
    background_tasks.add_task(product_service.record_access, product_id)
    return ApiResponse.ok(product)


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    body: ProductRequest,
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> ApiResponse[ProductResponse]:
    """Create a product; createdBy is the authenticated user."""
    created = product_service.create_product(db, body.product_name, principal)
    return ApiResponse.ok(created, message="Product created successfully")


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
def update_product(
    product_id: int,
    body: ProductRequest,
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> ApiResponse[ProductResponse]:
    updated = product_service.update_product(db, product_id, body.product_name, principal)
    return ApiResponse.ok(updated, message="Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[None])
def delete_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
    _principal: Annotated[Principal, Depends(get_current_principal)],
) -> ApiResponse[None]:
    """Delete a product together with its items."""
    product_service.delete_product(db, product_id)
    return ApiResponse.ok(None, message="Product deleted successfully")


@router.get("/{product_id}/items", response_model=ApiResponse[list[ItemResponse]])
def list_items(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
    _principal: Annotated[Principal, Depends(get_current_principal)],
) -> ApiResponse[list[ItemResponse]]:
    return ApiResponse.ok(product_service.list_items(db, product_id))


@router.post(
    "/{product_id}/items",
    response_model=ApiResponse[ItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    product_id: int,
    body: ItemRequest,
    db: Annotated[Session, Depends(get_db)],
    _principal: Annotated[Principal, Depends(get_current_principal)],
) -> ApiResponse[ItemResponse]:
    """Add a stock item (quantity >= 0) to a product."""
    item = product_service.add_item(db, product_id, body.quantity)
    return ApiResponse.ok(item, message="Item created successfully")
