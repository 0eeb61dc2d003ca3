"""Pydantic request/response schemas."""

from product_api.schemas.auth import (
    LoginRequest,
    Principal,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from product_api.schemas.common import ApiResponse, CamelModel
from product_api.schemas.health import HealthEnvelope, HealthResponse
from product_api.schemas.product import (
    ItemRequest,
    ItemResponse,
    ProductPage,
    ProductRequest,
    ProductResponse,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "HealthEnvelope",
    "HealthResponse",
    "ItemRequest",
    "ItemResponse",
    "LoginRequest",
    "Principal",
    "ProductPage",
    "ProductRequest",
    "ProductResponse",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
]
