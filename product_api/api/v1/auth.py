"""Register/login/refresh endpoints and the bearer-token principal dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from product_api.core.database import get_db
from product_api.core.errors import Unauthenticated
from product_api.schemas.auth import (
    LoginRequest,
    Principal,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from product_api.schemas.common import ApiResponse
from product_api.services import auth as auth_service
from product_api.services.tokens import authenticate

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=ApiResponse[TokenResponse])
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[TokenResponse]:
    """Create a USER account and return an access/refresh token pair. 409 if username or email is taken."""
    tokens = auth_service.register(db, body.username, str(body.email), body.password)
    return ApiResponse.ok(tokens, message="User registered successfully")


@router.post("/login", response_model=ApiResponse[TokenResponse])
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[TokenResponse]:
    """
    Authenticate with username and password; returns a fresh token pair.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    tokens = auth_service.login(db, body.username, body.password)
    return ApiResponse.ok(tokens, message="Login successful")


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
def refresh(
    body: RefreshRequest,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[TokenResponse]:
    """Exchange the current refresh token for a new pair. The presented token is invalidated."""
    tokens = auth_service.refresh(db, body.refresh_token)
    return ApiResponse.ok(tokens, message="Token refreshed")


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Principal:
    """Dependency: require a valid Bearer access token. 403 if missing, 401 if invalid or expired."""
    if credentials is None:
        raise Unauthenticated("Not authenticated", status_code=status.HTTP_403_FORBIDDEN)
    return authenticate(credentials.credentials)
