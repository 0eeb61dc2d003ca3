"""Request/response schemas for auth endpoints and the authenticated principal."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field

from product_api.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from product_api.schemas.common import CamelModel


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class RegisterRequest(CamelModel):
    """New account details."""

    username: NonBlankStr = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    email: EmailStr = Field(..., description="Email address")
    password: NonBlankStr = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class LoginRequest(CamelModel):
    """Credentials for login."""

    username: NonBlankStr = Field(..., min_length=1, max_length=255, description="Username")
    password: NonBlankStr = Field(
        ..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class RefreshRequest(CamelModel):
    """Refresh token to rotate."""

    refresh_token: NonBlankStr = Field(..., min_length=1, description="Current refresh token")


class TokenResponse(CamelModel):
    """Access/refresh token pair returned by register, login and refresh."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token (single use)")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class Principal(BaseModel):
    """Authenticated caller decoded from an access token; passed explicitly to workflows."""

    username: str
    roles: frozenset[str] = frozenset()
