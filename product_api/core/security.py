"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from product_api.core.config import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def _encode(payload: dict[str, Any]) -> str:
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def create_access_token(sub: str, roles: list[str]) -> str:
    """Create a JWT access token with sub (username), roles, type, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": sub,
        "roles": sorted(roles),
        "type": ACCESS_TOKEN_TYPE,
        "exp": expire,
        "iat": now,
    }
    return _encode(payload)


def create_refresh_token(sub: str) -> str:
    """
    Create a JWT refresh token with sub, type, iat, exp and a random jti.

    The jti keeps two tokens minted for the same user in the same second distinct,
    so rotation always invalidates the previous value.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_REFRESH_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": sub,
        "type": REFRESH_TOKEN_TYPE,
        "jti": uuid.uuid4().hex,
        "exp": expire,
        "iat": now,
    }
    return _encode(payload)


def decode_token(token: str, expected_type: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload.
    Raises jwt.PyJWTError on invalid or expired token, or when the type claim does not match.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    payload = jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
    return payload
