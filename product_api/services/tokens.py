"""Token service: stateless access tokens and single-slot rotating refresh tokens."""

import logging

import jwt
from sqlalchemy.orm import Session

from product_api.core.config import settings
from product_api.core.errors import InvalidToken, Unauthenticated
from product_api.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from product_api.models import User
from product_api.schemas.auth import Principal, TokenResponse

logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"


def principal_for(user: User) -> Principal:
    """Build the principal carried in access tokens for a stored user."""
    return Principal(username=user.username, roles=frozenset(user.role_names))


def issue_access_token(principal: Principal) -> str:
    """Mint a signed, time-bounded access token encoding subject and roles."""
    return create_access_token(sub=principal.username, roles=list(principal.roles))


def issue_refresh_token(session: Session, user: User) -> str:
    """
    Mint a refresh token and store it as the user's only valid one.

    Any previously stored refresh token stops matching immediately. The caller
    owns the transaction and commits.
    """
    token = create_refresh_token(sub=user.username)
    user.refresh_token = token
    session.add(user)
    return token


def _token_response(access_token: str, refresh_token: str) -> TokenResponse:
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type=TOKEN_TYPE,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
    )


def issue_token_pair(session: Session, user: User) -> TokenResponse:
    """Issue an access/refresh pair for user; the refresh token replaces the stored one."""
    access_token = issue_access_token(principal_for(user))
    refresh_token = issue_refresh_token(session, user)
    return _token_response(access_token, refresh_token)


def rotate(session: Session, refresh_token: str) -> TokenResponse:
    """
    Exchange a refresh token for a fresh pair, invalidating the presented token.

    Raises InvalidToken when the token matches no stored refresh token, is expired
    or forged, or was rotated concurrently by another request. The stored token is
    swapped with a compare-and-swap update so two concurrent rotations of the same
    token cannot both succeed. The caller owns the transaction and commits.
    """
    user = session.query(User).filter(User.refresh_token == refresh_token).first()
    if user is None:
        raise InvalidToken("Invalid refresh token")
    try:
        payload = decode_token(refresh_token, REFRESH_TOKEN_TYPE)
    except jwt.PyJWTError:
        raise InvalidToken("Invalid refresh token")
    if payload.get("sub") != user.username:
        raise InvalidToken("Invalid refresh token")

    access_token = issue_access_token(principal_for(user))
    new_refresh_token = create_refresh_token(sub=user.username)
    swapped = (
        session.query(User)
        .filter(User.id == user.id, User.refresh_token == refresh_token)
        .update({User.refresh_token: new_refresh_token}, synchronize_session=False)
    )
    if swapped != 1:
        logger.info("Refresh token for user_id=%s was rotated concurrently", user.id)
        raise InvalidToken("Invalid refresh token")
    return _token_response(access_token, new_refresh_token)


def authenticate(access_token: str) -> Principal:
    """
    Verify an access token by signature, expiry and type alone (no store lookup).
    Raises Unauthenticated on any failure.
    """
    try:
        payload = decode_token(access_token, ACCESS_TOKEN_TYPE)
    except jwt.PyJWTError:
        raise Unauthenticated("Invalid or expired token")
    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        raise Unauthenticated("Invalid token payload")
    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        raise Unauthenticated("Invalid token payload")
    return Principal(username=sub, roles=frozenset(str(r) for r in roles))
