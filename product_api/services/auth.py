"""Auth workflow: register, login and refresh on top of the credential store and token service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from product_api.core.errors import Conflict, InvalidToken, Unauthenticated
from product_api.core.security import hash_password, verify_password
from product_api.models import User, UserRole
from product_api.models.user import DEFAULT_ROLE
from product_api.schemas.auth import TokenResponse
from product_api.services.tokens import issue_token_pair, rotate

logger = logging.getLogger(__name__)


def register(session: Session, username: str, email: str, password: str) -> TokenResponse:
    """
    Create a USER account and return its first token pair.

    Raises Conflict when the username or email is taken, including when a
    concurrent registration wins the race and the unique index rejects the insert.
    """
    if session.query(User).filter(User.username == username).first() is not None:
        raise Conflict("Username already taken")
    if session.query(User).filter(User.email == email).first() is not None:
        raise Conflict("Email already registered")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        roles=[UserRole(role=DEFAULT_ROLE)],
    )
    session.add(user)
    try:
        session.flush()
        tokens = issue_token_pair(session, user)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("Username or email already registered")
    logger.info("User registered: user_id=%s username=%s", user.id, username)
    return tokens


def login(session: Session, username: str, password: str) -> TokenResponse:
    """
    Verify credentials and issue a fresh pair; the previous refresh token stops working.

    Raises Unauthenticated for an unknown user or wrong password without touching
    any stored state.
    """
    user = session.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed: username=%s", username)
        raise Unauthenticated("Invalid username or password")
    tokens = issue_token_pair(session, user)
    session.commit()
    return tokens


def refresh(session: Session, refresh_token: str) -> TokenResponse:
    """Rotate a refresh token. Raises InvalidToken if it is not the user's current one."""
    try:
        tokens = rotate(session, refresh_token)
        session.commit()
    except InvalidToken:
        session.rollback()
        logger.info("Refresh token rejected")
        raise
    return tokens
