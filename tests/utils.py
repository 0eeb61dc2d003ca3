"""Helpers shared by the test modules: in-memory database and an API client bound to it."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from product_api.core.database import build_engine, get_db
from product_api.core.security import hash_password
from product_api.main import app
from product_api.models import Base, User, UserRole


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with every table created."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_client(session_factory: sessionmaker) -> TestClient:
    """TestClient whose get_db dependency uses session_factory. Clear app.dependency_overrides after use."""

    def _get_test_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    return TestClient(app)


def add_user(
    session: Session,
    username: str = "testuser",
    email: str = "test@test.com",
    password: str = "password",
    roles: tuple[str, ...] = ("USER",),
) -> User:
    """Insert a user directly (no tokens issued)."""
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        roles=[UserRole(role=r) for r in roles],
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
