"""SQLAlchemy declarative Base shared by the user and product models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata is the migration target."""
