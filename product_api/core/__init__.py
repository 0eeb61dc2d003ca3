"""Core app configuration, database and errors."""

from product_api.core.config import get_settings, settings
from product_api.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
