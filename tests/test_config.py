"""Unit tests for product_api.core.config: Settings validators."""

import unittest

from pydantic import ValidationError

from product_api.core.config import Settings


def _settings(**overrides: object) -> Settings:
    """Build Settings from explicit values only (no .env file)."""
    values: dict[str, object] = {"DATABASE_URL": "sqlite://"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDatabaseUrl(unittest.TestCase):
    def test_postgres_and_sqlite_accepted(self) -> None:
        self.assertEqual(
            _settings(DATABASE_URL=" postgresql://u:p@db:5432/x ").DATABASE_URL,
            "postgresql://u:p@db:5432/x",
        )
        self.assertEqual(_settings(DATABASE_URL="sqlite:///./dev.db").DATABASE_URL, "sqlite:///./dev.db")

    def test_other_scheme_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@db/x")

    def test_empty_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="  ")


class TestJwtSettings(unittest.TestCase):
    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=" ")

    def test_expiry_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_REFRESH_EXPIRE_MINUTES=50000)

    def test_refresh_must_outlive_access(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=60, JWT_REFRESH_EXPIRE_MINUTES=30)


class TestOtherSettings(unittest.TestCase):
    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)

    def test_page_size_default_within_max(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(PAGE_SIZE_DEFAULT=50, PAGE_SIZE_MAX=20)
        s = _settings(PAGE_SIZE_DEFAULT=20, PAGE_SIZE_MAX=20)
        self.assertEqual(s.PAGE_SIZE_MAX, 20)

    def test_log_level_normalised(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")


if __name__ == "__main__":
    unittest.main()
