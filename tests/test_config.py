"""Unit tests for app.core.config: settings validation and token config derivation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings
from app.core.tokens import TokenConfig


def _settings(**overrides: object) -> Settings:
    values = {"DATABASE_URL": "sqlite://", "JWT_SECRET": "k" * 40}
    values.update(overrides)
    return Settings(**values)


class TestSettingsValidation(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings()
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(s.CORS_ALLOWED_ORIGIN, "http://localhost:3000")

    def test_rejects_non_sql_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mongodb://localhost/users")

    def test_rejects_postgres_urls_without_installed_driver(self) -> None:
        for url in (
            "postgres://u:p@localhost/users",
            "postgres+psycopg2://u:p@localhost/users",
            "postgresql://u:p@localhost/users",
        ):
            with self.assertRaises(ValidationError, msg=url):
                _settings(DATABASE_URL=url)

    def test_accepts_psycopg2_and_sqlite_urls(self) -> None:
        s = _settings(DATABASE_URL="postgresql+psycopg2://u:p@localhost/users")
        self.assertTrue(s.DATABASE_URL.startswith("postgresql+psycopg2://"))
        self.assertEqual(_settings(DATABASE_URL=" sqlite:// ").DATABASE_URL, "sqlite://")

    def test_default_database_url_names_psycopg2_driver(self) -> None:
        default = Settings.model_fields["DATABASE_URL"].default
        self.assertTrue(default.startswith("postgresql+psycopg2://"))

    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_rejects_asymmetric_algorithm(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_normalizes_algorithm_and_log_level(self) -> None:
        s = _settings(JWT_ALGORITHM="hs512", LOG_LEVEL="debug")
        self.assertEqual(s.JWT_ALGORITHM, "HS512")
        self.assertEqual(s.LOG_LEVEL, "DEBUG")

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=10081)

    def test_cors_origin_trailing_slash_stripped(self) -> None:
        s = _settings(CORS_ALLOWED_ORIGIN="https://admin.example.com/")
        self.assertEqual(s.CORS_ALLOWED_ORIGIN, "https://admin.example.com")


class TestTokenConfigFromSettings(unittest.TestCase):
    def test_copies_signing_values(self) -> None:
        s = _settings(JWT_EXPIRE_MINUTES=90)
        config = TokenConfig.from_settings(s)
        self.assertEqual(config.secret, "k" * 40)
        self.assertEqual(config.algorithm, "HS256")
        self.assertEqual(config.expire_minutes, 90)
