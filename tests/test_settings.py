"""
Tests for configuration: database URL assembly and the signing-secret policy.
"""

import pytest

from config.settings import TEST_JWT_SECRET, ConfigError, Settings


def test_database_url_from_parts():
    settings = Settings(
        database_url=None,
        db_host="db.internal",
        db_port=6543,
        db_user="svc",
        db_password="pw",
        db_name="auth",
    )
    assert settings.get_database_url() == "postgresql+asyncpg://svc:pw@db.internal:6543/auth"


def test_database_url_override_wins():
    settings = Settings(database_url="sqlite+aiosqlite:///x.db", db_host="ignored")
    assert settings.get_database_url() == "sqlite+aiosqlite:///x.db"


def test_configured_secret_is_used():
    assert Settings(app_env="production", jwt_secret="s3cr3t").get_jwt_secret() == "s3cr3t"


def test_missing_secret_fails_outside_tests():
    with pytest.raises(ConfigError):
        Settings(app_env="production", jwt_secret=None).get_jwt_secret()
    with pytest.raises(ConfigError):
        Settings(app_env="development", jwt_secret="").get_jwt_secret()


def test_missing_secret_falls_back_in_tests():
    assert Settings(app_env="test", jwt_secret=None).get_jwt_secret() == TEST_JWT_SECRET


def test_create_app_refuses_to_start_without_secret(tmp_path):
    from main import create_app

    settings = Settings(
        app_env="production",
        jwt_secret=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'x.sqlite3'}",
    )
    with pytest.raises(ConfigError):
        create_app(settings=settings)
