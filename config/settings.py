"""
Application settings loaded from environment variables.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

# Only ever used when APP_ENV=test.
TEST_JWT_SECRET = "test-only-jwt-secret-do-not-deploy"


class ConfigError(RuntimeError):
    """Raised at startup when the configuration cannot be served safely."""


class Settings(BaseSettings):
    app_env: str = "production"   # production | development | test

    # ── Database ─────────────────────────────────────────────────────────
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "postgres"
    db_sslmode: str = "require"         # asyncpg ssl mode: disable | prefer | require | verify-ca | verify-full
    database_url: Optional[str] = None  # full URL override, wins over the DB_* parts
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: Optional[str] = None    # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 3600      # 1 hour
    bcrypt_rounds: int = 10

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 5000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def is_test(self) -> bool:
        return self.app_env.lower() == "test"

    def get_database_url(self) -> str:
        """Return the SQLAlchemy URL, assembling it from the DB_* parts when no override is set."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    def get_jwt_secret(self) -> str:
        """
        Return the token-signing secret.

        Raises ``ConfigError`` when ``JWT_SECRET`` is unset outside of tests.
        """
        if self.jwt_secret:
            return self.jwt_secret
        if self.is_test:
            logger.warning("JWT_SECRET not set, using the test-only signing secret")
            return TEST_JWT_SECRET
        raise ConfigError(
            "JWT_SECRET is not set. Refusing to start without a token-signing secret "
            "(set APP_ENV=test to use the test-only fallback)."
        )


config = Settings()
