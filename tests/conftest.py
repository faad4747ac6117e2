"""
Shared fixtures: a throwaway SQLite store per test and fast bcrypt.
"""

import os
import tempfile
from pathlib import Path

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'credential-service-tests.sqlite3'}",
)

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.service import AuthService
from config.settings import Settings
from database.session import Database
from database.user_store import UserStore

JWT_SECRET = "unit-test-signing-secret"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        app_env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.sqlite3'}",
        jwt_secret=JWT_SECRET,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture()
async def database(settings: Settings):
    db = Database.from_settings(settings)
    await db.open()
    await db.create_schema()
    yield db
    await db.close()


@pytest.fixture()
def store(database: Database) -> UserStore:
    return UserStore(database)


@pytest.fixture()
def issuer() -> TokenIssuer:
    return TokenIssuer(JWT_SECRET)


@pytest.fixture()
def service(store: UserStore, issuer: TokenIssuer) -> AuthService:
    return AuthService(store, PasswordHasher(rounds=4), issuer)


@pytest.fixture()
def client(settings: Settings):
    from main import create_app

    app = create_app(settings=settings)
    with TestClient(app) as test_client:
        yield test_client
