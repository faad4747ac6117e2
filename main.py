"""
Credential service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.middleware import register_middleware
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.service import AuthService
from config.settings import Settings, config
from database.session import Database
from database.user_store import UserStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("asyncio", "sqlalchemy.engine", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application around one ``Database`` handle.

    Raises ``ConfigError`` immediately when no signing secret is configured
    outside of tests, so a misconfigured deployment never starts serving.
    """
    settings = settings or config
    jwt_secret = settings.get_jwt_secret()
    database = database or Database.from_settings(settings)

    auth_service = AuthService(
        store=UserStore(database),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        issuer=TokenIssuer(jwt_secret, expiry_seconds=settings.jwt_expiry_seconds),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.open()
        try:
            await database.ping()
            await database.create_schema()
            logger.info("Application ready to accept requests.")
            yield
        finally:
            await database.close()

    app = FastAPI(
        title="Credential Service",
        version="1.0.0",
        description="User registration and login with signed session tokens.",
        lifespan=lifespan,
    )
    app.state.auth_service = auth_service

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_error_handlers(app)

    app.include_router(auth_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
