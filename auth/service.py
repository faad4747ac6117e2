"""
Registration and login for the credential lifecycle.

Framework-free so it can be exercised directly; ``auth.routes`` adapts
it to HTTP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from auth.errors import DuplicateEmail, InvalidCredentials
from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from database.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: Dict[str, Any]


class AuthService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, issuer: TokenIssuer) -> None:
        self.store = store
        self.hasher = hasher
        self.issuer = issuer

    async def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """
        Create an account and return its public fields.

        The lookup is only a shortcut; the unique constraint behind
        ``UserStore.insert`` decides races.
        """
        if await self.store.find_by_email(email) is not None:
            logger.info("Registration refused, email already taken: %s", email)
            raise DuplicateEmail(f"email already registered: {email}")

        password_hash = await self.hasher.hash(password)
        user = await self.store.insert(name, email, password_hash)

        logger.info("Registered user %s (%s)", user.email, user.id)
        return user.public_fields()

    async def login(self, email: str, password: str) -> LoginResult:
        """Verify credentials and issue a token for the matching user."""
        user = await self.store.find_by_email(email)

        if user is None:
            await self.hasher.burn(password)
            logger.info("Failed login for %s: unknown email", email)
            raise InvalidCredentials("unknown email")

        if not await self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for %s: wrong password", email)
            raise InvalidCredentials("password mismatch")

        token = self.issuer.issue(user.id, user.email)
        logger.info("Login: %s (%s)", user.email, user.id)
        return LoginResult(token=token, user=user.public_fields())
