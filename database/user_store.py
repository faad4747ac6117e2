"""
User store — lookup by email and insert.

Email uniqueness is enforced by the ``users.email`` unique constraint;
``insert`` maps a violation to ``DuplicateEmail`` whether the competing
row was written long ago or a millisecond earlier by a concurrent request.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from auth.errors import DuplicateEmail, StoreError
from database.models import User
from database.session import Database

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            async with self.database.session() as session:
                result = await session.execute(select(User).where(User.email == email))
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"lookup by email failed: {exc}") from exc

    async def insert(self, name: str, email: str, password_hash: str) -> User:
        """Persist a new user and return it with its store-assigned id and timestamp."""
        user = User(name=name, email=email, password_hash=password_hash)
        try:
            async with self.database.session() as session:
                session.add(user)
                await session.flush()
                await session.refresh(user)
        except IntegrityError as exc:
            logger.info("Insert rejected by unique constraint for %s", email)
            raise DuplicateEmail(f"unique constraint rejected {email}") from exc
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"insert failed: {exc}") from exc
        return user
