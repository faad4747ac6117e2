"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  The async variants run
bcrypt in a worker thread so a hash never blocks the event loop.
"""

from __future__ import annotations

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72  # bcrypt ignores (or rejects) anything beyond this


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password exceeds {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    # Older bcrypt releases silently truncate at 72 bytes.
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


class PasswordHasher:
    """bcrypt at a fixed work factor, offloaded to worker threads."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds
        # Verified against when the account does not exist, so the
        # unknown-email path costs the same as a wrong password.
        self._dummy_hash = hash_password("dummy-password-for-timing", rounds)

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self.rounds)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(verify_password, password, password_hash)

    async def burn(self, password: str) -> None:
        await asyncio.to_thread(verify_password, password, self._dummy_hash)
