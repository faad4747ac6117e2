"""
JWT creation and verification.

Tokens are HS256 JWTs (PyJWT) carrying ``userId``, ``email``, ``iat``
and ``exp``.  There is no refresh or revocation: a token is valid until
it expires.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from auth.errors import InvalidToken

_ALGORITHM = "HS256"
DEFAULT_EXPIRY_SECONDS = 3600


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    def __init__(self, secret: str, expiry_seconds: int = DEFAULT_EXPIRY_SECONDS) -> None:
        if not secret:
            raise ValueError("Token issuer requires a non-empty secret")
        self._secret = secret
        self.expiry_seconds = expiry_seconds

    def issue(self, user_id: int, email: str, *, now: datetime | None = None) -> str:
        """Create a signed token for ``user_id``/``email``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.expiry_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.

        Raises ``InvalidToken`` for anything that is not a valid, unexpired
        token signed with our secret.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
            return TokenClaims(
                user_id=payload["userId"],
                email=payload["email"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidToken("token expired") from exc
        except (jwt.InvalidTokenError, KeyError) as exc:
            raise InvalidToken(f"token rejected: {exc}") from exc
