"""
FastAPI dependencies for authentication.

Provides ``get_auth_service`` and ``get_current_claims``; both read the
objects ``create_app`` placed on ``app.state``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.errors import InvalidToken
from auth.jwt import TokenClaims, TokenIssuer
from auth.service import AuthService

_bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.auth_service.issuer


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """
    Extract and verify the Bearer token, returning its claims.

    No store lookup happens here: the signature and expiry are the proof.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidToken("missing bearer token")
    return issuer.verify(credentials.credentials)
