"""
Auth API routes — register, login, me.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from auth.dependencies import get_auth_service, get_current_claims
from auth.errors import AuthError, StoreError
from auth.jwt import TokenClaims
from auth.password import MAX_PASSWORD_BYTES
from auth.service import AuthService

router = APIRouter(tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────


def _reject_nul(value: str) -> str:
    # Postgres text columns cannot hold NUL.
    if "\x00" in value:
        raise ValueError("NUL characters are not allowed")
    return value


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("name", "email")
    @classmethod
    def _no_nul(cls, value: str) -> str:
        return _reject_nul(value)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def _email_has_at(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _no_nul(cls, value: str) -> str:
        return _reject_nul(value)


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register")
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user."""
    try:
        user = await service.register(req.name, req.email, req.password)
    except AuthError:
        raise
    except Exception as exc:
        raise StoreError(f"unexpected registration failure for {req.email}") from exc

    return {
        "success": True,
        "message": "User registered successfully",
        "user": user,
    }


@router.post("/login")
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        result = await service.login(req.email, req.password)
    except AuthError:
        raise
    except Exception as exc:
        raise StoreError(f"unexpected login failure for {req.email}") from exc

    return {
        "success": True,
        "message": "Login successful",
        "token": result.token,
        "user": result.user,
    }


@router.get("/me")
async def me(claims: TokenClaims = Depends(get_current_claims)) -> Dict[str, Any]:
    """Identity asserted by the bearer token."""
    return {
        "success": True,
        "user": {"id": claims.user_id, "email": claims.email},
    }
