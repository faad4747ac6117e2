"""
Failure taxonomy for the credential lifecycle.

Each error carries the HTTP status and the public message a client sees.
The message never includes internal detail.
"""

from __future__ import annotations


class AuthError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, detail: str | None = None) -> None:
        # ``detail`` is for server-side logs only.
        super().__init__(detail or self.message)
        self.detail = detail


class DuplicateEmail(AuthError):
    status_code = 400
    message = "Email already exists"


class InvalidCredentials(AuthError):
    status_code = 400
    message = "Invalid credentials"


class InvalidToken(AuthError):
    status_code = 401
    message = "Invalid or expired token"


class StoreError(AuthError):
    status_code = 500
    message = "Server error"
