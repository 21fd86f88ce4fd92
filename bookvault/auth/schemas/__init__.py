"""Authentication Pydantic schemas for API validation."""

from .auth import (
    LoginResponse,
    MessageResponse,
    ProtectedResponse,
    TokenPayload,
    UserCredential,
    UserCredentials,
)

__all__ = [
    "UserCredentials",
    "UserCredential",
    "TokenPayload",
    "MessageResponse",
    "LoginResponse",
    "ProtectedResponse",
]
