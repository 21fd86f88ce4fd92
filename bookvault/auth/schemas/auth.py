"""Pydantic schemas for authentication.

Request schemas validate the JSON bodies of /register and /login.
UserCredential is the stored record and is never serialized into a
response, since it carries the password hash.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class UserCredentials(BaseModel):
    """Username/password pair submitted to /register and /login."""

    username: str = Field(..., min_length=1, description="Account username")
    password: str = Field(..., min_length=1, description="Plaintext password, never stored")

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            )
        return v


class UserCredential(BaseModel):
    """Stored credential record."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    password_hash: str
    created_at: str


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str = Field(..., description="User id")
    iat: int = Field(..., description="Issued-at, unix seconds")
    exp: int = Field(..., description="Expiry, unix seconds")


class MessageResponse(BaseModel):
    """Plain acknowledgment."""

    message: str


class LoginResponse(BaseModel):
    """Response for a successful login."""

    message: str
    token: str


class ProtectedResponse(BaseModel):
    """Response for an authenticated request to /protected."""

    message: str
    userId: str
