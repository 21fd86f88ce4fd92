"""JWT token service.

Tokens are HS256 JWTs carrying three claims:
- sub: user id
- iat: issued-at, integer unix seconds
- exp: expiry, integer unix seconds

A token issued at T with expiry E is valid for now in [T, T + E) and
expired once now >= T + E. A token presented before its issue time is
rejected as not yet valid. Expiry is checked here against an optional
injected `now` rather than by PyJWT's wall clock, so the boundary can be
tested exactly.

The signing secret is always passed in by the caller; this module holds
no configuration of its own.
"""

import logging
from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..utils import isodatetime
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def generate_access_token(
    user_id: str,
    secret: str,
    expiry_seconds: int,
    now: int | None = None,
    algorithm: str = ALGORITHM,
) -> str:
    """
    Generate a signed access token for a user.

    Args:
        user_id: Identifier placed in the `sub` claim
        secret: Server-held signing secret
        expiry_seconds: Token lifetime
        now: Issue time in unix seconds (defaults to current time)
        algorithm: JWT signing algorithm

    Returns:
        Encoded JWT string
    """
    issued_at = isodatetime.now_unix() if now is None else now
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + expiry_seconds,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def validate_access_token(
    token: str,
    secret: str,
    now: int | None = None,
    algorithm: str = ALGORITHM,
) -> TokenPayload:
    """
    Validate a token's signature, claims and expiry.

    Args:
        token: Encoded JWT string
        secret: Server-held signing secret
        now: Verification time in unix seconds (defaults to current time)
        algorithm: Accepted JWT signing algorithm

    Returns:
        Decoded TokenPayload

    Raises:
        jwt.ExpiredSignatureError: If now >= exp
        jwt.ImmatureSignatureError: If now < iat
        jwt.InvalidTokenError: If the token is malformed, signed with another
            secret or algorithm, or missing required claims
    """
    payload = jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={
            "require": REQUIRED_CLAIMS,
            "verify_exp": False,
            "verify_iat": False,
        },
    )

    try:
        decoded = TokenPayload(**payload)
    except PydanticValidationError as e:
        raise jwt.InvalidTokenError(f"Malformed token claims: {e}") from e

    current = isodatetime.now_unix() if now is None else now
    if current < decoded.iat:
        raise jwt.ImmatureSignatureError("The token is not yet valid (iat)")
    if current >= decoded.exp:
        raise jwt.ExpiredSignatureError("Signature has expired")

    return decoded


def decode_token_no_validation(token: str) -> dict:
    """
    Decode a token without verifying its signature or expiry.

    For introspection and logging only. Never trust the result for
    authentication.
    """
    return jwt.decode(token, options={"verify_signature": False})


def get_token_expiry_remaining(
    token: str,
    secret: str,
    now: int | None = None,
    algorithm: str = ALGORITHM,
) -> timedelta | None:
    """
    Get time remaining before a token expires.

    Returns:
        Remaining lifetime, or None if the token is invalid or expired
    """
    try:
        payload = validate_access_token(token, secret, now=now, algorithm=algorithm)
    except jwt.InvalidTokenError:
        return None

    current = isodatetime.now_unix() if now is None else now
    return timedelta(seconds=payload.exp - current)


def is_token_expired(
    token: str,
    secret: str,
    now: int | None = None,
    algorithm: str = ALGORITHM,
) -> bool:
    """Check whether a token is expired. Invalid tokens count as expired."""
    return get_token_expiry_remaining(token, secret, now=now, algorithm=algorithm) is None
