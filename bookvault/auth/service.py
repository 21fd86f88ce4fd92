"""Authentication service for BookVault.

This module owns the registration, login and token-verification flows:
- Password hashing and verification (bcrypt, configurable work factor)
- Registration: check, hash, insert, with the store's UNIQUE constraint as
  the final word on username uniqueness
- Login: lookup, constant-time verify, token issuance
- Token verification for protected endpoints

AuthService is constructed with its dependencies (a CredentialStore and
Settings) and reads nothing from module globals.
"""

import logging
from typing import Protocol

import bcrypt
import jwt

from ..config import Settings
from ..exceptions import (
    DuplicateKey,
    InvalidCredentials,
    InvalidToken,
    MissingCredential,
    UserAlreadyExists,
)
from . import token
from .schemas import UserCredential

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


class CredentialStore(Protocol):
    """Persistence contract consumed by AuthService."""

    def find_by_username(self, username: str) -> UserCredential | None: ...

    def create(self, username: str, password_hash: str) -> UserCredential: ...


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str, work_factor: int = 10) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        work_factor: bcrypt log2 rounds (4-31)

    Returns:
        Bcrypt hash string (60 characters, salt embedded)
    """
    salt = bcrypt.gensalt(rounds=work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    bcrypt.checkpw compares in constant time. A malformed hash or an
    over-long password counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


# ============================================================================
# Auth Service
# ============================================================================


class AuthService:
    """Registration, login and token verification."""

    def __init__(self, store: CredentialStore, settings: Settings):
        """
        Args:
            store: Credential store; must enforce username uniqueness itself
            settings: Immutable application settings (secret, expiry, cost)
        """
        self._store = store
        self._settings = settings
        # Compared against when the username is unknown, so a miss costs
        # the same bcrypt work as a wrong password
        self._dummy_hash = hash_password("bookvault-dummy", settings.bcrypt_work_factor)

    def register(self, username: str, password: str) -> UserCredential:
        """
        Register a new user.

        Returns:
            The stored credential (callers must not expose its hash)

        Raises:
            UserAlreadyExists: If the username is taken, whether detected by
                the pre-check or by the store's constraint on insert
            StoreUnavailable: If the store cannot be reached
        """
        # Fast path only; the insert below is what guarantees uniqueness
        if self._store.find_by_username(username) is not None:
            logger.info(f"Registration rejected, username taken: {username}")
            raise UserAlreadyExists("User already exists", {"username": username})

        password_hash = hash_password(password, self._settings.bcrypt_work_factor)

        try:
            credential = self._store.create(username, password_hash)
        except DuplicateKey as e:
            logger.info(f"Registration lost insert race for username: {username}")
            raise UserAlreadyExists("User already exists", {"username": username}) from e

        logger.info(f"User registered: {username}")
        return credential

    def login(self, username: str, password: str) -> str:
        """
        Verify credentials and issue an access token.

        Returns:
            Signed JWT for the user

        Raises:
            InvalidCredentials: If the user is unknown or the password is
                wrong (same message for both)
            StoreUnavailable: If the store cannot be reached
        """
        credential = self._store.find_by_username(username)

        if credential is None:
            verify_password(password, self._dummy_hash)
            logger.warning(f"Failed login attempt for username: {username}")
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(password, credential.password_hash):
            logger.warning(f"Failed login attempt for username: {username}")
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        access_token = token.generate_access_token(
            credential.id,
            self._settings.jwt_secret_key,
            self._settings.jwt_expiry_seconds,
            algorithm=self._settings.jwt_algorithm,
        )
        logger.info(f"Successful login: {username}")
        return access_token

    def verify_token(self, authorization: str | None, now: int | None = None) -> str:
        """
        Verify the credential from an Authorization header.

        Accepts either "Bearer <token>" or a bare token.

        Args:
            authorization: Raw Authorization header value, or None
            now: Verification time in unix seconds (defaults to current time)

        Returns:
            The user id embedded in the token

        Raises:
            MissingCredential: If no token was supplied
            InvalidToken: If the token is malformed, forged or expired
        """
        token_str = _extract_token(authorization)
        if not token_str:
            raise MissingCredential("Missing token", {"code": "missing_auth"})

        try:
            payload = token.validate_access_token(
                token_str,
                self._settings.jwt_secret_key,
                now=now,
                algorithm=self._settings.jwt_algorithm,
            )
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token expired")
            raise InvalidToken("Invalid token", {"code": "token_expired"})
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid JWT token: {e}")
            raise InvalidToken("Invalid token", {"code": "invalid_token"})

        return payload.sub


def _extract_token(authorization: str | None) -> str:
    if authorization is None:
        return ""
    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        return rest.strip()
    return value
