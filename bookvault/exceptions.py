"""Exception hierarchy for BookVault.

Every error carries a human-readable message and an optional details dict.
The Flask error handlers in main.py map each class to an HTTP status.
"""


class BookVaultError(Exception):
    """Base exception for all BookVault errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(BookVaultError):
    """Request data is missing or malformed."""


class ResourceNotFound(BookVaultError):
    """Requested resource does not exist."""


class DatabaseError(BookVaultError):
    """Store operation failed."""


class StoreUnavailable(DatabaseError):
    """Store could not be reached or timed out. Safe for clients to retry."""


class DuplicateKey(DatabaseError):
    """Store rejected an insert because of a uniqueness constraint."""


class UserAlreadyExists(BookVaultError):
    """Registration attempted for a username that is already taken."""


class InvalidCredentials(BookVaultError):
    """Username or password did not match a stored credential."""


class AuthenticationError(BookVaultError):
    """Request to a protected endpoint could not be authenticated."""


class MissingCredential(AuthenticationError):
    """No token was supplied in the Authorization header."""


class InvalidToken(AuthenticationError):
    """Token signature, structure or expiry check failed."""
