"""Credential operations.

Holds username -> password-hash records. The UNIQUE constraint on
users.username is the only guarantee of username uniqueness; callers may
check first, but a concurrent insert can still lose here and must be
handled as DuplicateKey.

IMPORT CONVENTION:
- Reached through store.credentials
- Satisfies the CredentialStore protocol in bookvault.auth.service
"""

import sqlite3
from typing import TYPE_CHECKING

from ..auth.schemas import UserCredential
from ..exceptions import DuplicateKey
from ..utils import isodatetime, uid

if TYPE_CHECKING:
    from . import Store


class CredentialOperations:
    """Credential record operations."""

    def __init__(self, store: "Store"):
        self._store = store

    def find_by_username(self, username: str) -> UserCredential | None:
        """Look up a credential by exact username.

        Args:
            username: Username to look up

        Returns:
            UserCredential, or None if no record exists

        Raises:
            StoreUnavailable: If the store cannot be reached
        """
        with self._store.connection() as conn:
            row = conn.execute(
                "SELECT id, username, password_hash, created_at FROM users WHERE username = ?",
                (username,)
            ).fetchone()

        if row is None:
            return None
        return _row_to_credential(row)

    def find_by_id(self, user_id: str) -> UserCredential | None:
        """Look up a credential by user id."""
        with self._store.connection() as conn:
            row = conn.execute(
                "SELECT id, username, password_hash, created_at FROM users WHERE id = ?",
                (user_id,)
            ).fetchone()

        if row is None:
            return None
        return _row_to_credential(row)

    def create(self, username: str, password_hash: str) -> UserCredential:
        """Insert a new credential with an auto-generated id.

        Args:
            username: Username, must not already exist
            password_hash: One-way hash of the password (never the plaintext)

        Returns:
            The stored UserCredential

        Raises:
            DuplicateKey: If the username is already taken
            StoreUnavailable: If the store cannot be reached
        """
        credential = UserCredential(
            id=uid.generate_uuid(),
            username=username,
            password_hash=password_hash,
            created_at=isodatetime.now(),
        )

        try:
            with self._store.connection() as conn:
                conn.execute(
                    """INSERT INTO users (id, username, password_hash, created_at)
                       VALUES (?, ?, ?, ?)""",
                    (credential.id, credential.username,
                     credential.password_hash, credential.created_at)
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateKey(
                "Username already exists",
                {"username": username}
            ) from e

        return credential

    def count(self) -> int:
        """Count stored credentials."""
        with self._store.connection() as conn:
            row = conn.execute("SELECT COUNT(*) FROM users").fetchone()
        return row[0]


def _row_to_credential(row: sqlite3.Row) -> UserCredential:
    return UserCredential(
        id=row["id"],
        username=row["username"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )
