"""Database module for BookVault.

This module provides the Store: the single handle through which the rest of
the application reaches persistence. A Store is constructed once at startup
and injected into the Auth Service and the Flask app; nothing reads it from
a global.

ARCHITECTURE:
- Store owns connection configuration, not a live connection
- Every operation opens its own connection and closes it when done, so
  concurrent requests never share a sqlite3 connection
- Each record type gets an encapsulated operations class, reached through
  a Store property (store.credentials, store.books)

ERROR POLICY:
- sqlite3.DatabaseError (lock timeout, unreadable or non-sqlite file,
  missing table) -> StoreUnavailable
- sqlite3.IntegrityError on a UNIQUE column -> DuplicateKey (raised by the
  operations class that knows which constraint it hit)
- Raw sqlite3 errors never leave this package
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from ..exceptions import StoreUnavailable

if TYPE_CHECKING:
    from .book import BookOperations
    from .credential import CredentialOperations

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


class Store:
    """
    Document store handle with record operations.

    Connection Lifecycle:
    - connection() opens a fresh connection per call
    - Commits on clean exit, rolls back on exception, always closes
    """

    def __init__(self, database_path: str, timeout: float = 5.0):
        """Initialize Store.

        Args:
            database_path: Path to the SQLite database file
            timeout: Seconds to wait on a locked database before giving up
        """
        self.database_path = database_path
        self.timeout = timeout
        self._credential_ops = None
        self._book_ops = None

    @classmethod
    def from_settings(cls, settings) -> "Store":
        """Build a Store from application Settings."""
        return cls(settings.database_path, timeout=settings.store_timeout_seconds)

    @property
    def credentials(self) -> "CredentialOperations":
        """Credential operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._credential_ops is None:
            from .credential import CredentialOperations
            self._credential_ops = CredentialOperations(self)
        return self._credential_ops

    @property
    def books(self) -> "BookOperations":
        """Book operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._book_ops is None:
            from .book import BookOperations
            self._book_ops = BookOperations(self)
        return self._book_ops

    def _connect(self) -> sqlite3.Connection:
        db_path = Path(self.database_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path), timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Open a connection for a single unit of work.

        Yields:
            SQLite connection with row_factory set to sqlite3.Row

        Raises:
            StoreUnavailable: If the database cannot be opened, is not a
                sqlite database, or an operation times out waiting for a lock
        """
        try:
            conn = self._connect()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Could not open store at {self.database_path}: {e}")
            raise StoreUnavailable("Store unavailable", {"reason": str(e)}) from e

        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.DatabaseError as e:
            conn.rollback()
            logger.error(f"Store operation failed: {e}")
            raise StoreUnavailable("Store unavailable", {"reason": str(e)}) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Apply schema.sql if the database has not been initialized yet."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
            )
            if cursor.fetchone():
                # Database already initialized, skip
                return

            conn.executescript(SCHEMA_PATH.read_text())
            logger.info(f"Schema applied to {self.database_path}")

    def get_schema_version(self) -> str:
        """
        Get current schema version from _schema_metadata table.

        Returns:
            Schema version string (e.g., '20251019'), or 'unknown'
        """
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM _schema_metadata WHERE key = 'version'"
            ).fetchone()
        return row[0] if row else "unknown"


def init_db(store: Store) -> None:
    """Initialize the store's database schema."""
    store.init_schema()


__all__ = ["Store", "init_db"]
