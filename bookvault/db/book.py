"""Book-specific operations.

IMPORT CONVENTION:
- Reached through store.books

ID GENERATION POLICY:
All book IDs are auto-generated UUIDs; callers never supply one.
"""

import sqlite3
from datetime import date
from typing import Any, TYPE_CHECKING

from ..exceptions import ResourceNotFound
from ..utils import isodatetime, uid

if TYPE_CHECKING:
    from . import Store

# Columns a caller may change through update()
UPDATABLE_FIELDS = ("title", "author", "published_date", "description")


class BookOperations:
    """Book CRUD operations."""

    def __init__(self, store: "Store"):
        """Initialize book operations.

        Args:
            store: Store used to open a connection per operation
        """
        self._store = store

    def create(
        self,
        title: str,
        author: str,
        published_date: date | None = None,
        description: str | None = None
    ) -> str:
        """Create a book with an auto-generated ID.

        Returns:
            The new book's ID (UUID v4 string)
        """
        book_id = uid.generate_uuid()
        now = isodatetime.now()

        with self._store.connection() as conn:
            conn.execute(
                """INSERT INTO books (
                    id, title, author, published_date, description, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    book_id,
                    title,
                    author,
                    _date_to_string(published_date),
                    description,
                    now,
                    now,
                )
            )

        return book_id

    def get_by_id(self, book_id: str) -> sqlite3.Row:
        """Get book by ID.

        Raises:
            ResourceNotFound: If book_id doesn't exist
        """
        with self._store.connection() as conn:
            row = conn.execute(
                "SELECT * FROM books WHERE id = ?",
                (book_id,)
            ).fetchone()

        if not row:
            raise ResourceNotFound(
                f"Book '{book_id}' not found",
                {"book_id": book_id}
            )

        return row

    def list(self) -> list[sqlite3.Row]:
        """List all books, oldest first."""
        with self._store.connection() as conn:
            return conn.execute(
                "SELECT * FROM books ORDER BY created_at, id"
            ).fetchall()

    def update(self, book_id: str, data: dict[str, Any]) -> None:
        """Update the given fields of a book.

        Args:
            book_id: The UUID of the book
            data: Field name -> new value; keys outside UPDATABLE_FIELDS
                are ignored

        Raises:
            ResourceNotFound: If book_id doesn't exist
        """
        fields = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
        if "published_date" in fields:
            fields["published_date"] = _date_to_string(fields["published_date"])
        fields["updated_at"] = isodatetime.now()

        # Column names come from UPDATABLE_FIELDS, never from the request
        assignments = ", ".join(f"{name} = ?" for name in fields)

        with self._store.connection() as conn:
            cursor = conn.execute(
                f"UPDATE books SET {assignments} WHERE id = ?",
                (*fields.values(), book_id)
            )
            updated = cursor.rowcount

        if updated == 0:
            raise ResourceNotFound(
                f"Book '{book_id}' not found",
                {"book_id": book_id}
            )

    def delete(self, book_id: str) -> None:
        """Delete a book.

        Raises:
            ResourceNotFound: If book_id doesn't exist
        """
        with self._store.connection() as conn:
            cursor = conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            deleted = cursor.rowcount

        if deleted == 0:
            raise ResourceNotFound(
                f"Book '{book_id}' not found",
                {"book_id": book_id}
            )


def _date_to_string(value: date | str | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return isodatetime.to_datestring(value)
