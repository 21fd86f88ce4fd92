"""Book CRUD endpoints for BookVault.

- POST   /books          - Create book
- GET    /books          - List books
- GET    /books/{id}     - Get single book
- PUT    /books/{id}     - Update book (partial)
- DELETE /books/{id}     - Delete book
"""

from flask import Blueprint, current_app, jsonify

from ..db import Store
from .schemas import BookCreate, BookResponse, BookUpdate
from .validation import validate_request

# Create Blueprint
books_bp = Blueprint("books", __name__, url_prefix="/books")


def _store() -> Store:
    return current_app.extensions["bookvault"]["store"]


def _row_to_book_response(row) -> dict:
    """Convert a books row to a BookResponse dict."""
    return BookResponse(
        id=row["id"],
        title=row["title"],
        author=row["author"],
        published_date=row["published_date"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    ).model_dump()


@books_bp.post("")
@validate_request
def create_book(data: BookCreate):
    """
    Create a new book.

    Returns:
        201: BookResponse with created book
        400: Validation error
    """
    books = _store().books
    book_id = books.create(
        title=data.title,
        author=data.author,
        published_date=data.published_date,
        description=data.description,
    )
    row = books.get_by_id(book_id)

    return jsonify(_row_to_book_response(row)), 201


@books_bp.get("")
def list_books():
    """
    List all books.

    Returns:
        200: Array of BookResponse objects
    """
    rows = _store().books.list()
    return jsonify([_row_to_book_response(row) for row in rows])


@books_bp.get("/<book_id>")
def get_book(book_id: str):
    """
    Get a single book by ID.

    Returns:
        200: BookResponse
        404: Book not found
    """
    row = _store().books.get_by_id(book_id)
    return jsonify(_row_to_book_response(row))


@books_bp.put("/<book_id>")
@validate_request
def update_book(book_id: str, data: BookUpdate):
    """
    Update a book. Only provided fields are updated.

    Returns:
        200: BookResponse with updated book
        404: Book not found
        400: Validation error
    """
    books = _store().books
    update_data = data.model_dump(exclude_unset=True)

    if update_data:
        books.update(book_id, update_data)

    row = books.get_by_id(book_id)
    return jsonify(_row_to_book_response(row))


@books_bp.delete("/<book_id>")
def delete_book(book_id: str):
    """
    Delete a book.

    Returns:
        200: {"message": "Book deleted"}
        404: Book not found
    """
    _store().books.delete(book_id)
    return jsonify({"message": "Book deleted"}), 200
