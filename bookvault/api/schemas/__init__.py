"""Pydantic schemas for API validation."""

from .book import BookBase, BookCreate, BookResponse, BookUpdate

__all__ = [
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
]
