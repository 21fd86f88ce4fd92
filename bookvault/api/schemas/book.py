"""Book schemas."""

from datetime import date

from pydantic import BaseModel, Field, field_validator


class BookBase(BaseModel):
    """Fields shared by create and response schemas."""

    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Author name")
    published_date: date | None = Field(default=None, description="ISO 8601 date (YYYY-MM-DD)")
    description: str | None = Field(default=None, description="Free-form description")


class BookCreate(BookBase):
    """Request body for POST /books."""


class BookUpdate(BaseModel):
    """Request body for PUT /books/<id>. Only provided fields are updated."""

    title: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, min_length=1)
    published_date: date | None = None
    description: str | None = None

    @field_validator("title", "author")
    @classmethod
    def required_fields_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class BookResponse(BaseModel):
    """Book as returned by the API."""

    id: str
    title: str
    author: str
    published_date: str | None
    description: str | None
    created_at: str
    updated_at: str
