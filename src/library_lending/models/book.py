"""
Book model for the library lending ledger.

Books are the only catalog-tracked items. Each book carries a single
``borrowed`` flag that mirrors whether an unreturned loan references it.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Book(BaseModel):
    """Represents a book in the library catalog."""

    id: str = Field(
        ...,
        description="Catalog identifier for the book",
        pattern=r"^B\d+$",
        examples=["B1", "B42"],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        max_length=500,
        examples=["The Great Gatsby", "To Kill a Mockingbird"],
    )

    author: str = Field(
        ...,
        description="Name of the book's author",
        min_length=1,
        max_length=200,
        examples=["F. Scott Fitzgerald", "Harper Lee"],
    )

    isbn: str = Field(
        ...,
        description="International Standard Book Number",
        pattern=r"^[\dXx-]+$",
        examples=["978-0-7432-7356-5", "9780061120084"],
    )

    borrowed: bool = Field(
        default=False,
        description="Whether an unreturned loan currently holds the book",
    )

    @field_validator("title", "author")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip surrounding whitespace from descriptive fields."""
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be blank")
        return v

    @property
    def is_available(self) -> bool:
        """Check if the book can be borrowed."""
        return not self.borrowed

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "id": "B1",
                "title": "The Great Gatsby",
                "author": "F. Scott Fitzgerald",
                "isbn": "9780743273565",
                "borrowed": False,
            }
        },
    )
