"""
Patron model for the library lending ledger.

Patrons are registered borrowers. The ledgers refer to them only by id;
the email address is what overdue reminders are delivered to.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class Patron(BaseModel):
    """Represents a library patron who can borrow items."""

    id: str = Field(
        ...,
        description="Unique identifier for the patron",
        pattern=r"^U\d+$",
        examples=["U1", "U17"],
    )

    name: str = Field(
        ...,
        description="Full name of the patron",
        min_length=2,
        max_length=200,
        examples=["John Smith", "Jane Doe"],
    )

    email: EmailStr = Field(
        ...,
        description="Email address for patron notifications",
        examples=["john.smith@example.com", "jane.doe@library.org"],
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip surrounding whitespace from the name."""
        return v.strip()

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "id": "U1",
                "name": "John Smith",
                "email": "john.smith@example.com",
            }
        },
    )
