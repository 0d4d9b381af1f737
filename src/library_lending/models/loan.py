"""
Loan model for the library lending ledger.

A loan records one item borrowed by one patron for a bounded period.
It is created when a borrow succeeds, mutated exactly once when the item
comes back (the return date is set), and never deleted.

Derived state, always evaluated against a reference date:
- active: not yet returned
- returned: has a return date
- overdue: active and the due date is strictly before the reference date
"""

from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .item import ItemCategory, policy_for


class Loan(BaseModel):
    """
    Represents a single lending of a book or CD.

    The due date is fixed at creation from the category's loan period
    (see ``open``). Stored loans keep the due date they were given, so a
    later change to a loan period does not affect existing loans.
    """

    id: str = Field(
        ...,
        description="Unique identifier for the loan",
        pattern=r"^L\d+$",
        examples=["L1", "L42"],
    )

    patron_id: str = Field(
        ...,
        description="ID of the patron who borrowed the item",
        min_length=1,
        examples=["U1", "U17"],
    )

    item_id: str = Field(
        ...,
        description="Catalog ID of a book, or the external ID of a CD",
        min_length=1,
        examples=["B1", "CD-0042"],
    )

    category: ItemCategory = Field(
        ...,
        description="Category of the borrowed item",
    )

    borrow_date: date = Field(
        ...,
        description="Date the item was borrowed",
    )

    due_date: date = Field(
        ...,
        description="Date the item must be returned by",
    )

    return_date: date | None = Field(
        None,
        description="Date the item was returned, if it has been",
    )

    @model_validator(mode="after")
    def validate_dates(self) -> "Loan":
        """Validate date relationships."""
        if self.due_date <= self.borrow_date:
            raise ValueError("Due date must be after borrow date")

        if self.return_date and self.return_date < self.borrow_date:
            raise ValueError("Return date cannot be before borrow date")

        return self

    @property
    def is_returned(self) -> bool:
        """Check if the item has been returned."""
        return self.return_date is not None

    @property
    def is_active(self) -> bool:
        """Check if the item is still out."""
        return self.return_date is None

    def is_overdue(self, today: date) -> bool:
        """Check if the loan is unreturned and past its due date."""
        return self.is_active and self.due_date < today

    def overdue_days(self, today: date) -> int:
        """Number of days past due, or 0 when not overdue."""
        if not self.is_overdue(today):
            return 0
        return (today - self.due_date).days

    @property
    def days_late(self) -> int:
        """Days between the due date and the return date, or 0 if returned on time."""
        if self.return_date is None or self.return_date <= self.due_date:
            return 0
        return (self.return_date - self.due_date).days

    def mark_returned(self, when: date) -> None:
        """Set the return date."""
        self.return_date = when

    @classmethod
    def open(
        cls,
        loan_id: str,
        patron_id: str,
        item_id: str,
        category: ItemCategory | str,
        borrow_date: date,
    ) -> "Loan":
        """Create a new loan due after the category's current loan period."""
        policy = policy_for(category)
        return cls(
            id=loan_id,
            patron_id=patron_id,
            item_id=item_id,
            category=policy.category,
            borrow_date=borrow_date,
            due_date=borrow_date + timedelta(days=policy.loan_period_days),
        )

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True,
        validate_default=True,
        json_schema_extra={
            "example": {
                "id": "L1",
                "patron_id": "U1",
                "item_id": "B1",
                "category": "BOOK",
                "borrow_date": "2024-01-01",
                "due_date": "2024-01-29",
                "return_date": None,
            }
        },
    )
