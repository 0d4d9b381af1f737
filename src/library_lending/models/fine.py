"""
Fine model for the library lending ledger.

Fines are independent penalty records owed by a patron. They are never
merged and never deleted: a fully paid fine stays in the ledger as a paid,
zero-amount record so the payment history is preserved.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Amounts are kept in whole cents
CENT_PLACES = 2


class Fine(BaseModel):
    """
    Represents a monetary penalty owed by a patron.

    The amount is the residual still owed, rounded to cents after every
    payment. It only reaches zero through full payment, which also sets the
    paid flag.
    """

    id: str = Field(
        ...,
        description="Unique identifier for the fine",
        pattern=r"^F\d+$",
        examples=["F1", "F42"],
    )

    patron_id: str = Field(
        ...,
        description="ID of the patron who owes the fine",
        min_length=1,
        examples=["U1", "U17"],
    )

    amount: float = Field(
        ...,
        description="Residual amount owed",
        ge=0.0,
        examples=[10.0, 20.0, 5.0],
    )

    paid: bool = Field(
        default=False,
        description="Whether the fine has been paid in full",
    )

    @model_validator(mode="after")
    def validate_amount(self) -> "Fine":
        """An unpaid fine must carry a positive amount."""
        if not self.paid and self.amount == 0:
            raise ValueError("Unpaid fine must have a positive amount")
        return self

    def apply_payment(self, payment: float) -> float:
        """
        Apply a payment to this fine.

        Args:
            payment: Amount offered towards this fine (must be positive)

        Returns:
            The part of the payment left over for later fines
        """
        residual = round(self.amount - payment, CENT_PLACES)
        if residual <= 0:
            # Mark paid first so the zero amount is valid on assignment
            self.paid = True
            self.amount = 0.0
            return -residual if residual < 0 else 0.0

        self.amount = residual
        return 0.0

    model_config = ConfigDict(
        validate_assignment=True,
        validate_default=True,
        json_schema_extra={
            "example": {
                "id": "F1",
                "patron_id": "U1",
                "amount": 10.0,
                "paid": False,
            }
        },
    )
