"""
Item categories and their lending policies.

Each category the library lends carries two numbers: how long a loan runs
and the flat fee charged once the loan is overdue. They live in a single
lookup table so adding a category means adding one ``ItemPolicy`` entry:

    ======== =========== ============ ==================
    category loan period overdue fee  tracked in catalog
    ======== =========== ============ ==================
    BOOK     28 days     10           yes
    CD       7 days      20           no
    ======== =========== ============ ==================

CDs are lent by reference to an external collection, so only books have a
catalog entry with a borrowed flag.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidArgumentError


class ItemCategory(str, Enum):
    """Closed set of lendable item categories."""

    BOOK = "BOOK"
    CD = "CD"


class ItemPolicy(BaseModel):
    """Lending rules for one item category."""

    category: ItemCategory = Field(..., description="Category the policy applies to")

    loan_period_days: int = Field(
        ...,
        description="Days between borrow date and due date",
        gt=0,
    )

    overdue_fee: float = Field(
        ...,
        description="Flat fee charged once for an overdue item",
        ge=0.0,
    )

    tracked_in_catalog: bool = Field(
        ...,
        description="Whether items of this category have a catalog entry",
    )

    model_config = ConfigDict(frozen=True)


ITEM_POLICIES: dict[ItemCategory, ItemPolicy] = {
    ItemCategory.BOOK: ItemPolicy(
        category=ItemCategory.BOOK,
        loan_period_days=28,
        overdue_fee=10.0,
        tracked_in_catalog=True,
    ),
    ItemCategory.CD: ItemPolicy(
        category=ItemCategory.CD,
        loan_period_days=7,
        overdue_fee=20.0,
        tracked_in_catalog=False,
    ),
}


def parse_category(category: ItemCategory | str | None) -> ItemCategory:
    """
    Normalize a category given as an enum member or its name.

    Raises:
        InvalidArgumentError: If the category is missing or unrecognized
    """
    if category is None:
        raise InvalidArgumentError("Item category is required")
    if isinstance(category, ItemCategory):
        return category
    if isinstance(category, str):
        try:
            return ItemCategory(category.strip().upper())
        except ValueError:
            pass
    raise InvalidArgumentError(f"Unknown item category: {category!r}")


def policy_for(category: ItemCategory | str | None) -> ItemPolicy:
    """Look up the lending policy for a category."""
    return ITEM_POLICIES[parse_category(category)]
