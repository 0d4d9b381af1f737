"""
Fine calculation for overdue items.

The library charges a flat, one-time penalty per overdue item rather than
a per-day accrual. The fee comes from the category's ``ItemPolicy``, so a
new category only needs a new policy entry.
"""

from ..errors import InvalidArgumentError
from ..models.item import ITEM_POLICIES, ItemCategory, ItemPolicy, parse_category


class FineCalculator:
    """Computes overdue fines from a category-keyed policy table."""

    def __init__(self, policies: dict[ItemCategory, ItemPolicy] | None = None):
        self.policies = policies if policies is not None else ITEM_POLICIES

    def calculate(self, category: ItemCategory | str | None, overdue_days: int) -> float:
        """
        Calculate the fine for an item.

        Args:
            category: Item category (BOOK or CD)
            overdue_days: Days past due; zero or negative means not yet due

        Returns:
            The flat fee for the category when overdue, otherwise 0.0

        Raises:
            InvalidArgumentError: If the category is missing or unrecognized
        """
        parsed = parse_category(category)
        policy = self.policies.get(parsed)
        if policy is None:
            raise InvalidArgumentError(f"No fine policy for category {parsed.value}")
        if overdue_days <= 0:
            return 0.0
        return policy.overdue_fee
