"""
Fine ledger for the library lending system.

The ledger owns fine records per patron:

1. **Creation**: fines are additive; every call creates a new unpaid record
2. **Balance**: the sum of residual amounts over a patron's unpaid fines
3. **Payment**: a payment is allocated oldest fine first, in ledger order

Paid fines are kept as zero-amount records so the history survives.
"""

import logging
import math
from decimal import Decimal
from numbers import Real

from ..database.record_store import RecordStore
from ..errors import InvalidArgumentError
from ..models import Fine, ItemCategory
from ..models.fine import CENT_PLACES
from .fine_calculator import FineCalculator
from .identifiers import next_identifier

logger = logging.getLogger(__name__)

FINE_ID_PREFIX = "F"


class FineLedger:
    """Creates fines, reports balances and allocates payments."""

    def __init__(self, store: RecordStore, calculator: FineCalculator | None = None):
        self.store = store
        self.calculator = calculator or FineCalculator()

    def create_fine(self, patron_id: str, amount: float) -> Fine:
        """
        Create a new unpaid fine, independent of any earlier fines.

        Raises:
            InvalidArgumentError: If the amount is not a positive number
        """
        amount = _as_amount(amount)
        if amount <= 0:
            raise InvalidArgumentError(f"Fine amount must be positive, got {amount}")

        with self.store.locked():
            fines = self.store.load_fines()
            fine = Fine(
                id=next_identifier(self.store, FINE_ID_PREFIX, (f.id for f in fines)),
                patron_id=patron_id,
                amount=amount,
            )
            fines.append(fine)
            self.store.save_fines(fines)

        logger.info("Fine %s of %.2f created for patron %s", fine.id, amount, patron_id)
        return fine

    def create_fine_for_overdue(
        self, patron_id: str, category: ItemCategory | str, overdue_days: int
    ) -> Fine | None:
        """
        Create a fine for an overdue item.

        Returns:
            The created fine, or None when the calculated amount is zero

        Raises:
            InvalidArgumentError: If the category is missing or unrecognized
        """
        amount = self.calculator.calculate(category, overdue_days)
        if amount <= 0:
            return None
        return self.create_fine(patron_id, amount)

    def outstanding_balance(self, patron_id: str) -> float:
        """Sum of residual amounts over the patron's unpaid fines, rounded to cents."""
        total = sum(
            (
                fine.amount
                for fine in self.store.load_fines()
                if fine.patron_id == patron_id and not fine.paid
            ),
            0.0,
        )
        return round(total, CENT_PLACES)

    def pay_fine(self, patron_id: str, amount_to_pay: float) -> float:
        """
        Pay part or all of a patron's outstanding fines.

        The payment is applied to the patron's oldest unpaid fine first.
        Each fine it fully covers becomes paid with a zero amount and the
        remainder moves on to the next fine; the first fine it cannot cover
        is reduced and allocation stops. Any excess beyond the balance is
        not kept.

        Args:
            patron_id: Patron making the payment
            amount_to_pay: Amount offered; zero or negative changes nothing

        Returns:
            The patron's outstanding balance after the payment

        Raises:
            InvalidArgumentError: If the amount is not a number
        """
        remaining = _as_amount(amount_to_pay)
        if remaining <= 0:
            return self.outstanding_balance(patron_id)

        with self.store.locked():
            fines = self.store.load_fines()
            for fine in fines:
                if fine.patron_id != patron_id or fine.paid:
                    continue
                if remaining <= 0:
                    break
                remaining = fine.apply_payment(remaining)
            self.store.save_fines(fines)

            balance = self.outstanding_balance(patron_id)

        logger.info(
            "Patron %s paid %.2f, outstanding balance now %.2f",
            patron_id,
            amount_to_pay,
            balance,
        )
        return balance

    def has_unpaid_fines(self, patron_id: str) -> bool:
        return self.outstanding_balance(patron_id) > 0

    def fines_for_patron(self, patron_id: str) -> list[Fine]:
        return [fine for fine in self.store.load_fines() if fine.patron_id == patron_id]


def _as_amount(value: object) -> float:
    """Coerce a monetary input to a float rounded to cents, rejecting non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidArgumentError(f"Amount must be a number, got {value!r}")
    amount = float(value)
    if not math.isfinite(amount):
        raise InvalidArgumentError(f"Amount must be finite, got {value!r}")
    return round(amount, CENT_PLACES)
