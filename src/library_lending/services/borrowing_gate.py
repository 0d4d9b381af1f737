"""
Borrowing gate: decides whether a patron may borrow before any loan is made.

A patron is blocked, for every category, while they hold an overdue loan
or owe any fine. Both checks run before the loan ledger is touched, so a
rejected attempt leaves loans, fines and the catalog unchanged.
"""

import logging

from ..errors import OverdueLoansBlockError, UnpaidFinesBlockError
from ..models import ItemCategory, Loan, parse_category
from .fine_ledger import FineLedger
from .loan_ledger import LoanLedger

logger = logging.getLogger(__name__)


class BorrowingGate:
    """Composes the loan and fine ledgers into the borrowing entry point."""

    def __init__(self, loan_ledger: LoanLedger, fine_ledger: FineLedger):
        self.loan_ledger = loan_ledger
        self.fine_ledger = fine_ledger

    def borrow(self, patron_id: str, item_id: str, category: ItemCategory | str) -> Loan:
        """
        Lend an item if the patron is eligible.

        Raises:
            InvalidArgumentError: If the category is unknown
            OverdueLoansBlockError: If the patron has an overdue loan
            UnpaidFinesBlockError: If the patron has an outstanding balance
            NotFoundError / AlreadyBorrowedError: From the loan ledger
        """
        category = parse_category(category)

        with self.loan_ledger.store.locked():
            self.check_eligibility(patron_id)
            return self.loan_ledger.borrow(patron_id, item_id, category)

    def borrow_book(self, patron_id: str, book_id: str) -> Loan:
        return self.borrow(patron_id, book_id, ItemCategory.BOOK)

    def borrow_cd(self, patron_id: str, cd_id: str) -> Loan:
        return self.borrow(patron_id, cd_id, ItemCategory.CD)

    def check_eligibility(self, patron_id: str) -> None:
        """Raise if the patron may not borrow right now."""
        if self.loan_ledger.has_overdue_loans(patron_id):
            logger.info("Borrow refused for patron %s: overdue loans", patron_id)
            raise OverdueLoansBlockError(
                f"Patron {patron_id} has overdue loans and cannot borrow until they are returned"
            )

        if self.fine_ledger.has_unpaid_fines(patron_id):
            balance = self.fine_ledger.outstanding_balance(patron_id)
            logger.info("Borrow refused for patron %s: unpaid fines %.2f", patron_id, balance)
            raise UnpaidFinesBlockError(
                f"Patron {patron_id} has unpaid fines of {balance:.2f} and cannot borrow"
            )
