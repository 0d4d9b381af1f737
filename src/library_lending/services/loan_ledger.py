"""
Loan ledger for the library lending system.

The ledger owns the lifecycle of individual loans:

1. **Borrow**: create a loan with a category-specific due date
   (books are checked against the catalog and flagged as borrowed)
2. **Return**: set the return date once and release the book
3. **Queries**: overdue, active and per-patron projections

Borrowing eligibility (overdue loans, unpaid fines) is not checked here;
that belongs to the ``BorrowingGate`` which composes this ledger with the
fine ledger.

Books and loans are separate collections, each saved in its own
transaction. Borrow saves the book flag before the loan and return saves
the loan before the book flag; if the second save fails with a
``StorageError`` the first is not undone, so the book's borrowed flag can
disagree with its loans until it is corrected by hand.
"""

import logging
from collections.abc import Callable
from datetime import date

from ..database.record_store import RecordStore
from ..errors import AlreadyBorrowedError, NotFoundError
from ..models import Book, ItemCategory, Loan, policy_for
from .identifiers import next_identifier

logger = logging.getLogger(__name__)

LOAN_ID_PREFIX = "L"


class LoanLedger:
    """Creates, returns and queries loans against the record store."""

    def __init__(self, store: RecordStore, clock: Callable[[], date] = date.today):
        """
        Args:
            store: Record store holding books and loans
            clock: Returns the current date; every date rule is evaluated against it
        """
        self.store = store
        self.clock = clock

    def borrow(self, patron_id: str, item_id: str, category: ItemCategory | str) -> Loan:
        """
        Lend an item to a patron.

        For catalog-tracked categories (books) the item must exist and not be
        borrowed; its flag is set before the loan is recorded. CDs are lent
        without a catalog check.

        Returns:
            The created loan

        Raises:
            InvalidArgumentError: If the category is unknown
            NotFoundError: If a book id is not in the catalog
            AlreadyBorrowedError: If the book is already on loan
        """
        policy = policy_for(category)

        with self.store.locked():
            books: list[Book] = []
            if policy.tracked_in_catalog:
                books = self.store.load_books()
                book = _find_book(books, item_id)
                if book is None:
                    raise NotFoundError(f"Book with id {item_id} not found")
                if book.borrowed:
                    raise AlreadyBorrowedError(f"Book {item_id} is already borrowed")
                book.borrowed = True

            loans = self.store.load_loans()
            loan = Loan.open(
                next_identifier(self.store, LOAN_ID_PREFIX, (other.id for other in loans)),
                patron_id,
                item_id,
                policy.category,
                self.clock(),
            )
            loans.append(loan)

            if policy.tracked_in_catalog:
                self.store.save_books(books)
            self.store.save_loans(loans)

        logger.info(
            "Loan %s created: %s %s to patron %s, due %s",
            loan.id,
            policy.category.value,
            item_id,
            patron_id,
            loan.due_date,
        )
        return loan

    def borrow_book(self, patron_id: str, book_id: str) -> Loan:
        """Lend a catalog book for the book loan period."""
        return self.borrow(patron_id, book_id, ItemCategory.BOOK)

    def borrow_cd(self, patron_id: str, cd_id: str) -> Loan:
        """Lend a CD for the CD loan period."""
        return self.borrow(patron_id, cd_id, ItemCategory.CD)

    def return_item(self, loan_id: str) -> Loan:
        """
        Record the return of a loaned item.

        Returning an already returned loan changes nothing.

        Returns:
            The loan as stored after the call

        Raises:
            NotFoundError: If the loan id is unknown
        """
        with self.store.locked():
            loans = self.store.load_loans()
            loan = next((existing for existing in loans if existing.id == loan_id), None)
            if loan is None:
                raise NotFoundError(f"Loan with id {loan_id} not found")

            if loan.is_returned:
                logger.debug("Loan %s already returned on %s", loan_id, loan.return_date)
                return loan

            loan.mark_returned(self.clock())
            self.store.save_loans(loans)

            if policy_for(loan.category).tracked_in_catalog:
                books = self.store.load_books()
                book = _find_book(books, loan.item_id)
                if book is not None:
                    book.borrowed = False
                    self.store.save_books(books)

        logger.info("Loan %s returned on %s", loan_id, loan.return_date)
        return loan

    def overdue_loans(self) -> list[Loan]:
        """All loans that are unreturned and past due as of today."""
        today = self.clock()
        return [loan for loan in self.store.load_loans() if loan.is_overdue(today)]

    def loans_for_patron(self, patron_id: str) -> list[Loan]:
        return [loan for loan in self.store.load_loans() if loan.patron_id == patron_id]

    def all_loans(self) -> list[Loan]:
        return self.store.load_loans()

    def has_overdue_loans(self, patron_id: str) -> bool:
        """Check whether the patron holds at least one overdue loan."""
        today = self.clock()
        return any(loan.is_overdue(today) for loan in self.loans_for_patron(patron_id))

    def has_active_loans(self, patron_id: str) -> bool:
        """Check whether the patron holds any unreturned item."""
        return any(loan.is_active for loan in self.loans_for_patron(patron_id))


def _find_book(books: list[Book], book_id: str) -> Book | None:
    return next((b for b in books if b.id == book_id), None)
