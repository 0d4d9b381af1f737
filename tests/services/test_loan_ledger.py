"""
Tests for the loan ledger.

These tests verify:
1. Category-specific due dates and identifiers
2. Catalog checks and borrowed flags for books
3. Idempotent returns
4. Overdue and per-patron queries against the injected clock
"""

from datetime import date
from unittest.mock import patch

import pytest

from library_lending.errors import (
    AlreadyBorrowedError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
)
from library_lending.services import Catalog, LoanLedger


class TestBorrow:
    """Test creating loans."""

    def test_borrow_book(self, loan_ledger: LoanLedger, catalog: Catalog, book):
        loan = loan_ledger.borrow_book("U1", book.id)

        assert loan.id == "L1"
        assert loan.patron_id == "U1"
        assert loan.item_id == book.id
        assert loan.category == "BOOK"
        assert loan.borrow_date == date(2024, 1, 1)
        assert loan.due_date == date(2024, 1, 29)
        assert loan.is_active
        assert catalog.get_book(book.id).borrowed is True

    def test_borrow_cd(self, loan_ledger: LoanLedger):
        loan = loan_ledger.borrow_cd("U1", "CD-0001")

        assert loan.category == "CD"
        assert loan.due_date == date(2024, 1, 8)

    def test_cd_not_checked_against_catalog(self, loan_ledger: LoanLedger, catalog: Catalog):
        """CDs are not catalog items, so the same CD id can be lent twice."""
        loan_ledger.borrow_cd("U1", "CD-0001")
        loan_ledger.borrow_cd("U2", "CD-0001")

        assert len(loan_ledger.all_loans()) == 2
        assert catalog.all_books() == []

    def test_borrow_with_category_name(self, loan_ledger: LoanLedger, book):
        loan = loan_ledger.borrow("U1", book.id, "book")
        assert loan.category == "BOOK"

    def test_unknown_book(self, loan_ledger: LoanLedger):
        with pytest.raises(NotFoundError):
            loan_ledger.borrow_book("U1", "B999")
        assert loan_ledger.all_loans() == []

    def test_book_already_borrowed(self, loan_ledger: LoanLedger, book):
        loan_ledger.borrow_book("U1", book.id)

        with pytest.raises(AlreadyBorrowedError):
            loan_ledger.borrow_book("U2", book.id)
        assert len(loan_ledger.all_loans()) == 1

    def test_unknown_category(self, loan_ledger: LoanLedger, book):
        with pytest.raises(InvalidArgumentError):
            loan_ledger.borrow("U1", book.id, "VINYL")

    def test_ids_are_sequential(self, loan_ledger: LoanLedger):
        ids = [loan_ledger.borrow_cd("U1", f"CD-{n}").id for n in range(3)]
        assert ids == ["L1", "L2", "L3"]

    def test_ids_not_reused_after_collection_shrinks(self, loan_ledger: LoanLedger, store):
        loan_ledger.borrow_cd("U1", "CD-1")
        loan_ledger.borrow_cd("U1", "CD-2")
        store.save_loans([])

        assert loan_ledger.borrow_cd("U1", "CD-3").id == "L3"


    def test_failed_loan_save_leaves_book_flag_set(
        self, loan_ledger: LoanLedger, catalog: Catalog, store, book
    ):
        """Books are saved before loans; a failed loan save does not undo the flag."""
        with patch.object(store, "save_loans", side_effect=StorageError("disk full")):
            with pytest.raises(StorageError):
                loan_ledger.borrow_book("U1", book.id)

        assert loan_ledger.all_loans() == []
        assert catalog.get_book(book.id).borrowed is True


class TestReturn:
    """Test returning loans."""

    def test_return_book(self, loan_ledger: LoanLedger, catalog: Catalog, clock, book):
        loan = loan_ledger.borrow_book("U1", book.id)
        clock.advance(10)

        returned = loan_ledger.return_item(loan.id)

        assert returned.return_date == date(2024, 1, 11)
        assert not returned.is_active
        assert catalog.get_book(book.id).borrowed is False

    def test_returned_book_can_be_borrowed_again(self, loan_ledger: LoanLedger, book):
        loan = loan_ledger.borrow_book("U1", book.id)
        loan_ledger.return_item(loan.id)

        assert loan_ledger.borrow_book("U2", book.id).id == "L2"

    def test_return_is_idempotent(self, loan_ledger: LoanLedger, clock):
        loan = loan_ledger.borrow_cd("U1", "CD-1")
        clock.advance(2)
        first = loan_ledger.return_item(loan.id)
        clock.advance(5)

        second = loan_ledger.return_item(loan.id)

        assert second.return_date == first.return_date == date(2024, 1, 3)

    def test_return_unknown_loan(self, loan_ledger: LoanLedger):
        with pytest.raises(NotFoundError):
            loan_ledger.return_item("L42")

    def test_cd_return_leaves_catalog_alone(self, loan_ledger: LoanLedger, catalog: Catalog, book):
        """A CD whose id matches a book id does not release that book."""
        loan_ledger.borrow_book("U1", book.id)
        cd_loan = loan_ledger.borrow_cd("U2", book.id)

        loan_ledger.return_item(cd_loan.id)

        assert catalog.get_book(book.id).borrowed is True


class TestQueries:
    """Test overdue and per-patron projections."""

    def test_not_overdue_on_due_date(self, loan_ledger: LoanLedger, clock):
        loan_ledger.borrow_cd("U1", "CD-1")
        clock.advance(7)

        assert loan_ledger.overdue_loans() == []
        assert not loan_ledger.has_overdue_loans("U1")

    def test_overdue_after_due_date(self, loan_ledger: LoanLedger, clock):
        loan = loan_ledger.borrow_cd("U1", "CD-1")
        clock.advance(8)

        assert [overdue.id for overdue in loan_ledger.overdue_loans()] == [loan.id]
        assert loan_ledger.has_overdue_loans("U1")
        assert not loan_ledger.has_overdue_loans("U2")

    def test_returned_loans_are_not_overdue(self, loan_ledger: LoanLedger, clock):
        loan = loan_ledger.borrow_cd("U1", "CD-1")
        clock.advance(30)
        loan_ledger.return_item(loan.id)

        assert loan_ledger.overdue_loans() == []

    def test_loans_for_patron(self, loan_ledger: LoanLedger):
        loan_ledger.borrow_cd("U1", "CD-1")
        loan_ledger.borrow_cd("U2", "CD-2")
        loan_ledger.borrow_cd("U1", "CD-3")

        assert [loan.item_id for loan in loan_ledger.loans_for_patron("U1")] == ["CD-1", "CD-3"]
        assert loan_ledger.loans_for_patron("U9") == []

    def test_has_active_loans(self, loan_ledger: LoanLedger):
        loan = loan_ledger.borrow_cd("U1", "CD-1")
        assert loan_ledger.has_active_loans("U1")

        loan_ledger.return_item(loan.id)
        assert not loan_ledger.has_active_loans("U1")
