"""
Exception hierarchy for the library lending ledger.

Every failure the ledgers surface to a caller is a ``LendingError``:

1. **NotFoundError**: a referenced loan, book or patron does not exist
2. **PolicyViolationError**: a business rule blocks the operation
   (already borrowed, overdue loans, unpaid fines, active loans)
3. **InvalidArgumentError**: malformed input such as an unknown category
4. **DuplicateError**: a unique key (ISBN, patron email) is already taken
5. **StorageError**: the record store failed to load or save a collection
6. **NotificationError**: the notification transport failed

Policy violations are raised before anything is written, so a caller that
catches one can rely on the stored state being unchanged.
"""


class LendingError(Exception):
    """Base exception for lending ledger operations."""


class NotFoundError(LendingError):
    """Raised when a referenced entity is not found."""


class DuplicateError(LendingError):
    """Raised when attempting to create a duplicate entity."""


class InvalidArgumentError(LendingError, ValueError):
    """Raised for malformed or unrecognized input."""


class StorageError(LendingError):
    """Raised when the record store cannot load or save a collection."""


class NotificationError(LendingError):
    """Raised when a notification could not be delivered."""


class PolicyViolationError(LendingError):
    """Raised when a lending rule blocks the requested operation."""


class AlreadyBorrowedError(PolicyViolationError):
    """Raised when a book is requested while another loan holds it."""


class OverdueLoansBlockError(PolicyViolationError):
    """Raised when a patron with overdue loans tries to borrow."""


class UnpaidFinesBlockError(PolicyViolationError):
    """Raised when a patron with an outstanding balance is blocked."""


class ActiveLoansBlockError(PolicyViolationError):
    """Raised when a patron still holding items is unregistered."""
