"""
Record store for the library lending ledger.

The ledgers never hold authoritative state between calls. Every mutating
operation follows the same cycle:

1. Load the complete collection (books, loans, fines or patrons)
2. Apply the change in memory
3. Save the complete collection back

A save replaces the stored collection inside a single database
transaction, so a failed save leaves the previous contents intact and
surfaces as a ``StorageError``. There is no query language and no partial
update; filtering happens in the services over the loaded list.

``locked()`` is the single serialization point for one store instance.
Services hold it around each load-mutate-save cycle so two callers in the
same process cannot interleave and lose an update.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator, Sequence
from contextlib import contextmanager
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import StorageError
from ..models import Book, Fine, Loan, Patron
from .schema import Base, BookRow, FineRow, LoanRow, PatronRow, SequenceRow
from .session import DatabaseManager

logger = logging.getLogger(__name__)

RowType = TypeVar("RowType", bound=Base)
RecordType = TypeVar("RecordType", bound=BaseModel)
T = TypeVar("T")


class RecordStore(ABC):
    """
    Whole-collection persistence for every record type the ledgers own.

    Implementations must return the full current collection on load and
    atomically replace the full collection on save.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Generator[None, None, None]:
        """Serialize a load-mutate-save cycle against this store."""
        with self._lock:
            yield

    @abstractmethod
    def load_books(self) -> list[Book]:
        """Return every book in catalog order."""

    @abstractmethod
    def save_books(self, books: Sequence[Book]) -> None:
        """Replace the stored catalog."""

    @abstractmethod
    def load_loans(self) -> list[Loan]:
        """Return every loan in creation order."""

    @abstractmethod
    def save_loans(self, loans: Sequence[Loan]) -> None:
        """Replace the stored loans."""

    @abstractmethod
    def load_fines(self) -> list[Fine]:
        """Return every fine in ledger order."""

    @abstractmethod
    def save_fines(self, fines: Sequence[Fine]) -> None:
        """Replace the stored fines."""

    @abstractmethod
    def load_patrons(self) -> list[Patron]:
        """Return every registered patron."""

    @abstractmethod
    def save_patrons(self, patrons: Sequence[Patron]) -> None:
        """Replace the stored patrons."""

    @abstractmethod
    def next_sequence(self, name: str) -> int:
        """Advance and return the persisted counter called ``name``."""


class SqlRecordStore(RecordStore):
    """Record store backed by SQLAlchemy tables, one table per collection."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize with a database manager whose schema already exists."""
        super().__init__()
        self.db_manager = db_manager

    # Books

    def load_books(self) -> list[Book]:
        return self._load(BookRow, Book, "books")

    def save_books(self, books: Sequence[Book]) -> None:
        self._replace(
            BookRow,
            [BookRow(position=i, **book.model_dump()) for i, book in enumerate(books)],
            "books",
        )

    # Loans

    def load_loans(self) -> list[Loan]:
        return self._load(LoanRow, Loan, "loans")

    def save_loans(self, loans: Sequence[Loan]) -> None:
        self._replace(
            LoanRow,
            [LoanRow(position=i, **loan.model_dump()) for i, loan in enumerate(loans)],
            "loans",
        )

    # Fines

    def load_fines(self) -> list[Fine]:
        return self._load(FineRow, Fine, "fines")

    def save_fines(self, fines: Sequence[Fine]) -> None:
        self._replace(
            FineRow,
            [FineRow(position=i, **fine.model_dump()) for i, fine in enumerate(fines)],
            "fines",
        )

    # Patrons

    def load_patrons(self) -> list[Patron]:
        return self._load(PatronRow, Patron, "patrons")

    def save_patrons(self, patrons: Sequence[Patron]) -> None:
        self._replace(
            PatronRow,
            [PatronRow(position=i, **patron.model_dump()) for i, patron in enumerate(patrons)],
            "patrons",
        )

    # Sequences

    def next_sequence(self, name: str) -> int:
        with self.locked():
            value = self._run(lambda s: self._advance(s, name), f"advance sequence {name}")
        logger.debug("Sequence %s advanced to %d", name, value)
        return value

    @staticmethod
    def _advance(session: Session, name: str) -> int:
        row = session.get(SequenceRow, name)
        if row is None:
            row = SequenceRow(name=name, value=0)
            session.add(row)
        row.value += 1
        return row.value

    # Helpers

    def _load(
        self, row_class: type[RowType], record_class: type[RecordType], label: str
    ) -> list[RecordType]:
        """Load a whole table in position order as pydantic records."""
        query = select(row_class).order_by(row_class.position)
        rows = self._run(lambda s: s.execute(query).scalars().all(), f"load {label}")
        return [record_class.model_validate(row, from_attributes=True) for row in rows]

    def _replace(self, row_class: type[RowType], rows: list[RowType], label: str) -> None:
        """Delete every row of a table and insert ``rows`` in one transaction."""

        def replace(session: Session) -> None:
            session.execute(delete(row_class))
            session.add_all(rows)

        self._run(replace, f"save {label}")
        logger.debug("Saved %d %s", len(rows), label)

    def _run(self, operation: Callable[[Session], T], description: str) -> T:
        """Run ``operation`` in a session scope, wrapping database errors."""
        try:
            with self.db_manager.session_scope() as session:
                return operation(session)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to {description}: {e!s}") from e
