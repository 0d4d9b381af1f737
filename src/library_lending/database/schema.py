"""
SQLAlchemy database schema for the library lending ledger.

The record store treats each table as one whole collection: it is read in
full and replaced in full. Rows therefore carry an explicit ``position``
column that preserves the order of the collection, which matters for
fines because payments are allocated in ledger order.

The ``sequences`` table holds the monotonic counters used to mint record
identifiers, so ids never depend on the size of a collection.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Enum,
    Float,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import declarative_base

from ..models.item import ItemCategory

# Base class for all SQLAlchemy models
Base = declarative_base()


class BookRow(Base):
    """Books table - the catalog of lendable books."""

    __tablename__ = "books"

    id = Column(String(50), primary_key=True)
    position = Column(Integer, nullable=False)
    title = Column(String(500), nullable=False)
    author = Column(String(200), nullable=False)
    isbn = Column(String(20), nullable=False)
    borrowed = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_book_position", "position"),
        Index("idx_book_isbn", "isbn"),
    )


class LoanRow(Base):
    """Loans table - one row per lending, never deleted by the ledger."""

    __tablename__ = "loans"

    id = Column(String(50), primary_key=True)
    position = Column(Integer, nullable=False)
    patron_id = Column(String(50), nullable=False)
    item_id = Column(String(50), nullable=False)
    category = Column(Enum(ItemCategory), nullable=False)
    borrow_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=True)

    __table_args__ = (
        Index("idx_loan_position", "position"),
        Index("idx_loan_patron", "patron_id"),
        CheckConstraint("due_date > borrow_date", name="check_due_after_borrow"),
    )


class FineRow(Base):
    """Fines table - penalty records, kept as zero-amount rows once paid."""

    __tablename__ = "fines"

    id = Column(String(50), primary_key=True)
    position = Column(Integer, nullable=False)
    patron_id = Column(String(50), nullable=False)
    amount = Column(Float, nullable=False)
    paid = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_fine_position", "position"),
        Index("idx_fine_patron", "patron_id"),
        CheckConstraint("amount >= 0", name="check_fine_non_negative"),
    )


class PatronRow(Base):
    """Patrons table - registered borrowers and their contact address."""

    __tablename__ = "patrons"

    id = Column(String(50), primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True)

    __table_args__ = (Index("idx_patron_position", "position"),)


class SequenceRow(Base):
    """Sequences table - last value handed out per identifier prefix."""

    __tablename__ = "sequences"

    name = Column(String(50), primary_key=True)
    value = Column(Integer, nullable=False, default=0)

    __table_args__ = (CheckConstraint("value >= 0", name="check_sequence_non_negative"),)
