"""
Database package for the library lending ledger.

This package provides:
- SQLAlchemy schema definitions (schema.py)
- Session management and connection handling (session.py)
- The whole-collection record store used by every service (record_store.py)
"""

from .record_store import RecordStore, SqlRecordStore
from .schema import Base, BookRow, FineRow, LoanRow, PatronRow, SequenceRow
from .session import DatabaseManager, get_db_manager, reset_db_manager

__all__ = [
    "Base",
    "BookRow",
    "DatabaseManager",
    "FineRow",
    "LoanRow",
    "PatronRow",
    "RecordStore",
    "SequenceRow",
    "SqlRecordStore",
    "get_db_manager",
    "reset_db_manager",
]
