"""
Library Lending Ledger Package.

Lending records for a small library: items on loan, who borrowed them,
when they are due, and the fines owed for late returns.

Key Components:
- models: Pydantic models for books, loans, fines and patrons
- database: SQLAlchemy schema, sessions and the whole-collection record store
- services: fine calculator, loan and fine ledgers, borrowing gate, reminders
- config: Configuration management with Pydantic v2
- library: the LendingLibrary facade wiring everything together
"""

__version__ = "0.1.0"

from .library import LendingLibrary

__all__ = [
    "LendingLibrary",
    "__version__",
]
