"""
Lending services.

Leaf to root:
- FineCalculator: category + days overdue -> flat fee
- LoanLedger: loan lifecycle and due dates
- FineLedger: fines, balances and oldest-first payment allocation
- BorrowingGate: eligibility check in front of the loan ledger
- ReminderDispatcher: overdue loans -> patron email -> sender

Supporting services: Catalog, PatronDirectory and ActorSession.
"""

from .borrowing_gate import BorrowingGate
from .catalog import Catalog
from .fine_calculator import FineCalculator
from .fine_ledger import FineLedger
from .loan_ledger import LoanLedger
from .patrons import PatronDirectory
from .reminders import PatronLookup, ReminderDispatcher
from .session_state import ActorSession, Role

__all__ = [
    "ActorSession",
    "BorrowingGate",
    "Catalog",
    "FineCalculator",
    "FineLedger",
    "LoanLedger",
    "PatronDirectory",
    "PatronLookup",
    "ReminderDispatcher",
    "Role",
]
