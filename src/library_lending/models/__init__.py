"""
Library Lending Models.

Pydantic models for the records the lending ledger works with:
- Book: catalog items with a borrowed flag
- Loan: one item lent to one patron for a bounded period
- Fine: a monetary penalty owed by a patron
- Patron: a registered borrower
- ItemCategory / ItemPolicy: per-category loan period and overdue fee
"""

from .book import Book
from .fine import Fine
from .item import ITEM_POLICIES, ItemCategory, ItemPolicy, parse_category, policy_for
from .loan import Loan
from .patron import Patron

__all__ = [
    "ITEM_POLICIES",
    "Book",
    "Fine",
    "ItemCategory",
    "ItemPolicy",
    "Loan",
    "Patron",
    "parse_category",
    "policy_for",
]
