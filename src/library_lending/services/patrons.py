"""
Patron directory: the identity collaborator for the lending ledger.

Patrons register with a name and a unique email address. The directory
answers ``find_by_id`` for the reminder dispatcher and refuses to
unregister a patron who still holds items or owes money. Loans and fines
of an unregistered patron stay in their ledgers as history.
"""

import logging

from ..database.record_store import RecordStore
from ..errors import (
    ActiveLoansBlockError,
    DuplicateError,
    InvalidArgumentError,
    NotFoundError,
    UnpaidFinesBlockError,
)
from ..models import Patron
from .fine_ledger import FineLedger
from .identifiers import next_identifier
from .loan_ledger import LoanLedger

logger = logging.getLogger(__name__)

PATRON_ID_PREFIX = "U"


class PatronDirectory:
    """Registers, looks up and removes patrons."""

    def __init__(self, store: RecordStore):
        self.store = store

    def register(self, name: str, email: str) -> Patron:
        """
        Register a new patron.

        Raises:
            DuplicateError: If the email address is already registered
            InvalidArgumentError: If the name or email is not a string
            pydantic.ValidationError: If the name or email is malformed
        """
        if not isinstance(name, str) or not isinstance(email, str):
            raise InvalidArgumentError("Patron name and email must be strings")

        with self.store.locked():
            patrons = self.store.load_patrons()
            if any(p.email.lower() == email.strip().lower() for p in patrons):
                raise DuplicateError(f"A patron with email {email} is already registered")

            patron = Patron(
                id=next_identifier(self.store, PATRON_ID_PREFIX, (p.id for p in patrons)),
                name=name,
                email=email.strip(),
            )
            patrons.append(patron)
            self.store.save_patrons(patrons)

        logger.info("Patron %s registered", patron.id)
        return patron

    def find_by_id(self, patron_id: str) -> Patron | None:
        return next((p for p in self.store.load_patrons() if p.id == patron_id), None)

    def find_by_email(self, email: str) -> Patron | None:
        if not isinstance(email, str):
            raise InvalidArgumentError("Email must be a string")
        wanted = email.strip().lower()
        return next((p for p in self.store.load_patrons() if p.email.lower() == wanted), None)

    def all_patrons(self) -> list[Patron]:
        return self.store.load_patrons()

    def unregister(self, patron_id: str, loan_ledger: LoanLedger, fine_ledger: FineLedger) -> None:
        """
        Remove a patron from the directory.

        Raises:
            NotFoundError: If the patron is not registered
            ActiveLoansBlockError: If the patron still holds items
            UnpaidFinesBlockError: If the patron owes money
        """
        with self.store.locked():
            patrons = self.store.load_patrons()
            if not any(p.id == patron_id for p in patrons):
                raise NotFoundError(f"Patron with id {patron_id} not found")

            if loan_ledger.has_active_loans(patron_id):
                raise ActiveLoansBlockError(
                    f"Patron {patron_id} still has items on loan and cannot be unregistered"
                )

            if fine_ledger.has_unpaid_fines(patron_id):
                raise UnpaidFinesBlockError(
                    f"Patron {patron_id} has unpaid fines and cannot be unregistered"
                )

            self.store.save_patrons([p for p in patrons if p.id != patron_id])

        logger.info("Patron %s unregistered", patron_id)
