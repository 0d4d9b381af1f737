"""
Overdue reminder dispatch.

Sweeps the loan ledger for overdue loans and sends one reminder per loan
to the borrowing patron's email address.

Failure policy:
- A loan whose patron cannot be resolved (for example a patron removed from
  the directory while their loans remain) is skipped and not counted.
- A transport failure aborts the sweep: the ``NotificationError`` propagates
  and reminders already sent are not repeated or rolled back.
"""

import logging
from typing import Protocol

from ..models import Loan, Patron
from ..notifications import NotificationSender
from .loan_ledger import LoanLedger

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Overdue library item"


class PatronLookup(Protocol):
    """Resolves a patron id to a patron record."""

    def find_by_id(self, patron_id: str) -> Patron | None: ...


class ReminderDispatcher:
    """Sends overdue reminders for every resolvable overdue loan."""

    def __init__(
        self,
        loan_ledger: LoanLedger,
        patrons: PatronLookup,
        sender: NotificationSender,
        subject: str = DEFAULT_SUBJECT,
    ):
        self.loan_ledger = loan_ledger
        self.patrons = patrons
        self.sender = sender
        self.subject = subject

    def send_overdue_reminders(self) -> int:
        """
        Send a reminder for each overdue loan.

        Returns:
            Number of reminders actually sent (skipped loans are not counted)

        Raises:
            NotificationError: If the sender fails; the sweep stops there
        """
        overdue = self.loan_ledger.overdue_loans()
        sent = 0

        for loan in overdue:
            patron = self.patrons.find_by_id(loan.patron_id)
            if patron is None:
                logger.debug(
                    "Skipping reminder for loan %s: patron %s not found", loan.id, loan.patron_id
                )
                continue

            self.sender.send(patron.email, self.subject, self.compose_body(loan, patron))
            sent += 1

        logger.info("Sent %d overdue reminder(s) for %d overdue loan(s)", sent, len(overdue))
        return sent

    @staticmethod
    def compose_body(loan: Loan, patron: Patron) -> str:
        return (
            f"Dear {patron.name},\n\n"
            f"Item {loan.item_id} (loan {loan.id}) was due on {loan.due_date.isoformat()} "
            "and has not been returned yet.\n"
            "Please return it as soon as possible. Borrowing is suspended while "
            "an item is overdue.\n"
        )
