"""
Library lending facade.

Wires the record store, ledgers, gate, reminder dispatcher and supporting
services together so callers deal with one object:

```python
library = LendingLibrary.from_config()
patron = library.patrons.register("Jane Doe", "jane@example.com")
book = library.catalog.add_book("Dune", "Frank Herbert", "9780441172719")
loan = library.gate.borrow_book(patron.id, book.id)
```

The operations that act "as the current patron" read the identity from
the actor session.
"""

import logging
from collections.abc import Callable
from datetime import date

from .config import LendingConfig, configure_logging, get_config
from .database import DatabaseManager, RecordStore, SqlRecordStore
from .errors import PolicyViolationError
from .models import ItemCategory, Loan
from .notifications import NotificationSender, SmtpNotificationSender
from .services import (
    ActorSession,
    BorrowingGate,
    Catalog,
    FineLedger,
    LoanLedger,
    PatronDirectory,
    ReminderDispatcher,
)
from .services.reminders import DEFAULT_SUBJECT

logger = logging.getLogger(__name__)


class LendingLibrary:
    """All lending services sharing one record store, clock and session."""

    def __init__(
        self,
        store: RecordStore,
        sender: NotificationSender,
        clock: Callable[[], date] = date.today,
        session: ActorSession | None = None,
        reminder_subject: str = DEFAULT_SUBJECT,
    ):
        self.store = store
        self.session = session or ActorSession()
        self.catalog = Catalog(store)
        self.patrons = PatronDirectory(store)
        self.loans = LoanLedger(store, clock)
        self.fines = FineLedger(store)
        self.gate = BorrowingGate(self.loans, self.fines)
        self.reminders = ReminderDispatcher(self.loans, self.patrons, sender, reminder_subject)

    @classmethod
    def from_config(
        cls,
        config: LendingConfig | None = None,
        sender: NotificationSender | None = None,
        clock: Callable[[], date] = date.today,
    ) -> "LendingLibrary":
        """
        Build a library on the configured SQLite database.

        The schema is created if missing. Without an explicit sender,
        reminders go out through SMTP using the configured server.
        """
        config = config or get_config()
        configure_logging(config)

        db_manager = DatabaseManager(config.get_database_url())
        db_manager.init_database()

        return cls(
            SqlRecordStore(db_manager),
            sender or SmtpNotificationSender(config),
            clock=clock,
            reminder_subject=config.reminder_subject,
        )

    def unregister_patron(self, patron_id: str) -> None:
        self.patrons.unregister(patron_id, self.loans, self.fines)

    def current_patron_id(self) -> str:
        """
        Raises:
            PolicyViolationError: If no patron is logged in
        """
        patron_id = self.session.active_patron_id()
        if patron_id is None:
            raise PolicyViolationError("You must be logged in as a patron to do this")
        return patron_id

    def borrow_as_current_patron(self, item_id: str, category: ItemCategory | str) -> Loan:
        return self.gate.borrow(self.current_patron_id(), item_id, category)

    def pay_as_current_patron(self, amount: float) -> float:
        return self.fines.pay_fine(self.current_patron_id(), amount)
