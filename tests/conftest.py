"""Test configuration and fixtures for the library lending ledger.

This conftest.py provides:
1. Isolated test databases - each test gets a clean SQLite file
2. A controllable clock - date rules are exercised by moving "today"
3. A capturing notification sender - reminders are recorded, not emailed
4. Configuration overrides - tests never see the developer's environment
"""

import os
from collections.abc import Generator
from datetime import date, timedelta
from pathlib import Path

import pytest

from library_lending import LendingLibrary
from library_lending.config import LendingConfig, reset_config
from library_lending.database import DatabaseManager, SqlRecordStore
from library_lending.services import (
    BorrowingGate,
    Catalog,
    FineLedger,
    LoanLedger,
    PatronDirectory,
)

START_DATE = date(2024, 1, 1)


class FakeClock:
    """Callable clock whose current date the test controls."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> date:
        self.today += timedelta(days=days)
        return self.today


class CapturingSender:
    """Notification sender that records messages instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    def send(self, address: str, subject: str, body: str) -> None:
        self.sent.append((address, subject, body))

    @property
    def addresses(self) -> list[str]:
        return [address for address, _, _ in self.sent]


# === Test Database Fixtures ===


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for each test."""
    return tmp_path / "test_lending.db"


@pytest.fixture
def test_database_url(test_db_path: Path) -> str:
    """Provide a SQLAlchemy database URL for testing."""
    return f"sqlite:///{test_db_path}"


@pytest.fixture
def db_manager(test_database_url: str) -> Generator[DatabaseManager, None, None]:
    """Provide a database manager with a freshly created schema."""
    manager = DatabaseManager(test_database_url)
    manager.init_database()
    yield manager
    manager.close()


@pytest.fixture
def store(db_manager: DatabaseManager) -> SqlRecordStore:
    return SqlRecordStore(db_manager)


# === Service Fixtures ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START_DATE)


@pytest.fixture
def sender() -> CapturingSender:
    return CapturingSender()


@pytest.fixture
def catalog(store: SqlRecordStore) -> Catalog:
    return Catalog(store)


@pytest.fixture
def patrons(store: SqlRecordStore) -> PatronDirectory:
    return PatronDirectory(store)


@pytest.fixture
def loan_ledger(store: SqlRecordStore, clock: FakeClock) -> LoanLedger:
    return LoanLedger(store, clock)


@pytest.fixture
def fine_ledger(store: SqlRecordStore) -> FineLedger:
    return FineLedger(store)


@pytest.fixture
def gate(loan_ledger: LoanLedger, fine_ledger: FineLedger) -> BorrowingGate:
    return BorrowingGate(loan_ledger, fine_ledger)


@pytest.fixture
def library(store: SqlRecordStore, sender: CapturingSender, clock: FakeClock) -> LendingLibrary:
    return LendingLibrary(store, sender, clock=clock)


@pytest.fixture
def book(catalog: Catalog):
    """A single available book in the catalog."""
    return catalog.add_book("The Great Gatsby", "F. Scott Fitzgerald", "9780743273565")


# === Configuration Fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment without LIBRARY_LENDING_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_LENDING_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_config(test_db_path: Path, clean_env) -> Generator[LendingConfig, None, None]:
    """Provide a test-specific configuration with an isolated database."""
    reset_config()

    config = LendingConfig(
        _env_file=None,
        database_path=test_db_path,
        debug=True,
        log_level="DEBUG",
        smtp_host="smtp.test.invalid",
        smtp_port=2525,
        sender_address="library@test.invalid",
    )

    yield config

    reset_config()
