#!/usr/bin/env python3
"""
Initialize the library lending database.

This script:
1. Creates all database tables
2. Optionally loads sample data
3. Verifies the expected tables exist

Usage:
    python scripts/init_database.py [--drop-existing] [--sample-data] [--database-url URL]
"""

import argparse
import logging
import sys

from sqlalchemy import inspect

from library_lending import LendingLibrary
from library_lending.config import LOG_FORMAT
from library_lending.database import DatabaseManager, SqlRecordStore, get_db_manager

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

EXPECTED_TABLES = {"books", "loans", "fines", "patrons", "sequences"}


class _LoggingSender:
    """Sample-data sender: reminders are logged, never delivered."""

    def send(self, address: str, subject: str, body: str) -> None:  # noqa: ARG002
        logger.info("Reminder for %s: %s", address, subject)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the library lending database")
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="Drop existing tables before creating new ones",
    )
    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Load sample data after creating tables",
    )
    parser.add_argument(
        "--database-url",
        help="Override default database URL",
    )

    args = parser.parse_args(argv)

    logger.info("Initializing database manager...")
    db_manager = get_db_manager(args.database_url)

    if not db_manager.verify_connection():
        logger.error("Failed to connect to database")
        return 1

    try:
        db_manager.init_database(drop_existing=args.drop_existing)

        if args.sample_data:
            logger.info("Loading sample data...")
            load_sample_data(db_manager)

        tables = set(inspect(db_manager.engine).get_table_names())
        logger.info("Tables present: %s", ", ".join(sorted(tables)))

        missing_tables = EXPECTED_TABLES - tables
        if missing_tables:
            logger.error("Missing expected tables: %s", missing_tables)
            return 1

        logger.info("Database initialization complete")
        return 0

    except Exception:
        logger.exception("Database initialization failed")
        return 1
    finally:
        db_manager.close()


def load_sample_data(db_manager: DatabaseManager) -> None:
    """
    Load sample data through the lending services.

    This creates a few books, two patrons, a book loan, a CD loan and one
    unpaid fine.
    """
    library = LendingLibrary(SqlRecordStore(db_manager), _LoggingSender())

    books = [
        library.catalog.add_book("The Great Gatsby", "F. Scott Fitzgerald", "9780743273565"),
        library.catalog.add_book("To Kill a Mockingbird", "Harper Lee", "9780061120084"),
        library.catalog.add_book("1984", "George Orwell", "9780452284234"),
    ]

    smith = library.patrons.register("John Smith", "john.smith@example.com")
    doe = library.patrons.register("Jane Doe", "jane.doe@example.com")

    library.gate.borrow_book(smith.id, books[2].id)
    library.gate.borrow_cd(smith.id, "CD-0001")
    library.fines.create_fine(doe.id, 10.0)

    logger.info("Created %d books and 2 patrons", len(books))
    logger.info("Created 2 loans and 1 fine")


if __name__ == "__main__":
    sys.exit(main())
