"""
Tests for the database initialization script.
"""

import importlib.util
from pathlib import Path

import pytest

from library_lending.database import DatabaseManager, SqlRecordStore, reset_db_manager

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "init_database.py"


@pytest.fixture
def init_script():
    spec = importlib.util.spec_from_file_location("init_database", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    reset_db_manager()
    yield module
    reset_db_manager()


class TestInitDatabase:
    """Test the init_database script entry point."""

    def test_creates_tables(self, init_script, test_database_url, test_db_path):
        assert init_script.main(["--database-url", test_database_url]) == 0
        assert test_db_path.exists()

    def test_loads_sample_data(self, init_script, test_database_url):
        assert init_script.main(["--database-url", test_database_url, "--sample-data"]) == 0

        manager = DatabaseManager(test_database_url)
        try:
            store = SqlRecordStore(manager)
            assert len(store.load_books()) == 3
            assert len(store.load_patrons()) == 2
            assert [loan.category for loan in store.load_loans()] == ["BOOK", "CD"]
            assert [f.amount for f in store.load_fines()] == [10.0]
        finally:
            manager.close()

    def test_drop_existing_clears_data(self, init_script, test_database_url):
        init_script.main(["--database-url", test_database_url, "--sample-data"])
        reset_db_manager()

        assert init_script.main(["--database-url", test_database_url, "--drop-existing"]) == 0

        manager = DatabaseManager(test_database_url)
        try:
            assert SqlRecordStore(manager).load_books() == []
        finally:
            manager.close()
