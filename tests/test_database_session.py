"""
Tests for SQLite connection handling.
"""

import pytest
from sqlalchemy import inspect, select

from library_lending.database import DatabaseManager, SequenceRow
from library_lending.database.session import get_db_manager, reset_db_manager


class TestDatabaseManager:
    """Test suite for DatabaseManager."""

    def test_defaults_to_configured_database(self, test_config, monkeypatch):
        monkeypatch.setattr("library_lending.database.session.get_config", lambda: test_config)

        manager = DatabaseManager()

        assert manager.database_url == test_config.get_database_url()

    def test_init_database_creates_tables(self, db_manager: DatabaseManager):
        tables = set(inspect(db_manager.engine).get_table_names())
        assert {"books", "loans", "fines", "patrons", "sequences"} <= tables

    def test_session_scope_commits(self, db_manager: DatabaseManager):
        with db_manager.session_scope() as session:
            session.add(SequenceRow(name="L", value=4))

        with db_manager.session_scope() as session:
            assert session.get(SequenceRow, "L").value == 4

    def test_session_scope_rolls_back_and_reraises(self, db_manager: DatabaseManager):
        with pytest.raises(RuntimeError):
            with db_manager.session_scope() as session:
                session.add(SequenceRow(name="L", value=4))
                session.flush()
                raise RuntimeError("boom")

        with db_manager.session_scope() as session:
            assert session.execute(select(SequenceRow)).scalars().all() == []

    def test_verify_connection(self, db_manager: DatabaseManager):
        assert db_manager.verify_connection() is True

    def test_verify_connection_failure(self, tmp_path):
        manager = DatabaseManager(f"sqlite:///{tmp_path}/missing/dir/ledger.db")
        assert manager.verify_connection() is False

    def test_close_allows_reopen(self, db_manager: DatabaseManager):
        db_manager.close()
        assert db_manager.verify_connection() is True


class TestGlobalManager:
    """Test the process-wide manager."""

    def test_get_db_manager_is_shared(self, test_database_url):
        reset_db_manager()
        try:
            first = get_db_manager(test_database_url)
            assert get_db_manager() is first
            reset_db_manager()
            assert get_db_manager(test_database_url) is not first
        finally:
            reset_db_manager()
