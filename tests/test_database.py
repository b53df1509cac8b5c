"""
Tests for database.py - schema bootstrap and statement execution.
"""

import pytest
from sqlalchemy import inspect

from jobly.database import Store, create_db_engine, init_database, to_named_binds
from jobly.errors import ConstraintViolationError


class TestDatabaseInit:
    """Test schema creation."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(create_db_engine(f"sqlite:///{db_path}"))

        assert db_path.exists()

    def test_init_creates_tables(self, store):
        """Test that init_database creates companies and jobs."""
        tables = set(inspect(store.engine).get_table_names())
        assert {"companies", "jobs"} <= tables

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that parent directories of a SQLite file are created."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        init_database(create_db_engine(f"sqlite:///{db_path}"))

        assert db_path.exists()

    def test_init_idempotent(self, store):
        """Calling init_database twice doesn't error."""
        init_database(store.engine)
        init_database(store.engine)


class TestToNamedBinds:
    """Test $n placeholder rewriting."""

    def test_rewrites_placeholders(self):
        sql, binds = to_named_binds("SELECT * FROM jobs WHERE id = $1 AND salary >= $2", [5, 100])
        assert sql == "SELECT * FROM jobs WHERE id = :p1 AND salary >= :p2"
        assert binds == {"p1": 5, "p2": 100}

    def test_multi_digit_index(self):
        params = list(range(12))
        sql, binds = to_named_binds("VALUES ($1, $10, $12)", params)
        assert sql == "VALUES (:p1, :p10, :p12)"
        assert binds["p12"] == 11

    def test_no_placeholders(self):
        assert to_named_binds("SELECT 1", []) == ("SELECT 1", {})

    def test_missing_value(self):
        with pytest.raises(ValueError):
            to_named_binds("SELECT $2", ["only one"])


class TestStoreExecute:
    """Test Store.execute against SQLite."""

    def test_returns_dict_rows(self, store, job_ids):
        rows = store.execute("SELECT id, title FROM jobs WHERE id = $1", [job_ids[0]])
        assert rows == [{"id": job_ids[0], "title": "Job1"}]

    def test_non_returning_statement(self, store, job_ids):
        assert store.execute("UPDATE jobs SET salary = $1 WHERE id = $2", [1, job_ids[0]]) == []

    def test_each_call_commits(self, store, job_ids):
        store.execute("DELETE FROM jobs WHERE id = $1", [job_ids[0]])
        other = Store.from_url(str(store.engine.url))
        try:
            assert other.execute("SELECT id FROM jobs WHERE id = $1", [job_ids[0]]) == []
        finally:
            other.dispose()

    def test_foreign_key_enforced(self, store, job_ids):
        with pytest.raises(ConstraintViolationError):
            store.execute(
                "INSERT INTO jobs (title, company_handle) VALUES ($1, $2)",
                ["Orphan", "missing"],
            )

    def test_unique_company_name(self, store, job_ids):
        with pytest.raises(ConstraintViolationError):
            store.execute(
                "INSERT INTO companies (handle, name, description) VALUES ($1, $2, $3)",
                ["c9", "C1", "duplicate name"],
            )

    def test_delete_company_cascades(self, store, job_ids):
        store.execute("DELETE FROM companies WHERE handle = $1", ["c1"])
        assert store.execute("SELECT id FROM jobs") == []

    def test_statements_counted(self, store, job_ids):
        from jobly import database

        before = database.logger.metrics["statements_executed"]
        store.execute("SELECT 1")
        assert database.logger.metrics["statements_executed"] == before + 1
