"""
Tests for db/connection.py - placeholder binding and statement execution.
"""

import pytest

from db import connection
from db.connection import bind_positional


class FakeCursor:
    def __init__(self, rows, description, error=None):
        self.rows = rows
        self.description = description
        self.error = error
        self.executed = []

    def execute(self, sql, params):
        self.executed.append((sql, params))
        if self.error:
            raise self.error

    def fetchall(self):
        return self.rows

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.released = []

    def getconn(self):
        return self.conn

    def putconn(self, conn):
        self.released.append(conn)


@pytest.fixture
def make_pool(monkeypatch):
    """Install a FakePool around a FakeCursor built from the given arguments."""
    def _make(rows=None, description=("col",), error=None):
        cursor = FakeCursor(rows or [], description, error)
        pool = FakePool(FakeConnection(cursor))
        monkeypatch.setattr(connection, "_pool", pool)
        return pool
    return _make


class TestBindPositional:
    """Test `$n` -> `%s` rewriting."""

    def test_sequential_placeholders(self):
        sql, params = bind_positional(
            "UPDATE jobs SET title = $1 WHERE id = $2", ["New", 7]
        )
        assert sql == "UPDATE jobs SET title = %s WHERE id = %s"
        assert params == ["New", 7]

    def test_out_of_order_and_repeated(self):
        """Values follow the order placeholders appear in."""
        sql, params = bind_positional("SELECT $2, $1, $2", ["a", "b"])
        assert sql == "SELECT %s, %s, %s"
        assert params == ["b", "a", "b"]

    def test_literal_percent_escaped(self):
        sql, params = bind_positional("SELECT '100%' WHERE x = $1", [1])
        assert sql == "SELECT '100%%' WHERE x = %s"
        assert params == [1]

    def test_no_placeholders(self):
        assert bind_positional("SELECT 1", []) == ("SELECT 1", [])

    def test_multi_digit_placeholder(self):
        values = list(range(1, 12))
        sql, params = bind_positional("SELECT $11, $1", values)
        assert sql == "SELECT %s, %s"
        assert params == [11, 1]


class TestQuery:
    """Test execution on a pooled connection."""

    def test_returns_rows_and_commits(self, make_pool):
        pool = make_pool(rows=[("c1",)])

        rows = connection.query("SELECT handle FROM companies WHERE handle = $1", ["c1"])

        assert rows == [("c1",)]
        assert pool.conn.committed
        assert pool.released == [pool.conn]
        assert pool.conn._cursor.executed == [
            ("SELECT handle FROM companies WHERE handle = %s", ["c1"])
        ]

    def test_statement_without_result_set(self, make_pool):
        """No description means nothing to fetch."""
        make_pool(description=None)
        assert connection.query("DELETE FROM jobs") == []

    def test_error_rolls_back_and_releases(self, make_pool):
        pool = make_pool(error=RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            connection.query("SELECT 1")

        assert pool.conn.rolled_back
        assert not pool.conn.committed
        assert pool.released == [pool.conn]

    def test_uninitialized_pool(self, monkeypatch):
        monkeypatch.setattr(connection, "_pool", None)
        with pytest.raises(RuntimeError, match="not initialized"):
            connection.query("SELECT 1")
