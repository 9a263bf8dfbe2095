"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and runs parameterized statements.
Uses psycopg2's ThreadedConnectionPool so request threads can share it.

Statements are written with PostgreSQL-style positional placeholders
(`$1`, `$2`, ...) and bound here to psycopg2's `%s` parameters.
"""

import re
from typing import Any, Sequence

import psycopg2
from psycopg2 import pool
from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def init_pool(
    min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str | None = None
) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: Connection string; defaults to ``config.DATABASE_URL``.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn or DATABASE_URL)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


def bind_positional(sql: str, values: Sequence[Any]) -> tuple[str, list]:
    """
    Rewrite `$n` placeholders as psycopg2 `%s` parameters.

    A placeholder may appear more than once or out of order; the returned
    value list follows the order of appearance in the statement.

    Args:
        sql: Statement using `$1`-style placeholders.
        values: Values indexed by placeholder number (1-based).

    Returns:
        The rewritten statement and the values to pass to `cursor.execute`.
    """
    bound: list = []

    def _bind(match: re.Match) -> str:
        bound.append(values[int(match.group(1)) - 1])
        return "%s"

    return _PLACEHOLDER_RE.sub(_bind, sql.replace("%", "%%")), bound


def query(sql: str, values: Sequence[Any] = ()) -> list[tuple]:
    """
    Execute one statement on a pooled connection and commit it.

    Args:
        sql: Statement using `$1`-style placeholders.
        values: Positional values for the placeholders.

    Returns:
        The fetched rows, or an empty list for statements without a result set.

    Raises:
        psycopg2.Error: Propagated unchanged after a rollback, so constraint
            violations stay distinguishable from "no rows".
    """
    statement, params = bind_positional(sql, values)
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(statement, params)
            rows = cur.fetchall() if cur.description is not None else []
        conn.commit()
        return rows
    except Exception as e:
        conn.rollback()
        logger.error(f"Query failed: {e}")
        raise
    finally:
        release_connection(conn)
