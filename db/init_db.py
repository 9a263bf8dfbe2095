"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Companies table: keyed by a short lowercase handle
CREATE TABLE IF NOT EXISTS companies (
    handle          VARCHAR(25) PRIMARY KEY CHECK (handle = lower(handle)),
    name            TEXT UNIQUE NOT NULL,
    num_employees   INTEGER CHECK (num_employees >= 0),
    description     TEXT NOT NULL,
    logo_url        TEXT
);

-- Jobs table: every job belongs to exactly one company
CREATE TABLE IF NOT EXISTS jobs (
    id              SERIAL PRIMARY KEY,
    title           TEXT NOT NULL,
    salary          INTEGER CHECK (salary >= 0),
    equity          NUMERIC CHECK (equity <= 1.0),
    company_handle  VARCHAR(25) NOT NULL
        REFERENCES companies(handle) ON DELETE CASCADE
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_jobs_company_handle ON jobs(company_handle);
"""

DROP_SQL = """
DROP TABLE IF EXISTS jobs;
DROP TABLE IF EXISTS companies;
"""


def _run(sql: str, action: str) -> None:
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
        logger.info(f"Database schema {action}: done.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Database schema {action} failed: {e}")
        raise
    finally:
        release_connection(conn)


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run(SCHEMA_SQL, "create")


def drop_tables() -> None:
    """Drop all tables. Used to reset a disposable test database."""
    _run(DROP_SQL, "drop")


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
