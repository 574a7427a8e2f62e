"""
db/init_db.py
-------------
Creates the `users` table if it does not already exist.
The demo never runs this on its own; bootstrap a fresh database with:
    python -m db.init_db
"""

import psycopg2

from db.connection import get_connection, release_connection
from db.exceptions import QueryError
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: the only entity the demo works with
CREATE TABLE IF NOT EXISTS users (
    id      SERIAL PRIMARY KEY,
    name    TEXT NOT NULL,
    age     INTEGER NOT NULL
);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create the users table.
    Safe to call multiple times (uses IF NOT EXISTS).

    Raises:
        QueryError: If the statement fails.
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except psycopg2.Error as e:
        if not conn.closed:
            conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise QueryError.from_error("Failed to initialize schema", e) from e
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_connection, close_connection
    init_connection()
    try:
        create_tables()
    finally:
        close_connection()
    print("✅ Database schema created successfully.")
