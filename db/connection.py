"""
db/connection.py
----------------
Manages the single PostgreSQL connection shared by all repositories.

The connection is handed out to one caller at a time (get/release pair).
A background ConnectionDriver thread keeps watch on it for its whole
lifetime; once the driver sees the connection fail, every later
get_connection() raises QueryError instead of handing out a dead connection.
"""

import threading
from typing import Optional

import psycopg2
from psycopg2.extensions import connection as PgConnection

from config import DATABASE_URL, DB_CONNECT_TIMEOUT, DB_HEARTBEAT_SECONDS
from db.exceptions import QueryError
from utils.logger import get_logger

logger = get_logger(__name__)

HEARTBEAT_SQL = "SELECT 1;"

_connection: Optional[PgConnection] = None
_driver: Optional["ConnectionDriver"] = None
_lock = threading.Lock()


class ConnectionDriver(threading.Thread):
    """
    Background thread that keeps the connection under supervision.

    Every `interval` seconds it runs a heartbeat query while holding the
    connection lock. The first failure is recorded in `error` and the
    thread exits; callers observe it through `raise_if_failed()`.
    """

    def __init__(self, conn: PgConnection, lock: threading.Lock, interval: float):
        super().__init__(name="db-connection-driver", daemon=True)
        self._conn = conn
        self._lock = lock
        self._interval = interval
        self._stop_event = threading.Event()
        self.error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def run(self) -> None:
        logger.info(f"Connection driver started (heartbeat every {self._interval}s).")
        while not self._stop_event.wait(self._interval):
            if not self._heartbeat():
                logger.error(f"Connection driver failed: {self.error}")
                return
        logger.info("Connection driver stopped.")

    def _heartbeat(self) -> bool:
        """Run one heartbeat. Returns False once the connection has failed."""
        with self._lock:
            if self._stop_event.is_set():
                return True
            try:
                if self._conn.closed:
                    raise psycopg2.InterfaceError("connection already closed")
                with self._conn.cursor() as cur:
                    cur.execute(HEARTBEAT_SQL)
                self._conn.commit()
            except psycopg2.Error as e:
                # set while the lock is held so a waiting caller sees it
                self.error = e
                return False
        return True

    def raise_if_failed(self) -> None:
        """
        Raises:
            QueryError: If the driver has observed a connection failure.
        """
        if self.error is not None:
            raise QueryError.from_error("Database connection lost", self.error) from self.error

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the thread to exit and wait for it."""
        self._stop_event.set()
        if self.is_alive():
            self.join(timeout)


def init_connection(
    dsn: str = DATABASE_URL,
    heartbeat_seconds: float = DB_HEARTBEAT_SECONDS,
) -> None:
    """
    Open the database connection and start its driver.

    Args:
        dsn: libpq connection string or URL.
        heartbeat_seconds: Interval between driver heartbeats.

    Raises:
        QueryError: If the database is unreachable or rejects the credentials.
    """
    global _connection, _driver
    if _connection is not None:
        return
    try:
        conn = psycopg2.connect(dsn, connect_timeout=DB_CONNECT_TIMEOUT)
    except psycopg2.Error as e:
        logger.error(f"Failed to connect to database: {e}")
        raise QueryError.from_error("Failed to connect to database", e) from e

    _connection = conn
    _driver = ConnectionDriver(conn, _lock, heartbeat_seconds)
    _driver.start()
    logger.info("Database connection opened successfully.")


def get_connection() -> PgConnection:
    """
    Borrow the connection. Must be paired with release_connection().

    Returns:
        The psycopg2 connection object.

    Raises:
        RuntimeError: If the connection has not been initialized.
        QueryError: If the driver reported a failure or the connection is closed.
    """
    if _connection is None:
        raise RuntimeError("Database connection not initialized. Call init_connection() first.")
    if _driver is not None:
        _driver.raise_if_failed()

    _lock.acquire()
    if _driver is not None and _driver.failed:
        _lock.release()
        _driver.raise_if_failed()
    if _connection.closed:
        _lock.release()
        raise QueryError("Database connection is closed")
    return _connection


def release_connection(conn: PgConnection) -> None:
    """
    Hand a borrowed connection back.

    Args:
        conn: The connection returned by get_connection().
    """
    if conn is _connection and _lock.locked():
        _lock.release()


def close_connection() -> None:
    """Stop the driver and close the connection."""
    global _connection, _driver
    if _driver is not None:
        _driver.stop()
        _driver = None
    if _connection is not None:
        with _lock:
            if not _connection.closed:
                _connection.close()
        _connection = None
        logger.info("Database connection closed.")
