"""Tests for the single shared connection and its background driver."""

import threading
from unittest.mock import MagicMock

import psycopg2
import pytest

import db.connection as connection
from db.exceptions import QueryError

IDLE = 3600


@pytest.fixture
def pg_conn():
    conn = MagicMock(name="pg_connection")
    conn.closed = 0
    return conn


@pytest.fixture
def connect(monkeypatch, pg_conn):
    mock_connect = MagicMock(return_value=pg_conn)
    monkeypatch.setattr(connection.psycopg2, "connect", mock_connect)
    yield mock_connect
    connection.close_connection()


def test_get_connection_before_init_raises():
    with pytest.raises(RuntimeError, match="not initialized"):
        connection.get_connection()


def test_connect_failure_is_query_error(monkeypatch):
    monkeypatch.setattr(
        connection.psycopg2,
        "connect",
        MagicMock(side_effect=psycopg2.OperationalError('password authentication failed for user "postgres"')),
    )

    with pytest.raises(QueryError, match="password authentication failed") as exc_info:
        connection.init_connection("postgresql://postgres@localhost/db")

    assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)
    with pytest.raises(RuntimeError):
        connection.get_connection()


def test_init_is_idempotent(connect):
    connection.init_connection("postgresql://localhost/db", heartbeat_seconds=IDLE)
    connection.init_connection("postgresql://localhost/db", heartbeat_seconds=IDLE)

    assert connect.call_count == 1
    assert connect.call_args.args == ("postgresql://localhost/db",)
    assert "connect_timeout" in connect.call_args.kwargs


def test_connection_is_held_until_released(connect, pg_conn):
    connection.init_connection("dsn", heartbeat_seconds=IDLE)

    conn = connection.get_connection()
    assert conn is pg_conn
    assert connection._lock.locked()

    connection.release_connection(conn)
    assert not connection._lock.locked()


def test_closed_connection_raises_and_does_not_hold_lock(connect, pg_conn):
    connection.init_connection("dsn", heartbeat_seconds=IDLE)
    pg_conn.closed = 1

    with pytest.raises(QueryError, match="closed"):
        connection.get_connection()
    assert not connection._lock.locked()


def test_heartbeat_runs_in_background(connect, pg_conn):
    committed = threading.Event()
    cursor = pg_conn.cursor.return_value.__enter__.return_value
    pg_conn.commit.side_effect = lambda: committed.set()

    connection.init_connection("dsn", heartbeat_seconds=0.01)

    assert committed.wait(2)
    assert cursor.execute.call_args.args[0] == connection.HEARTBEAT_SQL


def test_caller_waiting_on_failing_heartbeat_gets_query_error(connect, pg_conn):
    in_heartbeat = threading.Event()
    fail_now = threading.Event()

    def blocking_execute(sql):
        in_heartbeat.set()
        fail_now.wait(2)
        raise psycopg2.OperationalError("server closed the connection unexpectedly")

    cursor = pg_conn.cursor.return_value.__enter__.return_value
    cursor.execute.side_effect = blocking_execute
    connection.init_connection("dsn", heartbeat_seconds=0.01)
    assert in_heartbeat.wait(2)

    result = {}

    def caller():
        try:
            result["conn"] = connection.get_connection()
        except QueryError as e:
            result["error"] = e

    waiter = threading.Thread(target=caller)
    waiter.start()
    waiter.join(0.05)
    fail_now.set()
    waiter.join(2)

    assert "conn" not in result
    assert "connection lost" in str(result["error"])
    assert not connection._lock.locked()


def test_driver_failure_surfaces_to_later_calls(connect, pg_conn):
    cursor = pg_conn.cursor.return_value.__enter__.return_value
    cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection unexpectedly")

    connection.init_connection("dsn", heartbeat_seconds=0.01)
    driver = connection._driver
    driver.join(timeout=2)

    assert driver.failed
    with pytest.raises(QueryError, match="connection lost: server closed") as exc_info:
        connection.get_connection()
    assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)


def test_close_stops_driver_and_closes(connect, pg_conn):
    connection.init_connection("dsn", heartbeat_seconds=IDLE)
    driver = connection._driver

    connection.close_connection()

    assert not driver.is_alive()
    pg_conn.close.assert_called_once()
    with pytest.raises(RuntimeError):
        connection.get_connection()


def test_close_without_connection_is_noop():
    connection.close_connection()


class TestQueryError:
    def test_from_error_keeps_sqlstate(self):
        class UniqueViolation(Exception):
            pgcode = "23505"

        err = QueryError.from_error("Failed to create user", UniqueViolation("duplicate key"))

        assert str(err) == "Failed to create user: duplicate key"
        assert err.pgcode == "23505"

    def test_from_error_without_message_uses_type_name(self):
        err = QueryError.from_error("Database connection lost", psycopg2.InterfaceError())

        assert str(err) == "Database connection lost: InterfaceError"
        assert err.pgcode is None
