"""
Shared fixtures: a mocked psycopg2 connection wired into the repository layer.
"""

from unittest.mock import MagicMock

import pytest

import repositories.user_repo as user_repo


@pytest.fixture
def fake_conn():
    """A MagicMock standing in for an open psycopg2 connection."""
    conn = MagicMock(name="connection")
    conn.closed = 0
    return conn


@pytest.fixture
def cursor(fake_conn):
    """The cursor yielded by ``with fake_conn.cursor() as cur``."""
    return fake_conn.cursor.return_value.__enter__.return_value


@pytest.fixture
def released(monkeypatch, fake_conn):
    """Route the repository to `fake_conn` and record every release."""
    calls = []
    monkeypatch.setattr(user_repo, "get_connection", lambda: fake_conn)
    monkeypatch.setattr(user_repo, "release_connection", calls.append)
    return calls


@pytest.fixture
def repo(released):
    return user_repo.UserRepository()
