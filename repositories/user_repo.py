"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the `users` table live here.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, release_connection
from db.exceptions import QueryError
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


def _rollback(conn) -> None:
    """Roll back the open transaction unless the connection is already gone."""
    if not conn.closed:
        conn.rollback()


class UserRepository:
    """Repository for CRUD operations on the users table."""

    # ── CREATE ────────────────────────────────────────────

    def create_user(self, name: str, age: int) -> int:
        """
        Insert a new user.

        Args:
            name: User name (not validated here).
            age: User age.

        Returns:
            The id the database assigned to the new row.

        Raises:
            QueryError: If the connection is unavailable or the insert is rejected.
        """
        sql = "INSERT INTO users (name, age) VALUES (%s, %s) RETURNING id;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (name, age))
                user_id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Created user #{user_id}")
            return user_id
        except psycopg2.Error as e:
            _rollback(conn)
            logger.error(f"Failed to create user {name!r}: {e}")
            raise QueryError.from_error("Failed to create user", e) from e
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def list_users(self) -> list[User]:
        """
        Fetch every user. Row order is whatever the database returns.

        Returns:
            List of User objects, empty if the table is empty.
        """
        sql = "SELECT id, name, age FROM users;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [User.from_row(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            _rollback(conn)
            logger.error(f"Failed to list users: {e}")
            raise QueryError.from_error("Failed to list users", e) from e
        finally:
            release_connection(conn)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a single user by primary key.

        Only the first matching row is decoded.

        Returns:
            A User object or None if not found.
        """
        sql = "SELECT id, name, age FROM users WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                row = cur.fetchone()
                return User.from_row(row) if row else None
        except psycopg2.Error as e:
            _rollback(conn)
            logger.error(f"Failed to fetch user #{user_id}: {e}")
            raise QueryError.from_error(f"Failed to fetch user #{user_id}", e) from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update_user_age(self, user_id: int, new_age: int) -> int:
        """
        Set a user's age.

        A missing id is not an error; the caller decides what zero means.

        Returns:
            Number of rows changed (0 or 1).
        """
        sql = "UPDATE users SET age = %s WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (new_age, user_id))
                affected = cur.rowcount
            conn.commit()
            logger.info(f"Updated age of user #{user_id} ({affected} row(s))")
            return affected
        except psycopg2.Error as e:
            _rollback(conn)
            logger.error(f"Failed to update user #{user_id}: {e}")
            raise QueryError.from_error(f"Failed to update user #{user_id}", e) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete_user_by_id(self, user_id: int) -> int:
        """
        Delete a user. Deleting an id that no longer exists succeeds with 0.

        Returns:
            Number of rows removed (0 or 1).
        """
        sql = "DELETE FROM users WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                affected = cur.rowcount
            conn.commit()
            logger.info(f"Deleted user #{user_id} ({affected} row(s))")
            return affected
        except psycopg2.Error as e:
            _rollback(conn)
            logger.error(f"Failed to delete user #{user_id}: {e}")
            raise QueryError.from_error(f"Failed to delete user #{user_id}", e) from e
        finally:
            release_connection(conn)
