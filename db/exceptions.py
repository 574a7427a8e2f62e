"""
db/exceptions.py
----------------
The one error kind raised by the database layer.
"""

from typing import Optional


class QueryError(Exception):
    """
    A database operation failed.

    Connection and authentication failures, rejected statements, network
    interruptions and a failed connection driver are all reported as this
    type. The original psycopg2 exception is chained as ``__cause__``.

    Attributes:
        pgcode: SQLSTATE reported by the server, or None for client-side failures.
    """

    def __init__(self, message: str, pgcode: Optional[str] = None):
        super().__init__(message)
        self.pgcode = pgcode

    @classmethod
    def from_error(cls, action: str, error: BaseException) -> "QueryError":
        """Build a QueryError describing `action` from a driver exception."""
        detail = str(error).strip() or error.__class__.__name__
        return cls(f"{action}: {detail}", pgcode=getattr(error, "pgcode", None))
