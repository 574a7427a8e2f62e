"""
models/user.py
--------------
Domain model for a row of the `users` table.
"""

from dataclasses import dataclass
from typing import Sequence


@dataclass
class User:
    """
    Represents a single user.

    Attributes:
        id: Database primary key, assigned on insert.
        name: Name given at creation.
        age: Current age; the only mutable field.
    """
    id: int
    name: str
    age: int

    @classmethod
    def from_row(cls, row: Sequence) -> "User":
        """Decode a positional ``(id, name, age)`` row."""
        return cls(id=row[0], name=row[1], age=row[2])

    def as_tuple(self) -> tuple[int, str, int]:
        return (self.id, self.name, self.age)

    def __str__(self) -> str:
        return f"id: {self.id}, name: {self.name}, age: {self.age}"
