"""
services/user_service.py
-------------------------
The demo sequence: create, list, fetch, update and delete a user.
"""

from typing import Iterator, Optional

from config import DEMO_NEW_AGE, DEMO_TARGET_ID, DEMO_USER_AGE, DEMO_USER_NAME
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Runs user operations and formats their results for display."""

    def __init__(self, repo: Optional[UserRepository] = None):
        self.repo = repo or UserRepository()

    def create(self, name: str, age: int) -> str:
        user_id = self.repo.create_user(name, age)
        return f"Created user #{user_id}: {name} ({age})"

    def list_all(self) -> list[str]:
        return [str(user) for user in self.repo.list_users()]

    def fetch(self, user_id: int) -> str:
        user = self.repo.get_user_by_id(user_id)
        if user is None:
            return "User not found by given ID"
        return f"Fetched by ID -> {user}"

    def update_age(self, user_id: int, new_age: int) -> str:
        affected = self.repo.update_user_age(user_id, new_age)
        return f"Updated age of user #{user_id} to {new_age} ({affected} row(s) affected)"

    def delete(self, user_id: int) -> str:
        affected = self.repo.delete_user_by_id(user_id)
        return f"Deleted user #{user_id} ({affected} row(s) affected)"

    def run_demo(
        self,
        name: str = DEMO_USER_NAME,
        age: int = DEMO_USER_AGE,
        target_id: int = DEMO_TARGET_ID,
        new_age: int = DEMO_NEW_AGE,
    ) -> Iterator[str]:
        """
        Yield one output line per step, in order.

        Each step runs only when the previous line has been consumed, so a
        failing step stops the sequence with everything before it already
        committed and printed.
        """
        logger.info("Running demo sequence...")
        yield self.create(name, age)
        yield from self.list_all()
        yield self.fetch(target_id)
        yield self.update_age(target_id, new_age)
        yield self.delete(target_id)
