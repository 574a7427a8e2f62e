"""
main.py
-------
Entry point for the users CRUD demo.

Responsibilities:
    - Open the database connection and start its driver.
    - Run the demo sequence, printing each result line.
    - Report the first failure on stderr and exit non-zero.
"""

import sys

from db.connection import close_connection, init_connection
from db.exceptions import QueryError
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> int:
    """Run the demo. Returns the process exit status."""
    try:
        init_connection()
        for line in UserService().run_demo():
            print(line)
    except QueryError as e:
        logger.error(f"Demo aborted: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        close_connection()

    logger.info("Demo finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
