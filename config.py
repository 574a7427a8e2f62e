"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "database_name")
DB_USER: str = os.getenv("DB_USER", "postgres")
DB_PASS: str = os.getenv("DB_PASS", "")
DB_SSLMODE: str = os.getenv("DB_SSLMODE", "disable")



def build_database_url(user: str, password: str, host: str, port: int,
                       name: str, sslmode: str) -> str:
    """Assemble a libpq URL. libpq only decodes %XX, so nothing may be encoded as '+'."""
    return (
        f"postgresql://{quote(user, safe='')}:{quote(password, safe='')}"
        f"@{host}:{port}/{name}?sslmode={sslmode}"
    )


DATABASE_URL: str = os.getenv("DATABASE_URL") or build_database_url(
    DB_USER, DB_PASS, DB_HOST, DB_PORT, DB_NAME, DB_SSLMODE
)

# ── Connection driver ─────────────────────────────────────
DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))
DB_HEARTBEAT_SECONDS: float = float(os.getenv("DB_HEARTBEAT_SECONDS", "30"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Demo run ──────────────────────────────────────────────
DEMO_USER_NAME: str = os.getenv("DEMO_USER_NAME", "Htet Lin Maung")
DEMO_USER_AGE: int = int(os.getenv("DEMO_USER_AGE", "27"))
DEMO_TARGET_ID: int = int(os.getenv("DEMO_TARGET_ID", "1"))
DEMO_NEW_AGE: int = int(os.getenv("DEMO_NEW_AGE", "31"))
