"""
Application settings.

Values are read once from the environment (a ``.env`` file in the working
directory is loaded first) and exposed as module level constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Database
# The default is a private in-memory SQLite database that lives as long as the process.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

# Bearer tokens
SECRET_KEY = os.getenv("SECRET_KEY", "pembukuan-dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_SECONDS = int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", "3600"))

# HTTP
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

# Timestamps are recorded in this zone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Jakarta")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR")

SEED_DEMO_DATA = _get_bool("SEED_DEMO_DATA", True)
