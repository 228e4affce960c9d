"""
Configuration module for environment variables and application settings.
Centralized settings for the SQLite store, logging and data-layer defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

#---Constants---

BASE_DIR = Path(__file__).resolve().parent

DEFAULT_ENVIRONMENT = "production"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_VERSION = "1.0.0"
DEFAULT_DATABASE_FILE = "database.sqlite"
DEFAULT_ACTIVITY_LOG_LIMIT = 100

#---Database Configuration---


def resolve_database_path(path: str) -> Path:
    """Relative paths are anchored at the project root, not the cwd."""
    db_path = Path(path)
    if not db_path.is_absolute():
        db_path = BASE_DIR / db_path
    return db_path


def build_database_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


DATABASE_PATH = resolve_database_path(os.getenv("DATABASE_PATH", DEFAULT_DATABASE_FILE))
SQLALCHEMY_DATABASE_URL = build_database_url(DATABASE_PATH)

#---Application Settings---

ENVIRONMENT = os.getenv("ENVIRONMENT", DEFAULT_ENVIRONMENT)
DEBUG: bool = ENVIRONMENT == "development"
LOG_LEVEL = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
LOG_DIR = os.getenv("LOG_DIR", "logs")
VERSION = os.getenv("APP_VERSION", DEFAULT_VERSION)

#---Data layer defaults---

ACTIVITY_LOG_LIMIT = int(os.getenv("ACTIVITY_LOG_LIMIT", DEFAULT_ACTIVITY_LOG_LIMIT))
