"""Database factory functions for creating ledger store instances."""

import os
from pathlib import Path
from typing import Optional

from bankit.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_DB_DIR = ".bankit"
DEFAULT_DB_NAME = "bankit.db"


def default_database_path() -> Path:
    """Path used when neither an explicit path nor BANKIT_DB_PATH is set."""
    return Path.home() / DEFAULT_DB_DIR / DEFAULT_DB_NAME


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed ledger store.

    Args:
        database_path: Path to the SQLite file. Falls back to the BANKIT_DB_PATH
            environment variable, then to ~/.bankit/bankit.db. The parent
            directory is created if missing.

    Returns:
        SQLAlchemyDatabase bound to the file
    """
    path = Path(database_path or os.environ.get("BANKIT_DB_PATH") or default_database_path())
    path.expanduser().parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path.expanduser()}")
