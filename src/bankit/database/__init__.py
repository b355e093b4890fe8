"""Database layer for bankit application."""

from bankit.database.base import Database
from bankit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
