"""Database layer for contabil application."""

from contabil.database.base import Database
from contabil.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
