"""Database layer for paycycle application."""

from paycycle.database.base import Database
from paycycle.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
