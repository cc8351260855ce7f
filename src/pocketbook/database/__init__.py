"""Database layer for pocketbook application."""

from pocketbook.database.base import StateStorage
from pocketbook.database.factories import create_sqlite_storage
from pocketbook.database.persistence import DebouncedSaver, PersistenceAdapter

__all__ = ["StateStorage", "create_sqlite_storage", "DebouncedSaver", "PersistenceAdapter"]
