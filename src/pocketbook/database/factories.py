"""Storage factory functions."""

import os
from pathlib import Path
from typing import Optional

from pocketbook.database.sqlalchemy_db import SQLAlchemyStateStorage


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStateStorage:
    """Create a SQLite-backed state storage.

    Args:
        database_path: Path to SQLite database file. If None, checks the
            POCKETBOOK_DB_PATH environment variable, then defaults to
            ~/.pocketbook/pocketbook.db

    Returns:
        SQLAlchemyStateStorage configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("POCKETBOOK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".pocketbook"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "pocketbook.db")

    return SQLAlchemyStateStorage(f"sqlite:///{database_path}")
