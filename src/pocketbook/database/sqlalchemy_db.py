"""SQLAlchemy state storage implementation."""

from typing import Optional

from pocketbook.database.base import StateStorage
from pocketbook.database.models import Base, StateRecord, create_session_factory


class SQLAlchemyStateStorage(StateStorage):
    """SQLAlchemy-based implementation of the StateStorage interface.

    Every operation runs in its own short session, so calls may come from
    different worker threads as long as they do not overlap on one key.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._schema_ready = False

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Dispose pooled connections."""
        engine = self.session_factory.kw["bind"]
        engine.dispose()

    def initialize_schema(self) -> None:
        """Create the state table if it does not exist yet."""
        if self._schema_ready:
            return
        engine = self.session_factory.kw["bind"]
        Base.metadata.create_all(engine)
        self._schema_ready = True

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key."""
        with self.session_factory() as session:
            record = session.get(StateRecord, key)
            return record.value if record is not None else None

    def put(self, key: str, value: str) -> None:
        """Insert or replace the value under a key in one transaction."""
        with self.session_factory() as session, session.begin():
            record = session.get(StateRecord, key)
            if record is None:
                session.add(StateRecord(key=key, value=value))
            else:
                record.value = value
