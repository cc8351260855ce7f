"""Tests for the SQLAlchemy state storage."""

from pocketbook.database.factories import create_sqlite_storage
from pocketbook.database.models import StateRecord
from pocketbook.database.sqlalchemy_db import SQLAlchemyStateStorage


class TestStateStorage:
    """Tests for the key-value storage behind the persistence adapter."""

    def test_get_missing_key_returns_none(self, storage):
        """A key that was never written reads as None."""
        storage.connect()
        storage.initialize_schema()

        assert storage.get("current_state") is None

    def test_put_then_get(self, storage):
        """A written value is read back unchanged."""
        storage.connect()
        storage.initialize_schema()

        storage.put("current_state", '{"transactions": []}')

        assert storage.get("current_state") == '{"transactions": []}'

    def test_put_replaces_existing_value(self, storage):
        """Writing the same key twice keeps a single row with the latest value."""
        storage.initialize_schema()

        storage.put("current_state", "first")
        storage.put("current_state", "second")

        assert storage.get("current_state") == "second"
        with storage.session_factory() as session:
            assert session.query(StateRecord).count() == 1
            assert session.get(StateRecord, "current_state").updated_at is not None

    def test_initialize_schema_is_idempotent(self, storage):
        """Creating the schema again keeps stored data."""
        storage.initialize_schema()
        storage.put("current_state", "kept")

        storage.initialize_schema()
        fresh = create_sqlite_storage(database_path=storage.database_url.removeprefix("sqlite:///"))
        fresh.initialize_schema()

        assert fresh.get("current_state") == "kept"
        fresh.disconnect()

    def test_factory_uses_environment_variable(self, temp_db_path, monkeypatch):
        """POCKETBOOK_DB_PATH is used when no path is given."""
        monkeypatch.setenv("POCKETBOOK_DB_PATH", temp_db_path)

        storage = create_sqlite_storage()

        assert isinstance(storage, SQLAlchemyStateStorage)
        assert storage.database_url == f"sqlite:///{temp_db_path}"
        storage.disconnect()

    def test_factory_defaults_to_home_directory(self, tmp_path, monkeypatch):
        """Without a path or environment variable the database lives in ~/.pocketbook."""
        monkeypatch.delenv("POCKETBOOK_DB_PATH", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        storage = create_sqlite_storage()

        assert storage.database_url == f"sqlite:///{tmp_path / '.pocketbook' / 'pocketbook.db'}"
        assert (tmp_path / ".pocketbook").is_dir()
