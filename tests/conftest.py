"""Shared pytest fixtures for pocketbook tests."""

import os
import tempfile
from datetime import date, datetime, UTC
from decimal import Decimal
from itertools import count

import pytest

from pocketbook.database.factories import create_sqlite_storage
from pocketbook.database.persistence import PersistenceAdapter
from pocketbook.domain.account import AccountService
from pocketbook.domain.backup import BackupService
from pocketbook.domain.budget import BudgetService
from pocketbook.domain.category import CategoryService
from pocketbook.domain.entities import (
    Account,
    AccountType,
    DEFAULT_ACCOUNT_ID,
    Transaction,
    TransactionType,
)
from pocketbook.domain.savings import SavingsGoalService
from pocketbook.domain.store import AppStore
from pocketbook.domain.transaction import TransactionService

FIXED_TODAY = date(2024, 6, 15)


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def storage(temp_db_path):
    """Create a SQLite state storage on a temporary file."""
    storage = create_sqlite_storage(database_path=temp_db_path)
    yield storage
    storage.disconnect()


@pytest.fixture
def adapter(storage):
    """Create a PersistenceAdapter over the temporary storage."""
    return PersistenceAdapter(storage)


@pytest.fixture
def store():
    """Create a store holding the initial state."""
    return AppStore()


@pytest.fixture
def ids():
    """Return a deterministic id factory (id-1, id-2, ...)."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def account_service(store, ids):
    """Create an AccountService over the store."""
    return AccountService(store, id_factory=ids)


@pytest.fixture
def transaction_service(store, ids):
    """Create a TransactionService over the store."""
    return TransactionService(store, id_factory=ids)


@pytest.fixture
def category_service(store):
    """Create a CategoryService over the store."""
    return CategoryService(store)


@pytest.fixture
def budget_service(store, ids):
    """Create a BudgetService over the store."""
    return BudgetService(store, id_factory=ids)


@pytest.fixture
def savings_service(store, ids):
    """Create a SavingsGoalService with a pinned current date."""
    return SavingsGoalService(store, id_factory=ids, today=lambda: FIXED_TODAY)


@pytest.fixture
def backup_service(store):
    """Create a BackupService over the store."""
    return BackupService(store)


@pytest.fixture
def make_transaction():
    """Return a factory building Transaction records with sensible defaults."""
    counter = count(1)

    def factory(
        amount="10",
        type=TransactionType.EXPENSE,
        category="Food",
        txn_date=FIXED_TODAY,
        account_id=DEFAULT_ACCOUNT_ID,
        **extra,
    ) -> Transaction:
        return Transaction(
            id=extra.pop("id", f"txn-{next(counter)}"),
            amount=Decimal(amount),
            category=category,
            description=extra.pop("description", ""),
            date=txn_date,
            type=TransactionType(type),
            account_id=account_id,
            **extra,
        )

    return factory


@pytest.fixture
def make_account():
    """Return a factory building Account records."""

    def factory(account_id: str, name: str = None, initial_balance="0", **extra) -> Account:
        return Account(
            id=account_id,
            name=name or account_id.title(),
            type=extra.pop("type", AccountType.CHECKING),
            currency=extra.pop("currency", "EUR"),
            initial_balance=Decimal(initial_balance),
            is_active=extra.pop("is_active", True),
            created_at=extra.pop("created_at", datetime(2024, 1, 1, tzinfo=UTC)),
            **extra,
        )

    return factory


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
