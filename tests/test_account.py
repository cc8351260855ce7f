"""Tests for the account service."""

from datetime import date
from decimal import Decimal

import pytest

from pocketbook.domain.entities import AccountType, TransactionType
from pocketbook.domain.errors import DependencyError, NotFoundError, ValidationError


def test_initial_state_has_main_account(account_service):
    accounts = account_service.list_accounts()

    assert [a.id for a in accounts] == ["default"]
    assert accounts[0].name == "Main Account"
    assert accounts[0].type == AccountType.CHECKING


def test_create_account_uses_global_currency(account_service, store):
    account = account_service.create_account("  Wallet ", type=AccountType.CASH, initial_balance=Decimal("20"))

    assert account.name == "Wallet"
    assert account.currency == store.state.currency
    assert account.is_active
    assert account_service.get_account(account.id) == account


def test_create_account_requires_name(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account("   ")


def test_find_account_by_id_or_name(account_service):
    wallet = account_service.create_account("Wallet")

    assert account_service.find_account(wallet.id) == wallet
    assert account_service.find_account("Wallet") == wallet
    with pytest.raises(NotFoundError, match="Account 'Purse' not found"):
        account_service.find_account("Purse")


def test_rename_and_deactivate(account_service):
    wallet = account_service.create_account("Wallet")

    account_service.rename_account(wallet.id, "Cash")
    account_service.deactivate_account(wallet.id)

    updated = account_service.get_account(wallet.id)
    assert updated.name == "Cash"
    assert not updated.is_active
    assert [a.id for a in account_service.list_accounts(active_only=True)] == ["default"]


def test_default_account_prefers_active(account_service):
    account_service.deactivate_account("default")
    wallet = account_service.create_account("Wallet")

    assert account_service.default_account() == wallet


def test_delete_keeps_orphaned_transactions(account_service, transaction_service, store):
    wallet = account_service.create_account("Wallet")
    txn = transaction_service.create_transaction(
        account_id=wallet.id,
        date=date(2024, 1, 1),
        amount=Decimal("5"),
        type=TransactionType.EXPENSE,
        category="Food",
    )

    account_service.delete_account(wallet.id)

    assert store.state.transactions == (txn,)
    assert account_service.account_label(wallet.id) == "Deleted account"
    assert account_service.account_label("") == "Unassigned"
    assert account_service.account_label("default") == "Main Account"


def test_cannot_delete_last_account(account_service):
    with pytest.raises(DependencyError):
        account_service.delete_account("default")


def test_balance_is_derived(account_service, transaction_service):
    wallet = account_service.create_account("Wallet", initial_balance=Decimal("100"))

    def add(amount, type, category, account_id=wallet.id, **kw):
        transaction_service.create_transaction(
            account_id=account_id,
            date=date(2024, 1, 1),
            amount=Decimal(amount),
            type=type,
            category=category,
            **kw,
        )

    add("40", TransactionType.INCOME, "Salary")
    add("15.50", TransactionType.EXPENSE, "Food")
    add("1000", TransactionType.EXPENSE, "Food", account_id="default")
    add("20", TransactionType.TRANSFER, "", to_account_id="default")

    assert account_service.get_balance(wallet.id) == Decimal("124.50")
    assert account_service.get_balance(wallet.id, include_transfers=True) == Decimal("104.50")
    assert account_service.get_balance("default", include_transfers=True) == Decimal("-980")
