"""Tests for domain entities."""

import dataclasses
from datetime import datetime, UTC
from decimal import Decimal

import pytest

from pocketbook.domain.entities import (
    DEFAULT_CATEGORIES,
    SAVINGS_GOAL_CATEGORY,
    AccountType,
    AppState,
    Theme,
    default_account,
    initial_state,
)


class TestInitialState:
    """Tests for the state a fresh installation starts with."""

    def test_one_main_account(self):
        state = initial_state()

        (account,) = state.accounts
        assert account.id == "default"
        assert account.name == "Main Account"
        assert account.type == AccountType.CHECKING
        assert account.initial_balance == Decimal("0")
        assert account.is_active

    def test_defaults(self):
        state = initial_state()

        assert state.categories == DEFAULT_CATEGORIES
        assert SAVINGS_GOAL_CATEGORY in state.categories
        assert state.theme == Theme.LIGHT
        assert state.currency == "EUR"
        assert state.transactions == state.savings_goals == state.budgets == ()


class TestEntities:
    """Tests for entity value semantics."""

    def test_state_is_immutable(self):
        state = AppState()
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.currency = "USD"

    def test_default_account_arguments(self):
        created = datetime(2024, 1, 1, tzinfo=UTC)

        account = default_account(currency="COP", initial_balance=Decimal("10"), created_at=created)

        assert account.currency == "COP"
        assert account.initial_balance == Decimal("10")
        assert account.created_at == created

    def test_equal_values_compare_equal(self):
        created = datetime(2024, 1, 1, tzinfo=UTC)
        assert default_account(created_at=created) == default_account(created_at=created)
