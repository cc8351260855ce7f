"""Actions accepted by the reducer.

An action is an immutable (type, payload) pair. The helper constructors below
are the only place that knows which payload each action type carries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pocketbook.domain.entities import (
    Account,
    AppState,
    Budget,
    SavingsGoal,
    Theme,
    Transaction,
)


class ActionType(str, Enum):
    """Every mutation the reducer knows how to apply."""

    ADD_TRANSACTION = "ADD_TRANSACTION"
    UPDATE_TRANSACTION = "UPDATE_TRANSACTION"
    DELETE_TRANSACTION = "DELETE_TRANSACTION"
    ADD_ACCOUNT = "ADD_ACCOUNT"
    UPDATE_ACCOUNT = "UPDATE_ACCOUNT"
    DELETE_ACCOUNT = "DELETE_ACCOUNT"
    ADD_SAVINGS_GOAL = "ADD_SAVINGS_GOAL"
    UPDATE_SAVINGS_GOAL = "UPDATE_SAVINGS_GOAL"
    DELETE_SAVINGS_GOAL = "DELETE_SAVINGS_GOAL"
    ADD_BUDGET = "ADD_BUDGET"
    UPDATE_BUDGET = "UPDATE_BUDGET"
    DELETE_BUDGET = "DELETE_BUDGET"
    ADD_CATEGORY = "ADD_CATEGORY"
    DELETE_CATEGORY = "DELETE_CATEGORY"
    SET_THEME = "SET_THEME"
    SET_CURRENCY = "SET_CURRENCY"
    LOAD_DATA = "LOAD_DATA"
    BATCH = "BATCH"


@dataclass(frozen=True)
class Action:
    """A single reducer action."""

    type: Any
    payload: Any = None


def add_transaction(transaction: Transaction) -> Action:
    return Action(ActionType.ADD_TRANSACTION, transaction)


def update_transaction(transaction: Transaction) -> Action:
    return Action(ActionType.UPDATE_TRANSACTION, transaction)


def delete_transaction(transaction_id: str) -> Action:
    return Action(ActionType.DELETE_TRANSACTION, transaction_id)


def add_account(account: Account) -> Action:
    return Action(ActionType.ADD_ACCOUNT, account)


def update_account(account: Account) -> Action:
    return Action(ActionType.UPDATE_ACCOUNT, account)


def delete_account(account_id: str) -> Action:
    return Action(ActionType.DELETE_ACCOUNT, account_id)


def add_savings_goal(goal: SavingsGoal) -> Action:
    return Action(ActionType.ADD_SAVINGS_GOAL, goal)


def update_savings_goal(goal: SavingsGoal) -> Action:
    return Action(ActionType.UPDATE_SAVINGS_GOAL, goal)


def delete_savings_goal(goal_id: str) -> Action:
    return Action(ActionType.DELETE_SAVINGS_GOAL, goal_id)


def add_budget(budget: Budget) -> Action:
    return Action(ActionType.ADD_BUDGET, budget)


def update_budget(budget: Budget) -> Action:
    return Action(ActionType.UPDATE_BUDGET, budget)


def delete_budget(budget_id: str) -> Action:
    return Action(ActionType.DELETE_BUDGET, budget_id)


def add_category(label: str) -> Action:
    return Action(ActionType.ADD_CATEGORY, label)


def delete_category(label: str) -> Action:
    return Action(ActionType.DELETE_CATEGORY, label)


def set_theme(theme: Theme) -> Action:
    return Action(ActionType.SET_THEME, theme)


def set_currency(currency: str) -> Action:
    return Action(ActionType.SET_CURRENCY, currency)


def load_data(state: AppState) -> Action:
    """Replace the whole state with an already normalized document."""
    return Action(ActionType.LOAD_DATA, state)


def batch(*actions: Action) -> Action:
    """Group actions so they are applied as one state change."""
    return Action(ActionType.BATCH, tuple(actions))
