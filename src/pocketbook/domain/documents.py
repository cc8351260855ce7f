"""Mapper functions between domain entities and state documents.

A state document is the JSON-compatible dict form of AppState: camelCase
keys, ISO date strings and plain numbers. It is what gets persisted and what
backup files contain. This layer isolates the conversion so the entities can
stay independent of the stored layout.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pocketbook.domain import entities as domain
from pocketbook.domain.errors import DocumentError
from pocketbook.utils.date_parser import parse_iso_date, parse_iso_datetime


def _number(value: Decimal) -> int | float | str:
    """Render a Decimal as a JSON number.

    Values a float cannot hold exactly are written as decimal strings, which
    _decimal() reads back unchanged.
    """
    if value == value.to_integral_value():
        return int(value)
    approximate = float(value)
    if Decimal(str(approximate)) == value:
        return approximate
    return str(value)


def _decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise DocumentError(f"Field '{field_name}' must be a number")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise DocumentError(f"Field '{field_name}' must be a number, got {value!r}")
    if not result.is_finite():
        raise DocumentError(f"Field '{field_name}' must be a finite number")
    return result


def _require(document: dict, key: str) -> Any:
    if key not in document or document[key] is None:
        raise DocumentError(f"Missing required field '{key}'")
    return document[key]


def _string(document: dict, key: str) -> str:
    value = _require(document, key)
    if not isinstance(value, str):
        raise DocumentError(f"Field '{key}' must be a string")
    return value


def _optional_string(document: dict, key: str) -> Optional[str]:
    value = document.get(key)
    if value is not None and not isinstance(value, str):
        raise DocumentError(f"Field '{key}' must be a string")
    return value


def _enum(enum_cls: type, document: dict, key: str) -> Any:
    value = _require(document, key)
    try:
        return enum_cls(value)
    except ValueError:
        raise DocumentError(f"Field '{key}' has unknown value {value!r}")


def _date(document: dict, key: str):
    try:
        return parse_iso_date(_require(document, key))
    except ValueError as e:
        raise DocumentError(f"Field '{key}': {e}")


def _records(document: dict, key: str) -> list:
    value = document.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentError(f"Field '{key}' must be a list")
    for item in value:
        if not isinstance(item, dict):
            raise DocumentError(f"Every entry of '{key}' must be an object")
    return value


def _without_none(document: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in document.items() if value is not None}


def transaction_to_document(txn: domain.Transaction) -> dict[str, Any]:
    """Convert a Transaction entity to its document form."""
    return _without_none(
        {
            "id": txn.id,
            "amount": _number(txn.amount),
            "category": txn.category,
            "description": txn.description,
            "date": txn.date.isoformat(),
            "type": txn.type.value,
            "accountId": txn.account_id or None,
            "toAccountId": txn.to_account_id,
            "tags": list(txn.tags) if txn.tags is not None else None,
            "notes": txn.notes,
            "location": txn.location,
            "isRecurring": txn.is_recurring,
        }
    )


def transaction_from_document(document: dict) -> domain.Transaction:
    """Convert a transaction document to a Transaction entity."""
    tags = document.get("tags")
    if tags is not None:
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise DocumentError("Field 'tags' must be a list of strings")
        tags = tuple(tags)
    is_recurring = document.get("isRecurring")
    if is_recurring is not None and not isinstance(is_recurring, bool):
        raise DocumentError("Field 'isRecurring' must be a boolean")

    return domain.Transaction(
        id=_string(document, "id"),
        amount=_decimal(_require(document, "amount"), "amount"),
        category=document.get("category") or "",
        description=document.get("description") or "",
        date=_date(document, "date"),
        type=_enum(domain.TransactionType, document, "type"),
        account_id=_optional_string(document, "accountId") or "",
        to_account_id=_optional_string(document, "toAccountId"),
        tags=tags,
        notes=_optional_string(document, "notes"),
        location=_optional_string(document, "location"),
        is_recurring=is_recurring,
    )


def account_to_document(account: domain.Account) -> dict[str, Any]:
    """Convert an Account entity to its document form."""
    return _without_none(
        {
            "id": account.id,
            "name": account.name,
            "type": account.type.value,
            "currency": account.currency,
            "initialBalance": _number(account.initial_balance),
            "color": account.color,
            "icon": account.icon,
            "isActive": account.is_active,
            "createdAt": account.created_at.isoformat(),
        }
    )


def account_from_document(document: dict) -> domain.Account:
    """Convert an account document to an Account entity."""
    try:
        created_at = parse_iso_datetime(_require(document, "createdAt"))
    except ValueError as e:
        raise DocumentError(f"Field 'createdAt': {e}")
    is_active = document.get("isActive", True)
    if not isinstance(is_active, bool):
        raise DocumentError("Field 'isActive' must be a boolean")

    return domain.Account(
        id=_string(document, "id"),
        name=_string(document, "name"),
        type=_enum(domain.AccountType, document, "type"),
        currency=_string(document, "currency"),
        initial_balance=_decimal(document.get("initialBalance", 0), "initialBalance"),
        is_active=is_active,
        created_at=created_at,
        color=_optional_string(document, "color"),
        icon=_optional_string(document, "icon"),
    )


def savings_goal_to_document(goal: domain.SavingsGoal) -> dict[str, Any]:
    """Convert a SavingsGoal entity to its document form."""
    return _without_none(
        {
            "id": goal.id,
            "name": goal.name,
            "targetAmount": _number(goal.target_amount),
            "currentAmount": _number(goal.current_amount),
            "targetDate": goal.target_date.isoformat(),
            "priority": goal.priority.value,
            "description": goal.description,
        }
    )


def savings_goal_from_document(document: dict) -> domain.SavingsGoal:
    """Convert a savings goal document to a SavingsGoal entity."""
    return domain.SavingsGoal(
        id=_string(document, "id"),
        name=_string(document, "name"),
        target_amount=_decimal(_require(document, "targetAmount"), "targetAmount"),
        current_amount=_decimal(document.get("currentAmount", 0), "currentAmount"),
        target_date=_date(document, "targetDate"),
        priority=_enum(domain.GoalPriority, document, "priority"),
        description=_optional_string(document, "description"),
    )


def budget_to_document(budget: domain.Budget) -> dict[str, Any]:
    """Convert a Budget entity to its document form."""
    return {
        "id": budget.id,
        "category": budget.category,
        "limit": _number(budget.limit),
        "period": budget.period.value,
    }


def budget_from_document(document: dict) -> domain.Budget:
    """Convert a budget document to a Budget entity."""
    return domain.Budget(
        id=_string(document, "id"),
        category=_string(document, "category"),
        limit=_decimal(_require(document, "limit"), "limit"),
        period=_enum(domain.BudgetPeriod, document, "period"),
    )


def state_to_document(state: domain.AppState) -> dict[str, Any]:
    """Convert the whole AppState to a JSON-compatible document."""
    return {
        "transactions": [transaction_to_document(t) for t in state.transactions],
        "accounts": [account_to_document(a) for a in state.accounts],
        "savingsGoals": [savings_goal_to_document(g) for g in state.savings_goals],
        "budgets": [budget_to_document(b) for b in state.budgets],
        "categories": list(state.categories),
        "theme": state.theme.value,
        "currency": state.currency,
    }


def state_from_document(document: dict) -> domain.AppState:
    """Convert a complete document to an AppState without filling defaults.

    Raises:
        DocumentError: If any record is malformed
    """
    if not isinstance(document, dict):
        raise DocumentError("State document must be a JSON object")

    categories = document.get("categories", [])
    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise DocumentError("Field 'categories' must be a list of strings")

    return domain.AppState(
        transactions=tuple(
            transaction_from_document(t) for t in _records(document, "transactions")
        ),
        accounts=tuple(account_from_document(a) for a in _records(document, "accounts")),
        savings_goals=tuple(
            savings_goal_from_document(g) for g in _records(document, "savingsGoals")
        ),
        budgets=tuple(budget_from_document(b) for b in _records(document, "budgets")),
        categories=tuple(dict.fromkeys(categories)),
        theme=_enum(domain.Theme, document, "theme"),
        currency=_string(document, "currency"),
    )
