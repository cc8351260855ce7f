"""Normalization of external state documents.

Every entry point that accepts a document from outside the process (the
initial load from storage and user imports) goes through
normalize_document(), so older layouts are upgraded in exactly one place.

Documents written before multi-account support have no ``accounts`` list.
For those a single synthetic account is created whose initial balance is the
net of all income minus expense transactions, so the derived balance of that
account equals the global balance the document had before migration.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pocketbook.domain.documents import state_from_document
from pocketbook.domain.entities import (
    AppState,
    DEFAULT_CATEGORIES,
    DEFAULT_CURRENCY,
    Theme,
    TransactionType,
    default_account,
)
from pocketbook.domain.errors import DocumentError


def _with_defaults(raw: dict) -> dict:
    """Fill top-level keys that are absent (or null) from the defaults."""
    defaults: dict[str, Any] = {
        "transactions": [],
        "accounts": [],
        "savingsGoals": [],
        "budgets": [],
        "categories": list(DEFAULT_CATEGORIES),
        "theme": Theme.LIGHT.value,
        "currency": DEFAULT_CURRENCY,
    }
    document = dict(raw)
    for key, value in defaults.items():
        if document.get(key) is None:
            document[key] = value
    return document


def net_transaction_balance(state: AppState) -> Decimal:
    """Return total income minus total expense over all transactions."""
    net = Decimal("0")
    for txn in state.transactions:
        if txn.type == TransactionType.INCOME:
            net += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            net -= txn.amount
    return net


def ensure_accounts(state: AppState, now: Optional[datetime] = None) -> AppState:
    """Add the synthetic default account when a state has no accounts."""
    if state.accounts:
        return state
    account = default_account(
        currency=state.currency,
        initial_balance=net_transaction_balance(state),
        created_at=now,
    )
    return replace(state, accounts=(account,))


def normalize_document(raw: Any, now: Optional[datetime] = None) -> AppState:
    """Turn a raw document into a well-formed AppState.

    Applying this to a document that is already well-formed returns an
    equal state, so it is safe to call on every load.

    Args:
        raw: Decoded JSON document
        now: Creation timestamp for a synthetic account (defaults to now)

    Returns:
        Normalized AppState

    Raises:
        DocumentError: If the document or one of its records is malformed
    """
    if not isinstance(raw, dict):
        raise DocumentError("State document must be a JSON object")

    state = state_from_document(_with_defaults(raw))
    return ensure_accounts(state, now=now)
