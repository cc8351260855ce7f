"""Pure state reducer.

reduce() is the only way a new AppState is derived from an old one. It never
raises: unknown action types and payloads of the wrong shape leave the state
untouched and return the very same object, so callers can detect a no-op with
an identity check.
"""

from dataclasses import replace
from typing import Any, Callable

from pocketbook.domain.actions import Action, ActionType
from pocketbook.domain.entities import (
    Account,
    AppState,
    Budget,
    SavingsGoal,
    Theme,
    Transaction,
)


# Action family -> (AppState field, record class)
_COLLECTIONS: dict[str, tuple[str, type]] = {
    "TRANSACTION": ("transactions", Transaction),
    "ACCOUNT": ("accounts", Account),
    "SAVINGS_GOAL": ("savings_goals", SavingsGoal),
    "BUDGET": ("budgets", Budget),
}


def _add_record(state: AppState, field_name: str, record_cls: type, payload: Any) -> AppState:
    if not isinstance(payload, record_cls):
        return state
    records = getattr(state, field_name)
    return replace(state, **{field_name: records + (payload,)})


def _update_record(state: AppState, field_name: str, record_cls: type, payload: Any) -> AppState:
    if not isinstance(payload, record_cls):
        return state
    records = getattr(state, field_name)
    if not any(record.id == payload.id for record in records):
        return state
    updated = tuple(payload if record.id == payload.id else record for record in records)
    return replace(state, **{field_name: updated})


def _delete_record(state: AppState, field_name: str, record_cls: type, payload: Any) -> AppState:
    records = getattr(state, field_name)
    remaining = tuple(record for record in records if record.id != payload)
    if len(remaining) == len(records):
        return state
    return replace(state, **{field_name: remaining})


_RECORD_HANDLERS: dict[str, Callable[[AppState, str, type, Any], AppState]] = {
    "ADD": _add_record,
    "UPDATE": _update_record,
    "DELETE": _delete_record,
}


def _add_category(state: AppState, label: Any) -> AppState:
    if not isinstance(label, str) or label in state.categories:
        return state
    return replace(state, categories=state.categories + (label,))


def _delete_category(state: AppState, label: Any) -> AppState:
    if label not in state.categories:
        return state
    return replace(state, categories=tuple(c for c in state.categories if c != label))


def _set_theme(state: AppState, theme: Any) -> AppState:
    try:
        theme = Theme(theme)
    except ValueError:
        return state
    if theme == state.theme:
        return state
    return replace(state, theme=theme)


def _set_currency(state: AppState, currency: Any) -> AppState:
    if not isinstance(currency, str) or currency == state.currency:
        return state
    return replace(state, currency=currency)


def _load_data(state: AppState, document: Any) -> AppState:
    if not isinstance(document, AppState):
        return state
    return document


def _batch(state: AppState, actions: Any) -> AppState:
    if not isinstance(actions, (tuple, list)):
        return state
    for action in actions:
        state = reduce(state, action)
    return state


_SCALAR_HANDLERS: dict[ActionType, Callable[[AppState, Any], AppState]] = {
    ActionType.ADD_CATEGORY: _add_category,
    ActionType.DELETE_CATEGORY: _delete_category,
    ActionType.SET_THEME: _set_theme,
    ActionType.SET_CURRENCY: _set_currency,
    ActionType.LOAD_DATA: _load_data,
    ActionType.BATCH: _batch,
}


def reduce(state: AppState, action: Action) -> AppState:
    """Apply an action to a state and return the resulting state.

    Args:
        state: Current state (never modified)
        action: Action to apply

    Returns:
        The new state, or ``state`` itself when the action is a no-op
    """
    try:
        action_type = ActionType(getattr(action, "type", None))
    except ValueError:
        return state

    payload = getattr(action, "payload", None)
    handler = _SCALAR_HANDLERS.get(action_type)
    if handler is not None:
        return handler(state, payload)

    verb, _, family = action_type.value.partition("_")
    field_name, record_cls = _COLLECTIONS[family]
    return _RECORD_HANDLERS[verb](state, field_name, record_cls, payload)
