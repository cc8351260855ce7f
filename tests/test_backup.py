"""Tests for backup export and import."""

import json
from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from pocketbook.domain.backup import backup_filename, export_json, parse_backup
from pocketbook.domain.entities import TransactionType
from pocketbook.domain.errors import ImportFormatError


def test_backup_filename():
    assert backup_filename(date(2024, 6, 15)) == "pocketbook-backup-2024-06-15.json"


def test_export_is_pretty_printed(store):
    text = export_json(store.state)

    assert text.startswith("{\n  ")
    document = json.loads(text)
    assert document["currency"] == "EUR"
    assert document["accounts"][0]["id"] == "default"


def test_export_then_import_restores_state(backup_service, transaction_service, store):
    transaction_service.create_transaction(
        account_id="default",
        date=date(2024, 1, 10),
        amount=Decimal("500"),
        type=TransactionType.INCOME,
        category="Salary",
    )
    exported = backup_service.export_data()
    original = store.state

    backup_service.import_data(json.dumps({"transactions": []}))
    assert store.state.transactions == ()

    assert backup_service.import_data(exported) is True
    assert store.state == original


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        "[]",
        "not json",
        json.dumps({"transactions": {"id": "x"}}),
        json.dumps({"transactions": [{"id": "x", "amount": "lots"}]}),
        "[" * 200000,
        '{"transactions": [], "currency": ' + "9" * 5000 + "}",
    ],
)
def test_invalid_backup_leaves_state_untouched(backup_service, store, text):
    before = store.state
    version = store.version

    with capture_logs() as logs:
        assert backup_service.import_data(text) is False

    assert store.state is before
    assert store.version == version
    assert [e["event"] for e in logs] == ["backup_import_rejected"]


def test_parse_backup_rejects_missing_transactions():
    with pytest.raises(ImportFormatError, match="transactions"):
        parse_backup(json.dumps({"accounts": []}))


def test_import_migrates_legacy_backup(backup_service, store):
    legacy = {
        "transactions": [
            {"id": "t1", "amount": 300, "category": "Salary", "description": "", "date": "2024-01-05", "type": "income"},
            {"id": "t2", "amount": 62.5, "category": "Food", "description": "", "date": "2024-01-06", "type": "expense"},
        ],
        "currency": "COP",
    }

    assert backup_service.import_data(json.dumps(legacy)) is True

    (account,) = store.state.accounts
    assert account.initial_balance == Decimal("237.50")
    assert account.currency == "COP"
