"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from pocketbook.cli.date_filters import resolve_cli_date_range
from pocketbook.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_period_cannot_be_combined_with_dates(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), start_date="2024-01-01", end_date=None, period="this-month")

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_period_resolves_to_range():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period="last-year") == get_date_range(
        "last-year"
    )


def test_explicit_dates():
    start, end = resolve_cli_date_range(_ctx(), start_date="2024-01-01", end_date="2024-01-31", period=None)
    assert (start, end) == (date(2024, 1, 1), date(2024, 1, 31))


def test_open_ended_range():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period=None) == (None, None)


def test_start_after_end_rejected(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), start_date="2024-02-01", end_date="2024-01-01", period=None)
    assert "must not be after" in capsys.readouterr().err


def test_invalid_date_rejected(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), start_date="someday", end_date=None, period=None)
    assert "Invalid start date" in capsys.readouterr().err
