"""Tests for date parsing utilities."""

from datetime import date, datetime, UTC

import pytest

from pocketbook.utils.date_parser import (
    get_date_range,
    month_bounds,
    parse_date,
    parse_iso_date,
    parse_iso_datetime,
)

# A Saturday
TODAY = date(2024, 6, 15)


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", date(2024, 6, 15)),
        ("Yesterday", date(2024, 6, 14)),
        ("tomorrow", date(2024, 6, 16)),
        ("this week", date(2024, 6, 10)),
        ("last week", date(2024, 6, 3)),
        ("next week", date(2024, 6, 17)),
        ("this month", date(2024, 6, 1)),
        ("last month", date(2024, 5, 1)),
        ("next month", date(2024, 7, 1)),
        ("this year", date(2024, 1, 1)),
        ("last year", date(2023, 1, 1)),
        ("next year", date(2025, 1, 1)),
        ("last friday", date(2024, 6, 14)),
        ("last saturday", date(2024, 6, 8)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_last_month_in_january():
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("last invalid")


@pytest.mark.parametrize(
    "period, expected",
    [
        ("this-week", (date(2024, 6, 10), date(2024, 6, 15))),
        ("this-month", (date(2024, 6, 1), date(2024, 6, 15))),
        ("this-year", (date(2024, 1, 1), date(2024, 6, 15))),
        ("last-week", (date(2024, 6, 3), date(2024, 6, 9))),
        ("last-month", (date(2024, 5, 1), date(2024, 5, 31))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_across_year_boundary():
    assert get_date_range("last-month", today=date(2024, 1, 5)) == (date(2023, 12, 1), date(2023, 12, 31))


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")


def test_parse_iso_date_accepts_timestamps():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_iso_date("2024-02-29T23:10:00.000Z") == date(2024, 2, 29)
    assert parse_iso_date(date(2024, 1, 1)) == date(2024, 1, 1)


@pytest.mark.parametrize("value", ["yesterday", "2024-13-01", 20240101, None])
def test_parse_iso_date_rejects_non_iso(value):
    with pytest.raises(ValueError):
        parse_iso_date(value)


def test_parse_iso_datetime_keeps_timezone():
    parsed = parse_iso_datetime("2024-03-01T12:00:00+00:00")
    assert parsed == datetime(2024, 3, 1, 12, tzinfo=UTC)


def test_month_bounds():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))
