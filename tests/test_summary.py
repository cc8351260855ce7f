"""Tests for derived aggregate computations."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from pocketbook.domain.entities import (
    AppState,
    Budget,
    BudgetPeriod,
    GoalPriority,
    PeriodGranularity,
    SavingsGoal,
    TransactionType,
)
from pocketbook.domain.errors import ValidationError
from pocketbook.domain.summary import (
    account_balance,
    account_balances,
    available_periods,
    budget_progress,
    budget_spent,
    budgets_by_usage,
    goal_progress,
    goals_by_progress,
    month_over_month,
    overall_stats,
    period_stats,
    top_expense_categories,
    total_balance,
    trend_series,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def january(make_transaction):
    return (
        make_transaction(amount="500", type=TransactionType.INCOME, category="Salary", txn_date=date(2024, 1, 10)),
        make_transaction(amount="120", category="Food", txn_date=date(2024, 1, 15)),
    )


def test_scenario_balance_and_period_stats(january, make_account):
    account = make_account("default", initial_balance="0")

    assert account_balance(account, january) == Decimal("380")

    stats = period_stats(january, "2024-01")
    assert stats.income == Decimal("500")
    assert stats.expense == Decimal("120")
    assert stats.net == Decimal("380")


def test_balance_only_counts_matching_account(make_transaction, make_account):
    account = make_account("wallet", initial_balance="50")
    transactions = [
        make_transaction(amount="20", account_id="wallet"),
        make_transaction(amount="30", type=TransactionType.INCOME, account_id="wallet"),
        make_transaction(amount="999", account_id="default"),
    ]

    assert account_balance(account, transactions) == Decimal("60")


def test_transfers_ignored_by_base_formula(make_transaction, make_account):
    source = make_account("default", initial_balance="100")
    target = make_account("savings")
    transfer = make_transaction(
        amount="40", type=TransactionType.TRANSFER, category="", to_account_id="savings"
    )

    assert account_balance(source, [transfer]) == Decimal("100")
    assert account_balance(target, [transfer]) == Decimal("0")
    assert account_balance(source, [transfer], include_transfers=True) == Decimal("60")
    assert account_balance(target, [transfer], include_transfers=True) == Decimal("40")


def test_total_balance_skips_inactive_accounts(make_transaction, make_account):
    state = AppState(
        accounts=(
            make_account("default", initial_balance="100"),
            make_account("old", initial_balance="1000", is_active=False),
        ),
        transactions=(make_transaction(amount="25"),),
    )

    assert total_balance(state) == Decimal("75")
    assert account_balances(state) == {"default": Decimal("75"), "old": Decimal("1000")}


def test_overall_stats_ignore_transfers(january, make_transaction):
    transactions = january + (
        make_transaction(amount="70", type=TransactionType.TRANSFER, category="", to_account_id="x"),
    )

    stats = overall_stats(transactions)

    assert (stats.income, stats.expense, stats.net) == (Decimal("500"), Decimal("120"), Decimal("380"))


def test_available_periods_with_no_transactions():
    assert available_periods([], today=TODAY) == ["2024-06"]


def test_available_periods_descending_and_distinct(january, make_transaction):
    transactions = january + (make_transaction(txn_date=date(2023, 11, 2)),)

    assert available_periods(transactions, today=TODAY) == ["2024-06", "2024-01", "2023-11"]
    assert available_periods(transactions, PeriodGranularity.YEARLY, today=TODAY) == ["2024", "2023"]


def test_period_stats_for_year(january):
    stats = period_stats(january, "2024")
    assert stats.net == Decimal("380")
    assert period_stats(january, "2023").income == Decimal("0")


def test_top_expense_categories(make_transaction):
    transactions = [
        make_transaction(amount="10", category="Food"),
        make_transaction(amount="15", category="Food"),
        make_transaction(amount="40", category="Housing"),
        make_transaction(amount="5", category="Leisure"),
        make_transaction(amount="500", type=TransactionType.INCOME, category="Salary"),
    ]

    ranking = top_expense_categories(transactions, limit=2)

    assert [(c.category, c.total) for c in ranking] == [
        ("Housing", Decimal("40")),
        ("Food", Decimal("25")),
    ]


def test_budget_spent_uses_current_month_only(make_transaction):
    budget = Budget(id="b", category="Food", limit=Decimal("100"), period=BudgetPeriod.MONTHLY)
    transactions = [
        make_transaction(amount="30", txn_date=date(2024, 6, 1)),
        make_transaction(amount="20", txn_date=date(2024, 6, 30)),
        make_transaction(amount="99", txn_date=date(2024, 5, 31)),
        make_transaction(amount="15", category="Transport", txn_date=date(2024, 6, 3)),
        make_transaction(amount="50", type=TransactionType.INCOME, txn_date=date(2024, 6, 4)),
    ]

    assert budget_spent(budget, transactions, today=TODAY) == Decimal("50")


def test_weekly_budget_still_counts_whole_month(make_transaction):
    budget = Budget(id="b", category="Food", limit=Decimal("10"), period=BudgetPeriod.WEEKLY)
    transactions = [make_transaction(amount="8", txn_date=date(2024, 6, 1))]

    assert budget_spent(budget, transactions, today=TODAY) == Decimal("8")


def test_budget_progress_caps_percent(make_transaction):
    budget = Budget(id="b", category="Food", limit=Decimal("40"), period=BudgetPeriod.MONTHLY)

    progress = budget_progress(budget, [make_transaction(amount="50")], today=TODAY)

    assert progress.spent == Decimal("50")
    assert progress.remaining == Decimal("-10")
    assert progress.percent == Decimal("100")
    assert progress.over_limit is True


def test_budgets_by_usage_sorted(make_transaction):
    food = Budget(id="f", category="Food", limit=Decimal("100"), period=BudgetPeriod.MONTHLY)
    leisure = Budget(id="l", category="Leisure", limit=Decimal("10"), period=BudgetPeriod.MONTHLY)
    state = AppState(
        budgets=(food, leisure),
        transactions=(
            make_transaction(amount="20", category="Food"),
            make_transaction(amount="5", category="Leisure"),
        ),
    )

    assert [p.budget.id for p in budgets_by_usage(state, today=TODAY)] == ["l", "f"]


def _goal(goal_id, current, target):
    return SavingsGoal(
        id=goal_id,
        name=goal_id,
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        target_date=date(2025, 1, 1),
        priority=GoalPriority.MEDIUM,
    )


def test_goal_progress_capped():
    assert goal_progress(_goal("a", "50", "200")) == Decimal("25")
    assert goal_progress(_goal("b", "300", "200")) == Decimal("100")


def test_goals_by_progress():
    goals = [_goal("a", "10", "100"), _goal("b", "90", "100"), _goal("c", "50", "100")]
    assert [g.id for g in goals_by_progress(goals)] == ["b", "c", "a"]


def test_trend_series_buckets_and_running_balance(make_transaction):
    transactions = [
        make_transaction(amount="100", type=TransactionType.INCOME, category="Salary", txn_date=TODAY - timedelta(days=2)),
        make_transaction(amount="30", txn_date=TODAY - timedelta(days=1)),
        make_transaction(amount="20", type=TransactionType.TRANSFER, category="", txn_date=TODAY),
        make_transaction(amount="999", txn_date=TODAY - timedelta(days=31)),
    ]

    series = trend_series(transactions, 30, today=TODAY)

    assert len(series) == 31
    assert series[0].date == TODAY - timedelta(days=30)
    assert series[-1].date == TODAY
    assert series[-3].income == Decimal("100")
    assert series[-2].expense == Decimal("30")
    assert series[-1].expense == Decimal("20")
    assert [p.balance for p in series[-3:]] == [Decimal("100"), Decimal("70"), Decimal("50")]
    assert all(p.income == 0 and p.expense == 0 for p in series[:-3])


def test_trend_series_rejects_unknown_window():
    with pytest.raises(ValidationError):
        trend_series([], 45, today=TODAY)


def test_month_over_month_changes(make_transaction):
    transactions = [
        make_transaction(amount="1000", type=TransactionType.INCOME, category="Salary", txn_date=date(2024, 1, 5)),
        make_transaction(amount="200", txn_date=date(2024, 1, 6)),
        make_transaction(amount="1500", type=TransactionType.INCOME, category="Salary", txn_date=date(2024, 3, 5)),
        make_transaction(amount="100", txn_date=date(2024, 3, 6)),
    ]

    rows = month_over_month(transactions)

    assert [r.month for r in rows] == ["2024-01", "2024-03"]
    assert rows[0].income_change == Decimal("0")
    assert rows[1].income_change == Decimal("50")
    assert rows[1].expense_change == Decimal("-50")
    assert rows[1].balance == Decimal("1400")


def test_month_over_month_zero_previous_value(make_transaction):
    transactions = [
        make_transaction(amount="50", txn_date=date(2024, 1, 5)),
        make_transaction(amount="500", type=TransactionType.INCOME, category="Salary", txn_date=date(2024, 2, 5)),
    ]

    rows = month_over_month(transactions)

    assert rows[1].income_change == Decimal("0")
    assert rows[1].expense_change == Decimal("-100")


def test_month_over_month_keeps_most_recent_months(make_transaction):
    transactions = [make_transaction(txn_date=date(2023, month, 1)) for month in range(1, 13)]

    rows = month_over_month(transactions, months=6)

    assert [r.month for r in rows] == [f"2023-{m:02d}" for m in range(7, 13)]
