"""Derived aggregate computations.

Everything here is a pure function of its arguments and is recomputed on
demand; nothing computed here is ever persisted. Functions that depend on the
current day take an optional ``today`` so callers and tests can pin it.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from pocketbook.domain.entities import (
    Account,
    AppState,
    Budget,
    BudgetProgress,
    CategoryTotal,
    MonthComparison,
    PeriodGranularity,
    PeriodStats,
    SavingsGoal,
    Transaction,
    TransactionType,
    TrendPoint,
)
from pocketbook.domain.errors import ValidationError
from pocketbook.utils.date_parser import month_bounds

ZERO = Decimal("0")
HUNDRED = Decimal("100")

TREND_WINDOWS: dict[str, int] = {"1m": 30, "3m": 90, "6m": 180, "1y": 365}
TOP_CATEGORY_LIMIT = 5
COMPARISON_MONTHS = 6


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def account_balance(
    account: Account,
    transactions: Sequence[Transaction],
    include_transfers: bool = False,
) -> Decimal:
    """Calculate the current balance of an account.

    The base formula only counts income and expense transactions whose
    ``account_id`` matches. With ``include_transfers`` a transfer is also
    subtracted from its source account and added to its destination.
    """
    balance = account.initial_balance
    for txn in transactions:
        if txn.account_id == account.id:
            if txn.type == TransactionType.INCOME:
                balance += txn.amount
            elif txn.type == TransactionType.EXPENSE:
                balance -= txn.amount
            elif include_transfers:
                balance -= txn.amount
        elif include_transfers and txn.type == TransactionType.TRANSFER and txn.to_account_id == account.id:
            balance += txn.amount
    return balance


def account_balances(state: AppState, include_transfers: bool = False) -> dict[str, Decimal]:
    """Map every account ID to its current balance."""
    return {
        account.id: account_balance(account, state.transactions, include_transfers)
        for account in state.accounts
    }


def total_balance(state: AppState, include_transfers: bool = False) -> Decimal:
    """Sum the balances of all active accounts."""
    return _sum(
        account_balance(account, state.transactions, include_transfers)
        for account in state.accounts
        if account.is_active
    )


def stats_for(transactions: Iterable[Transaction]) -> PeriodStats:
    """Compute income, expense and net over the given transactions."""
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            expense += txn.amount
    return PeriodStats(income=income, expense=expense, net=income - expense)


def overall_stats(transactions: Sequence[Transaction]) -> PeriodStats:
    """Compute lifetime income, expense and net."""
    return stats_for(transactions)


def period_key(day: date, granularity: PeriodGranularity) -> str:
    """Return the period key (``YYYY-MM`` or ``YYYY``) for a date."""
    iso = day.isoformat()
    if PeriodGranularity(granularity) == PeriodGranularity.MONTHLY:
        return iso[:7]
    return iso[:4]


def available_periods(
    transactions: Sequence[Transaction],
    granularity: PeriodGranularity = PeriodGranularity.MONTHLY,
    today: Optional[date] = None,
) -> list[str]:
    """List distinct period keys, most recent first.

    The current period is always included so a period with no activity can
    still be selected.
    """
    today = today or date.today()
    keys = {period_key(today, granularity)}
    keys.update(period_key(txn.date, granularity) for txn in transactions)
    return sorted(keys, reverse=True)


def period_stats(transactions: Sequence[Transaction], key: str) -> PeriodStats:
    """Compute stats for transactions whose ISO date starts with ``key``."""
    return stats_for(txn for txn in transactions if txn.date.isoformat().startswith(key))


def top_expense_categories(
    transactions: Sequence[Transaction], limit: int = TOP_CATEGORY_LIMIT
) -> list[CategoryTotal]:
    """Rank categories by total expense, highest first."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        if txn.type == TransactionType.EXPENSE:
            totals[txn.category] += txn.amount
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=name, total=total) for name, total in ranked[:limit]]


def budget_spent(
    budget: Budget, transactions: Sequence[Transaction], today: Optional[date] = None
) -> Decimal:
    """Sum expenses in the budget's category for the current calendar month.

    The window is always the current month, whatever the budget's declared
    period is.
    """
    first, last = month_bounds(today or date.today())
    return _sum(
        txn.amount
        for txn in transactions
        if txn.type == TransactionType.EXPENSE
        and txn.category == budget.category
        and first <= txn.date <= last
    )


def budget_progress(
    budget: Budget, transactions: Sequence[Transaction], today: Optional[date] = None
) -> BudgetProgress:
    """Compute spending progress for a budget."""
    spent = budget_spent(budget, transactions, today)
    percent = min(spent / budget.limit * HUNDRED, HUNDRED) if budget.limit > 0 else HUNDRED
    return BudgetProgress(
        budget=budget,
        spent=spent,
        remaining=budget.limit - spent,
        percent=percent,
        over_limit=spent > budget.limit,
    )


def budgets_by_usage(state: AppState, today: Optional[date] = None) -> list[BudgetProgress]:
    """Return progress for every budget, most used first."""
    progress = [budget_progress(b, state.transactions, today) for b in state.budgets]
    return sorted(
        progress,
        key=lambda p: p.spent / p.budget.limit if p.budget.limit > 0 else ZERO,
        reverse=True,
    )


def goal_progress(goal: SavingsGoal) -> Decimal:
    """Return the goal progress percentage, capped at 100."""
    if goal.target_amount <= 0:
        return HUNDRED
    return min(goal.current_amount / goal.target_amount * HUNDRED, HUNDRED)


def goals_by_progress(goals: Sequence[SavingsGoal]) -> list[SavingsGoal]:
    """Sort goals by completion ratio, closest to done first."""
    return sorted(
        goals,
        key=lambda g: g.current_amount / g.target_amount if g.target_amount > 0 else ZERO,
        reverse=True,
    )


def trend_series(
    transactions: Sequence[Transaction], days: int, today: Optional[date] = None
) -> list[TrendPoint]:
    """Build a daily income/expense series with a running balance.

    One zero-filled bucket is produced for every day from ``today - days`` to
    ``today`` inclusive. Income transactions add to income; every other type
    adds to expense.

    Raises:
        ValidationError: If ``days`` is not one of the supported windows
    """
    if days not in TREND_WINDOWS.values():
        raise ValidationError(
            f"Unsupported trend window {days}; expected one of "
            f"{', '.join(str(d) for d in sorted(TREND_WINDOWS.values()))}"
        )

    today = today or date.today()
    start = today - timedelta(days=days)
    daily: dict[date, list[Decimal]] = {
        start + timedelta(days=offset): [ZERO, ZERO] for offset in range(days + 1)
    }

    for txn in transactions:
        if start <= txn.date <= today:
            bucket = daily[txn.date]
            if txn.type == TransactionType.INCOME:
                bucket[0] += txn.amount
            else:
                bucket[1] += txn.amount

    series = []
    running = ZERO
    for day in sorted(daily):
        income, expense = daily[day]
        running += income - expense
        series.append(TrendPoint(date=day, income=income, expense=expense, balance=running))
    return series


def _percent_change(current: Decimal, previous: Decimal) -> Decimal:
    if previous == 0:
        return ZERO
    return (current - previous) / previous * HUNDRED


def month_over_month(
    transactions: Sequence[Transaction], months: int = COMPARISON_MONTHS
) -> list[MonthComparison]:
    """Compare the most recent active months against each other.

    Only months with at least one transaction are considered. Each entry
    carries the percentage change against the entry before it; the first
    entry and any change from a zero value report 0.
    """
    totals: dict[str, list[Decimal]] = defaultdict(lambda: [ZERO, ZERO])
    for txn in transactions:
        bucket = totals[txn.date.isoformat()[:7]]
        if txn.type == TransactionType.INCOME:
            bucket[0] += txn.amount
        else:
            bucket[1] += txn.amount

    recent = sorted(totals)[-months:] if months > 0 else []
    result = []
    previous: Optional[list[Decimal]] = None
    for month in recent:
        income, expense = totals[month]
        result.append(
            MonthComparison(
                month=month,
                income=income,
                expense=expense,
                balance=income - expense,
                income_change=_percent_change(income, previous[0]) if previous else ZERO,
                expense_change=_percent_change(expense, previous[1]) if previous else ZERO,
            )
        )
        previous = totals[month]
    return result
