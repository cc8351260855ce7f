"""Domain model entities for pocketbook.

These are pure data classes representing business concepts, independent of
the persisted document layout. Every collection on AppState is a tuple so a
state value can be shared freely and never changes once built.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, UTC
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class AccountType(str, Enum):
    """Kind of money container an account represents."""

    CASH = "cash"
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"
    INVESTMENT = "investment"
    OTHER = "other"


class GoalPriority(str, Enum):
    """Savings goal priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class BudgetPeriod(str, Enum):
    """Declared budget period."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Theme(str, Enum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"


class PeriodGranularity(str, Enum):
    """Granularity used when bucketing transactions into periods."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    amount: Decimal
    category: str
    description: str
    date: date
    type: TransactionType
    account_id: str
    to_account_id: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    is_recurring: Optional[bool] = None


@dataclass(frozen=True)
class Account:
    """Account domain entity.

    The current balance is never stored; see summary.account_balance.
    """

    id: str
    name: str
    type: AccountType
    currency: str
    initial_balance: Decimal
    is_active: bool
    created_at: datetime
    color: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class SavingsGoal:
    """Savings goal domain entity."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: date
    priority: GoalPriority
    description: Optional[str] = None


@dataclass(frozen=True)
class Budget:
    """Spending limit for a single category."""

    id: str
    category: str
    limit: Decimal
    period: BudgetPeriod


@dataclass(frozen=True)
class AppState:
    """Root document holding every persisted record."""

    transactions: tuple[Transaction, ...] = ()
    accounts: tuple[Account, ...] = ()
    savings_goals: tuple[SavingsGoal, ...] = ()
    budgets: tuple[Budget, ...] = ()
    categories: tuple[str, ...] = ()
    theme: Theme = Theme.LIGHT
    currency: str = "EUR"


@dataclass(frozen=True)
class PeriodStats:
    """Income, expense and net totals for a set of transactions."""

    income: Decimal
    expense: Decimal
    net: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Summed expense amount for one category."""

    category: str
    total: Decimal


@dataclass(frozen=True)
class BudgetProgress:
    """Spending of a budget within the current month."""

    budget: Budget
    spent: Decimal
    remaining: Decimal
    percent: Decimal
    over_limit: bool


@dataclass(frozen=True)
class TrendPoint:
    """One day of the trend series."""

    date: date
    income: Decimal
    expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class MonthComparison:
    """Month totals with percentage change against the previous month."""

    month: str
    income: Decimal
    expense: Decimal
    balance: Decimal
    income_change: Decimal
    expense_change: Decimal


SAVINGS_GOAL_CATEGORY = "Savings Goal"
DEFAULT_ACCOUNT_ID = "default"
DEFAULT_CURRENCY = "EUR"

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transport",
    "Housing",
    "Leisure",
    "Health",
    "Education",
    "Salary",
    SAVINGS_GOAL_CATEGORY,
    "Other",
)


def default_account(
    currency: str = DEFAULT_CURRENCY,
    initial_balance: Decimal = Decimal("0"),
    created_at: Optional[datetime] = None,
) -> Account:
    """Build the main account every fresh state starts with."""
    return Account(
        id=DEFAULT_ACCOUNT_ID,
        name="Main Account",
        type=AccountType.CHECKING,
        currency=currency,
        initial_balance=initial_balance,
        is_active=True,
        created_at=created_at or datetime.now(UTC),
        color="#6366f1",
    )


def initial_state() -> AppState:
    """Return the state used when nothing has been persisted yet."""
    return AppState(
        accounts=(default_account(),),
        categories=DEFAULT_CATEGORIES,
    )
