"""Domain layer for pocketbook application."""

from pocketbook.domain.store import AppStore
from pocketbook.domain.transaction import TransactionService
from pocketbook.domain.account import AccountService
from pocketbook.domain.category import CategoryService
from pocketbook.domain.budget import BudgetService
from pocketbook.domain.savings import SavingsGoalService
from pocketbook.domain.backup import BackupService

__all__ = [
    "AppStore",
    "TransactionService",
    "AccountService",
    "CategoryService",
    "BudgetService",
    "SavingsGoalService",
    "BackupService",
]
