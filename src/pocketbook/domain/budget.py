"""Budget domain service."""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from pocketbook.domain import actions
from pocketbook.domain.entities import Budget, BudgetPeriod, BudgetProgress
from pocketbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    budget_not_found,
    category_not_found,
    duplicate_budget_category,
)
from pocketbook.domain.store import AppStore
from pocketbook.domain.summary import budget_progress, budgets_by_usage
from pocketbook.utils.ids import generate_id


class BudgetService:
    """Service for managing category budgets."""

    def __init__(self, store: AppStore, id_factory: Callable[[], str] = generate_id):
        self.store = store
        self.id_factory = id_factory

    def _validate(self, budget: Budget) -> None:
        state = self.store.state
        if budget.limit <= 0:
            raise ValidationError("Budget limit must be greater than zero")
        if budget.category not in state.categories:
            raise ValidationError(category_not_found(budget.category))
        for existing in state.budgets:
            if existing.category == budget.category and existing.id != budget.id:
                raise ConflictError(duplicate_budget_category(budget.category))

    def create_budget(
        self,
        category: str,
        limit: Decimal,
        period: BudgetPeriod = BudgetPeriod.MONTHLY,
    ) -> Budget:
        """Create a budget for a category.

        Raises:
            ValidationError: If the limit or category is invalid
            ConflictError: If the category already has a budget
        """
        budget = Budget(
            id=self.id_factory(),
            category=category,
            limit=limit,
            period=BudgetPeriod(period),
        )
        self._validate(budget)
        self.store.dispatch(actions.add_budget(budget))
        return budget

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        for budget in self.store.state.budgets:
            if budget.id == budget_id:
                return budget
        return None

    def require_budget(self, budget_id: str) -> Budget:
        budget = self.get_budget(budget_id)
        if budget is None:
            raise NotFoundError(budget_not_found(budget_id))
        return budget

    def find_budget(self, reference: str) -> Budget:
        """Resolve a budget by ID or by its category label."""
        budget = self.get_budget(reference)
        if budget is not None:
            return budget
        for budget in self.store.state.budgets:
            if budget.category == reference:
                return budget
        raise NotFoundError(budget_not_found(reference))

    def update_budget(self, budget: Budget) -> Budget:
        """Replace a budget with a full updated record."""
        self.require_budget(budget.id)
        self._validate(budget)
        self.store.dispatch(actions.update_budget(budget))
        return budget

    def delete_budget(self, budget_id: str) -> None:
        self.require_budget(budget_id)
        self.store.dispatch(actions.delete_budget(budget_id))

    def list_budgets(self) -> list[Budget]:
        return list(self.store.state.budgets)

    def budget_progress(self, budget_id: str, today: Optional[date] = None) -> BudgetProgress:
        """Get this month's spending progress for a budget."""
        budget = self.require_budget(budget_id)
        return budget_progress(budget, self.store.state.transactions, today)

    def progress_report(self, today: Optional[date] = None) -> list[BudgetProgress]:
        """Get progress for all budgets, most used first."""
        return budgets_by_usage(self.store.state, today)
