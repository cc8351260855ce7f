"""Savings goal domain service.

Goals are not plain CRUD: money put into a goal leaves the accounts. Creating
a goal with a starting amount, or raising a goal's current amount, records an
expense transaction for the increase in the "Savings Goal" category against
the default active account. The transaction and the goal change are
dispatched as one batch, so consumers observe a single state change.

Lowering a goal's current amount records nothing.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from pocketbook.domain import actions
from pocketbook.domain.entities import (
    DEFAULT_ACCOUNT_ID,
    GoalPriority,
    SAVINGS_GOAL_CATEGORY,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from pocketbook.domain.errors import NotFoundError, ValidationError, goal_not_found
from pocketbook.domain.store import AppStore
from pocketbook.domain.summary import goal_progress, goals_by_progress
from pocketbook.utils.ids import generate_id


class SavingsGoalService:
    """Service for managing savings goals and their contributions."""

    def __init__(
        self,
        store: AppStore,
        id_factory: Callable[[], str] = generate_id,
        today: Callable[[], date] = date.today,
    ):
        """Initialize savings goal service.

        Args:
            store: Application state store
            id_factory: Callable producing new record ids
            today: Callable returning the current date for contributions
        """
        self.store = store
        self.id_factory = id_factory
        self.today = today

    def _validate(self, goal: SavingsGoal) -> None:
        if not goal.name.strip():
            raise ValidationError("Goal name is required")
        if goal.target_amount <= 0:
            raise ValidationError("Goal target amount must be greater than zero")
        if goal.current_amount < 0:
            raise ValidationError("Goal current amount cannot be negative")

    def _contribution_account_id(self) -> str:
        accounts = self.store.state.accounts
        for account in accounts:
            if account.is_active:
                return account.id
        return accounts[0].id if accounts else DEFAULT_ACCOUNT_ID

    def _contribution(self, amount: Decimal, description: str) -> Transaction:
        return Transaction(
            id=self.id_factory(),
            amount=amount,
            category=SAVINGS_GOAL_CATEGORY,
            description=description,
            date=self.today(),
            type=TransactionType.EXPENSE,
            account_id=self._contribution_account_id(),
        )

    def create_goal(
        self,
        name: str,
        target_amount: Decimal,
        target_date: date,
        current_amount: Decimal = Decimal("0"),
        priority: GoalPriority = GoalPriority.MEDIUM,
        description: Optional[str] = None,
    ) -> SavingsGoal:
        """Create a savings goal.

        A nonzero starting amount is recorded as a contribution expense.

        Raises:
            ValidationError: If the goal is not valid
        """
        goal = SavingsGoal(
            id=self.id_factory(),
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            target_date=target_date,
            priority=GoalPriority(priority),
            description=description,
        )
        self._validate(goal)

        pending = []
        if goal.current_amount > 0:
            pending.append(
                actions.add_transaction(
                    self._contribution(goal.current_amount, f"Goal start: {goal.name}")
                )
            )
        pending.append(actions.add_savings_goal(goal))
        self.store.dispatch(actions.batch(*pending))
        return goal

    def get_goal(self, goal_id: str) -> Optional[SavingsGoal]:
        for goal in self.store.state.savings_goals:
            if goal.id == goal_id:
                return goal
        return None

    def require_goal(self, goal_id: str) -> SavingsGoal:
        goal = self.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def find_goal(self, reference: str) -> SavingsGoal:
        """Resolve a goal by ID or exact name."""
        goal = self.get_goal(reference)
        if goal is not None:
            return goal
        for goal in self.store.state.savings_goals:
            if goal.name == reference:
                return goal
        raise NotFoundError(goal_not_found(reference))

    def update_goal(self, goal: SavingsGoal) -> SavingsGoal:
        """Replace a goal, recording a contribution for any increase.

        Args:
            goal: Full replacement record

        Raises:
            NotFoundError: If no goal has this ID
            ValidationError: If the new record is not valid
        """
        original = self.require_goal(goal.id)
        self._validate(goal)

        pending = []
        delta = goal.current_amount - original.current_amount
        if delta > 0:
            pending.append(
                actions.add_transaction(
                    self._contribution(delta, f"Contribution to goal: {goal.name}")
                )
            )
        pending.append(actions.update_savings_goal(goal))
        self.store.dispatch(actions.batch(*pending))
        return goal

    def contribute(self, goal_id: str, amount: Decimal) -> SavingsGoal:
        """Add money to a goal's current amount."""
        if amount <= 0:
            raise ValidationError("Contribution must be greater than zero")
        goal = self.require_goal(goal_id)
        return self.update_goal(replace(goal, current_amount=goal.current_amount + amount))

    def delete_goal(self, goal_id: str) -> None:
        self.require_goal(goal_id)
        self.store.dispatch(actions.delete_savings_goal(goal_id))

    def list_goals(self) -> list[SavingsGoal]:
        """List goals, closest to completion first."""
        return goals_by_progress(self.store.state.savings_goals)

    def progress(self, goal_id: str) -> Decimal:
        """Get the completion percentage of a goal."""
        return goal_progress(self.require_goal(goal_id))
