"""Category domain service."""

from pocketbook.domain import actions
from pocketbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
)
from pocketbook.domain.store import AppStore


class CategoryService:
    """Service for managing the flat category list."""

    def __init__(self, store: AppStore):
        """Initialize category service.

        Args:
            store: Application state store
        """
        self.store = store

    def list_categories(self) -> list[str]:
        """List category labels in insertion order."""
        return list(self.store.state.categories)

    def add_category(self, label: str) -> str:
        """Add a category label.

        Adding a label that already exists is a no-op.

        Returns:
            The stored (stripped) label

        Raises:
            ValidationError: If the label is empty
        """
        label = label.strip()
        if not label:
            raise ValidationError("Category name is required")
        self.store.dispatch(actions.add_category(label))
        return label

    def category_usage(self, label: str) -> tuple[int, int]:
        """Count transactions and budgets referencing a category.

        Returns:
            Tuple of (transaction_count, budget_count)
        """
        state = self.store.state
        transaction_count = sum(1 for t in state.transactions if t.category == label)
        budget_count = sum(1 for b in state.budgets if b.category == label)
        return transaction_count, budget_count

    def delete_category(self, label: str) -> None:
        """Delete a category that nothing references.

        Raises:
            NotFoundError: If the category doesn't exist
            DependencyError: If transactions or budgets still use it
        """
        if label not in self.store.state.categories:
            raise NotFoundError(category_not_found(label))

        transaction_count, budget_count = self.category_usage(label)
        if transaction_count > 0 or budget_count > 0:
            raise DependencyError(category_delete_blocked(label, transaction_count, budget_count))

        self.store.dispatch(actions.delete_category(label))
