"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class DocumentError(ValidationError):
    """A stored or imported state document could not be interpreted."""


class ImportFormatError(DocumentError):
    """An import file does not have the expected backup shape."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account '{account_id}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def goal_not_found(goal_id: str) -> str:
    """Return message for missing savings goal."""
    return f"Savings goal '{goal_id}' not found"


def budget_not_found(budget_id: str) -> str:
    """Return message for missing budget."""
    return f"Budget '{budget_id}' not found"


def category_not_found(label: str) -> str:
    """Return message for a category label that is not defined."""
    return f"Category '{label}' not found"


def duplicate_budget_category(category: str) -> str:
    """Return message when a category already has a budget."""
    return f"A budget for category '{category}' already exists"


def category_delete_blocked(
    label: str, transaction_count: int, budget_count: int
) -> str:
    """Return message when a category is still referenced."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if budget_count > 0:
        parts.append(f"{budget_count} budget{'s' if budget_count != 1 else ''}")
    return (
        f"Cannot delete category '{label}': it is used by {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
