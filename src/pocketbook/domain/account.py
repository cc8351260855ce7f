"""Account domain service."""

from dataclasses import replace
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, Optional

from pocketbook.domain import actions
from pocketbook.domain.entities import Account, AccountType
from pocketbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    account_not_found,
)
from pocketbook.domain.store import AppStore
from pocketbook.domain.summary import account_balance
from pocketbook.utils.ids import generate_id

DELETED_ACCOUNT_LABEL = "Deleted account"
UNASSIGNED_ACCOUNT_LABEL = "Unassigned"


class AccountService:
    """Service for managing accounts."""

    def __init__(self, store: AppStore, id_factory: Callable[[], str] = generate_id):
        """Initialize account service.

        Args:
            store: Application state store
            id_factory: Callable producing new record ids
        """
        self.store = store
        self.id_factory = id_factory

    def create_account(
        self,
        name: str,
        type: AccountType = AccountType.CHECKING,
        initial_balance: Decimal = Decimal("0"),
        currency: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Account:
        """Create a new account.

        Args:
            name: Account name
            type: Account type
            initial_balance: Balance before any recorded transaction
            currency: Currency code (defaults to the global currency)
            color: Optional display color
            icon: Optional display icon

        Returns:
            The created Account

        Raises:
            ValidationError: If the name is empty
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")

        account = Account(
            id=self.id_factory(),
            name=name,
            type=AccountType(type),
            currency=currency or self.store.state.currency,
            initial_balance=initial_balance,
            is_active=True,
            created_at=datetime.now(UTC),
            color=color,
            icon=icon,
        )
        self.store.dispatch(actions.add_account(account))
        return account

    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID.

        Returns:
            Account or None if not found
        """
        for account in self.store.state.accounts:
            if account.id == account_id:
                return account
        return None

    def require_account(self, account_id: str) -> Account:
        """Get account by ID or raise NotFoundError."""
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def find_account(self, reference: str) -> Account:
        """Resolve an account by ID or exact name.

        Raises:
            NotFoundError: If nothing matches
        """
        account = self.get_account(reference)
        if account is not None:
            return account
        for account in self.store.state.accounts:
            if account.name == reference:
                return account
        raise NotFoundError(account_not_found(reference))

    def list_accounts(self, active_only: bool = False) -> list[Account]:
        """List accounts in creation order."""
        return [a for a in self.store.state.accounts if a.is_active or not active_only]

    def default_account(self) -> Optional[Account]:
        """Return the first active account, falling back to the first account."""
        accounts = self.store.state.accounts
        for account in accounts:
            if account.is_active:
                return account
        return accounts[0] if accounts else None

    def account_label(self, account_id: str) -> str:
        """Return the account name, or a fallback for orphaned references."""
        if not account_id:
            return UNASSIGNED_ACCOUNT_LABEL
        account = self.get_account(account_id)
        return account.name if account is not None else DELETED_ACCOUNT_LABEL

    def update_account(self, account: Account) -> Account:
        """Replace an account with a full updated record.

        Raises:
            NotFoundError: If no account has this ID
            ValidationError: If the name is empty
        """
        self.require_account(account.id)
        if not account.name.strip():
            raise ValidationError("Account name is required")
        self.store.dispatch(actions.update_account(account))
        return account

    def rename_account(self, account_id: str, name: str) -> Account:
        """Rename an account."""
        account = self.require_account(account_id)
        return self.update_account(replace(account, name=name.strip()))

    def deactivate_account(self, account_id: str) -> Account:
        """Soft-delete an account by clearing its active flag."""
        account = self.require_account(account_id)
        return self.update_account(replace(account, is_active=False))

    def delete_account(self, account_id: str) -> None:
        """Delete an account.

        Transactions referencing the account are kept and become orphaned.

        Raises:
            NotFoundError: If no account has this ID
            DependencyError: If it is the only remaining account
        """
        self.require_account(account_id)
        if len(self.store.state.accounts) == 1:
            raise DependencyError("Cannot delete the only account")
        self.store.dispatch(actions.delete_account(account_id))

    def get_balance(self, account_id: str, include_transfers: bool = False) -> Decimal:
        """Get the derived current balance of an account."""
        account = self.require_account(account_id)
        return account_balance(
            account, self.store.state.transactions, include_transfers=include_transfers
        )
