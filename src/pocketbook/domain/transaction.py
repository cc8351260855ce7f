"""Transaction domain service."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence

from pocketbook.domain import actions
from pocketbook.domain.entities import Transaction, TransactionType
from pocketbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    transaction_not_found,
)
from pocketbook.domain.store import AppStore
from pocketbook.utils.ids import generate_id


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, store: AppStore, id_factory: Callable[[], str] = generate_id):
        """Initialize transaction service.

        Args:
            store: Application state store
            id_factory: Callable producing new record ids
        """
        self.store = store
        self.id_factory = id_factory

    def create_transaction(
        self,
        account_id: str,
        date: date,
        amount: Decimal,
        type: TransactionType,
        category: str = "",
        description: str = "",
        to_account_id: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        notes: Optional[str] = None,
        location: Optional[str] = None,
        is_recurring: Optional[bool] = None,
    ) -> Transaction:
        """Create a transaction.

        Args:
            account_id: Owning account ID
            date: Transaction date
            amount: Positive amount
            type: income, expense or transfer
            category: Category label (not required for transfers)
            description: Free text description
            to_account_id: Destination account for transfers
            tags: Optional tags
            notes: Optional notes
            location: Optional location
            is_recurring: Optional recurring marker

        Returns:
            The created Transaction

        Raises:
            ValidationError: If the transaction is not valid
            NotFoundError: If a referenced account doesn't exist
        """
        transaction = Transaction(
            id=self.id_factory(),
            amount=amount,
            category=category,
            description=description,
            date=date,
            type=TransactionType(type),
            account_id=account_id,
            to_account_id=to_account_id,
            tags=tuple(tags) if tags is not None else None,
            notes=notes,
            location=location,
            is_recurring=is_recurring,
        )
        self.validate(transaction)
        self.store.dispatch(actions.add_transaction(transaction))
        return transaction

    def validate(self, transaction: Transaction, original: Optional[Transaction] = None) -> None:
        """Check a transaction against the current state.

        A transaction migrated without an account may keep an empty
        account_id when it is updated; new transactions always need one.

        Raises:
            ValidationError: If amount, category or transfer fields are invalid
            NotFoundError: If a referenced account doesn't exist
        """
        state = self.store.state
        if transaction.amount <= 0:
            raise ValidationError("Transaction amount must be greater than zero")

        account_ids = {account.id for account in state.accounts}
        keeps_unassigned = original is not None and not original.account_id
        if transaction.account_id not in account_ids and not (
            keeps_unassigned and not transaction.account_id
        ):
            raise NotFoundError(account_not_found(transaction.account_id))

        if transaction.type == TransactionType.TRANSFER:
            if not transaction.to_account_id:
                raise ValidationError("Transfers require a destination account")
            if transaction.to_account_id == transaction.account_id:
                raise ValidationError("Transfer destination must differ from the source account")
            if transaction.to_account_id not in account_ids:
                raise NotFoundError(account_not_found(transaction.to_account_id))
        else:
            if transaction.to_account_id is not None:
                raise ValidationError("Only transfers can have a destination account")
            if transaction.category not in state.categories:
                raise ValidationError(category_not_found(transaction.category))

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Returns:
            Transaction or None if not found
        """
        for txn in self.store.state.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def require_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(self, transaction: Transaction) -> Transaction:
        """Replace a transaction with a full updated record.

        Raises:
            NotFoundError: If no transaction has this ID
            ValidationError: If the new record is not valid
        """
        original = self.require_transaction(transaction.id)
        self.validate(transaction, original)
        self.store.dispatch(actions.update_transaction(transaction))
        return transaction

    def update_fields(self, transaction_id: str, **changes) -> Transaction:
        """Update selected fields of a transaction."""
        current = self.require_transaction(transaction_id)
        return self.update_transaction(replace(current, **changes))

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If no transaction has this ID
        """
        self.require_transaction(transaction_id)
        self.store.dispatch(actions.delete_transaction(transaction_id))

    def list_transactions(
        self,
        account_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            account_id: Only transactions owned by (or transferred to) this account
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            category: Optional category label
            type: Optional transaction type
        """
        result = []
        for txn in self.store.state.transactions:
            if account_id is not None and account_id not in (txn.account_id, txn.to_account_id):
                continue
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            if category is not None and txn.category != category:
                continue
            if type is not None and txn.type != type:
                continue
            result.append(txn)
        return sorted(result, key=lambda t: t.date, reverse=True)
