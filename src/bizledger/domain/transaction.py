"""Transaction domain service."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from bizledger.domain.entities import (
    ManualOrigin,
    PaymentMode,
    Transaction,
    TransactionType,
    new_entity_id,
)
from bizledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    derived_transaction_locked,
    duplicate_id,
    transaction_not_found,
)
from bizledger.domain.validation import validate_transaction
from bizledger.logging_config import get_logger

if TYPE_CHECKING:
    from bizledger.database.base import EntityStore

logger = get_logger(__name__)


class TransactionService:
    """Service for managing manually entered transactions."""

    def __init__(self, store: EntityStore):
        """Initialize transaction service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def create_transaction(
        self,
        date: date,
        description: str,
        category: str,
        amount: Decimal,
        type: TransactionType,
        payment_mode: PaymentMode = PaymentMode.CASH,
        bank_id: Optional[str] = None,
        cashier_name: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> Transaction:
        """Record a manual transaction.

        Args:
            date: Transaction date
            description: Free-text description
            category: Category name
            amount: Positive amount
            type: Income or expense
            payment_mode: Cash or bank
            bank_id: Bank id, required for bank payments
            cashier_name: Optional user who recorded the transaction
            transaction_id: Optional id (generated if not provided)

        Returns:
            The recorded transaction

        Raises:
            ValidationError: If the transaction is malformed or refers to a
                missing bank
            ConflictError: If the id is already taken
        """
        ledger = self.store.load_ledger()
        txn = Transaction(
            id=transaction_id or new_entity_id(),
            date=date,
            description=description,
            category=category,
            amount=amount,
            type=type,
            payment_mode=payment_mode,
            bank_id=bank_id,
            cashier_name=cashier_name,
            origin=ManualOrigin(),
        )
        validate_transaction(txn, ledger.banks)
        if ledger.find_transaction(txn.id) is not None:
            raise ConflictError(duplicate_id("Transaction", txn.id))

        updated = ledger.with_transactions(ledger.transactions + (txn,))
        self.store.save_ledger(updated, previous=ledger)
        logger.info("transaction_created", transaction_id=txn.id, amount=str(txn.amount))
        return txn

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.store.load_ledger().find_transaction(transaction_id)

    def update_transaction(self, transaction: Transaction) -> Transaction:
        """Replace a manual transaction with a new version.

        Updates are full replacements: every field of ``transaction`` is
        stored, and its position in the collection is kept.

        Raises:
            NotFoundError: If no transaction has this id
            ValidationError: If the new version is malformed, or the
                transaction was generated from an invoice
        """
        ledger = self.store.load_ledger()
        current = ledger.find_transaction(transaction.id)
        if current is None:
            raise NotFoundError(transaction_not_found(transaction.id))
        if current.is_derived or transaction.is_derived:
            raise ValidationError(derived_transaction_locked(transaction.id))
        validate_transaction(transaction, ledger.banks)

        updated = ledger.with_transactions(
            transaction if txn.id == transaction.id else txn
            for txn in ledger.transactions
        )
        self.store.save_ledger(updated, previous=ledger)
        logger.info("transaction_updated", transaction_id=transaction.id)
        return transaction

    def replace_fields(self, transaction_id: str, **changes) -> Transaction:
        """Build and store a full replacement from the current version.

        Raises:
            NotFoundError: If no transaction has this id
        """
        current = self.get_transaction(transaction_id)
        if current is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return self.update_transaction(replace(current, **changes))

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a manual transaction.

        Deleting an id that does not exist is a no-op.

        Returns:
            True if a transaction was removed

        Raises:
            ValidationError: If the transaction was generated from an invoice
        """
        ledger = self.store.load_ledger()
        current = ledger.find_transaction(transaction_id)
        if current is None:
            return False
        if current.is_derived:
            raise ValidationError(derived_transaction_locked(transaction_id))

        updated = ledger.with_transactions(
            txn for txn in ledger.transactions if txn.id != transaction_id
        )
        self.store.save_ledger(updated, previous=ledger)
        logger.info("transaction_deleted", transaction_id=transaction_id)
        return True

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions in collection order, optionally within a date range.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)

        Returns:
            List of transaction entities
        """
        transactions = self.store.load_ledger().transactions
        return [
            txn
            for txn in transactions
            if (start_date is None or txn.date >= start_date)
            and (end_date is None or txn.date <= end_date)
        ]
