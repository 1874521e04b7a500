"""Invoice reconciler.

Keeps the transaction collection consistent with invoice status: every paid
invoice owns exactly one income transaction with id ``auto-<invoice id>``.
All operations take a ``Ledger`` snapshot and return a ``Reconciliation``
holding the new snapshot and the transaction delta; nothing is persisted here.
"""

from dataclasses import dataclass
from decimal import Decimal

from bizledger.domain.entities import (
    SALES_CATEGORY,
    Invoice,
    InvoiceOrigin,
    Ledger,
    PaymentMode,
    Reconciliation,
    Transaction,
    TransactionDelta,
    TransactionType,
    auto_transaction_id,
)
from bizledger.domain.errors import ConflictError, NotFoundError, duplicate_id, invoice_not_found
from bizledger.domain.validation import validate_invoice
from bizledger.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReconcilePolicy:
    """Switches for the two behaviours left open by the invoice workflow.

    Attributes:
        refresh_paid_amount: Rebuild an existing auto-transaction when a paid
            invoice is updated. Off by default: the amount recorded when the
            invoice was first paid is kept even if its items change.
        retract_on_unpaid: Remove the auto-transaction when an invoice is
            updated to a status other than PAID. Off by default.
    """

    refresh_paid_amount: bool = False
    retract_on_unpaid: bool = False


def invoice_total(invoice: Invoice) -> Decimal:
    """Total revenue of an invoice (sum of quantity x unit price)."""
    total = Decimal("0")
    for item in invoice.items:
        total += item.revenue
    return total


def invoice_cost(invoice: Invoice) -> Decimal:
    """Total cost of an invoice (sum of quantity x unit cost)."""
    total = Decimal("0")
    for item in invoice.items:
        total += item.cost
    return total


def synthesize_transaction(invoice: Invoice) -> Transaction:
    """Build the auto-transaction for a paid invoice.

    Auto-transactions are always booked to cash.
    """
    return Transaction(
        id=auto_transaction_id(invoice.id),
        date=invoice.date,
        description=f"Invoice {invoice.invoice_number} - {invoice.client_name}",
        category=SALES_CATEGORY,
        amount=invoice_total(invoice),
        type=TransactionType.INCOME,
        payment_mode=PaymentMode.CASH,
        bank_id=None,
        cashier_name=invoice.cashier_name,
        origin=InvoiceOrigin(invoice.id),
    )


class InvoiceReconciler:
    """Applies invoice mutations and derives the matching ledger changes."""

    def __init__(self, policy: ReconcilePolicy | None = None):
        """Initialize reconciler.

        Args:
            policy: Reconciliation policy; defaults keep the recorded amount
                and never retract
        """
        self.policy = policy or ReconcilePolicy()

    def on_invoice_created(self, ledger: Ledger, invoice: Invoice) -> Reconciliation:
        """Append an invoice and book its auto-transaction if it is paid.

        Raises:
            ValidationError: If the invoice is malformed
            ConflictError: If an invoice with the same id or number exists
        """
        validate_invoice(invoice)
        for existing in ledger.invoices:
            if existing.id == invoice.id:
                raise ConflictError(duplicate_id("Invoice", invoice.id))
            if existing.invoice_number == invoice.invoice_number:
                raise ConflictError(
                    f"Invoice number '{invoice.invoice_number}' already exists"
                )

        ledger = ledger.with_invoices(ledger.invoices + (invoice,))
        if not invoice.is_paid:
            return Reconciliation(ledger=ledger, delta=TransactionDelta())

        added = synthesize_transaction(invoice)
        # Drop any orphaned auto-transaction left behind under this id
        kept, removed = _partition(ledger.transactions, added.id)
        logger.info(
            "auto_transaction_created",
            invoice_id=invoice.id,
            amount=str(added.amount),
        )
        return Reconciliation(
            ledger=ledger.with_transactions(kept + (added,)),
            delta=TransactionDelta(added=(added,), removed=removed),
        )

    def on_invoice_updated(self, ledger: Ledger, invoice: Invoice) -> Reconciliation:
        """Replace a stored invoice and bring its auto-transaction in line.

        With the default policy an existing auto-transaction is left exactly
        as it was, and an invoice moving away from PAID keeps it.

        Raises:
            ValidationError: If the invoice is malformed
            NotFoundError: If no invoice with this id exists
            ConflictError: If the new invoice number belongs to another invoice
        """
        validate_invoice(invoice)
        if ledger.find_invoice(invoice.id) is None:
            raise NotFoundError(invoice_not_found(invoice.id))
        for existing in ledger.invoices:
            if existing.id != invoice.id and existing.invoice_number == invoice.invoice_number:
                raise ConflictError(
                    f"Invoice number '{invoice.invoice_number}' already exists"
                )

        ledger = ledger.with_invoices(
            invoice if inv.id == invoice.id else inv for inv in ledger.invoices
        )
        auto_id = auto_transaction_id(invoice.id)
        current = ledger.find_transaction(auto_id)

        if invoice.is_paid:
            if current is None:
                added = synthesize_transaction(invoice)
                logger.info(
                    "auto_transaction_created",
                    invoice_id=invoice.id,
                    amount=str(added.amount),
                )
                return Reconciliation(
                    ledger=ledger.with_transactions(ledger.transactions + (added,)),
                    delta=TransactionDelta(added=(added,)),
                )
            if not self.policy.refresh_paid_amount:
                return Reconciliation(ledger=ledger, delta=TransactionDelta())

            refreshed = synthesize_transaction(invoice)
            if refreshed == current:
                return Reconciliation(ledger=ledger, delta=TransactionDelta())
            logger.info(
                "auto_transaction_refreshed",
                invoice_id=invoice.id,
                old_amount=str(current.amount),
                new_amount=str(refreshed.amount),
            )
            return Reconciliation(
                ledger=ledger.with_transactions(
                    refreshed if txn.id == auto_id else txn
                    for txn in ledger.transactions
                ),
                delta=TransactionDelta(added=(refreshed,), removed=(current,)),
            )

        if current is None or not self.policy.retract_on_unpaid:
            return Reconciliation(ledger=ledger, delta=TransactionDelta())

        kept, removed = _partition(ledger.transactions, auto_id)
        logger.info(
            "auto_transaction_retracted",
            invoice_id=invoice.id,
            status=invoice.status.value,
        )
        return Reconciliation(
            ledger=ledger.with_transactions(kept),
            delta=TransactionDelta(removed=removed),
        )

    def on_invoice_deleted(self, ledger: Ledger, invoice_id: str) -> Reconciliation:
        """Remove an invoice and its auto-transaction.

        Deleting an unknown invoice, or one without an auto-transaction, is
        a no-op rather than an error.
        """
        invoices = tuple(inv for inv in ledger.invoices if inv.id != invoice_id)
        kept, removed = _partition(ledger.transactions, auto_transaction_id(invoice_id))
        if removed:
            logger.info("auto_transaction_deleted", invoice_id=invoice_id)
        return Reconciliation(
            ledger=ledger.with_invoices(invoices).with_transactions(kept),
            delta=TransactionDelta(removed=removed),
        )


def _partition(
    transactions: tuple[Transaction, ...], transaction_id: str
) -> tuple[tuple[Transaction, ...], tuple[Transaction, ...]]:
    """Split transactions into those kept and those matching an id."""
    kept = tuple(txn for txn in transactions if txn.id != transaction_id)
    removed = tuple(txn for txn in transactions if txn.id == transaction_id)
    return kept, removed
