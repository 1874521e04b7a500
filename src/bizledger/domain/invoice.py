"""Invoice domain service."""

from __future__ import annotations

import time
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Sequence

from bizledger.domain.entities import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    TransactionDelta,
    new_entity_id,
)
from bizledger.domain.errors import NotFoundError, invoice_not_found
from bizledger.domain.reconciler import InvoiceReconciler
from bizledger.logging_config import get_logger

if TYPE_CHECKING:
    from bizledger.database.base import EntityStore

logger = get_logger(__name__)


def new_item(
    description: str,
    quantity: int,
    unit_price: Decimal,
    unit_cost: Decimal = Decimal("0"),
) -> InvoiceItem:
    """Create an invoice item with a fresh id."""
    return InvoiceItem(
        id=new_entity_id(),
        description=description,
        quantity=quantity,
        unit_price=unit_price,
        unit_cost=unit_cost,
    )


class InvoiceService:
    """Service for managing invoices and their ledger side effects."""

    def __init__(self, store: EntityStore, reconciler: Optional[InvoiceReconciler] = None):
        """Initialize invoice service.

        Args:
            store: Entity store instance
            reconciler: Invoice reconciler (default policy if not provided)
        """
        self.store = store
        self.reconciler = reconciler or InvoiceReconciler()
        self._last_stamp = 0

    def next_invoice_number(self, taken: Sequence[str] = ()) -> str:
        """Generate an invoice number from the current millisecond timestamp.

        The stamp never repeats within this service and is bumped past any
        number already in ``taken``.
        """
        stamp = max(int(time.time() * 1000), self._last_stamp + 1)
        number = f"INV-{str(stamp)[-6:]}"
        while number in taken:
            stamp += 1
            number = f"INV-{str(stamp)[-6:]}"
        self._last_stamp = stamp
        return number

    def item_from_inventory(self, name: str, quantity: int) -> InvoiceItem:
        """Create an invoice item priced from the inventory item with this name.

        Raises:
            NotFoundError: If no inventory item has exactly this name
        """
        for stock_item in self.store.load_ledger().inventory:
            if stock_item.name == name:
                return new_item(
                    description=name,
                    quantity=quantity,
                    unit_price=stock_item.selling_price,
                    unit_cost=stock_item.purchase_price,
                )
        raise NotFoundError(f"Inventory item '{name}' not found")

    def create_invoice(
        self,
        client_name: str,
        date: date,
        items: Sequence[InvoiceItem],
        status: InvoiceStatus = InvoiceStatus.PENDING,
        cashier_name: Optional[str] = None,
    ) -> tuple[Invoice, TransactionDelta]:
        """Create an invoice, booking its income if it is already paid.

        Returns:
            The stored invoice and the resulting transaction delta

        Raises:
            ValidationError: If the invoice or any item is malformed
        """
        ledger = self.store.load_ledger()
        invoice = Invoice(
            id=new_entity_id(),
            invoice_number=self.next_invoice_number(
                [inv.invoice_number for inv in ledger.invoices]
            ),
            client_name=client_name,
            date=date,
            items=tuple(items),
            status=status,
            cashier_name=cashier_name,
        )
        result = self.reconciler.on_invoice_created(ledger, invoice)
        self.store.save_ledger(result.ledger, previous=ledger)
        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            status=invoice.status.value,
        )
        return invoice, result.delta

    def update_invoice(
        self,
        invoice_id: str,
        client_name: str,
        date: date,
        items: Sequence[InvoiceItem],
        status: InvoiceStatus,
        cashier_name: Optional[str] = None,
    ) -> tuple[Invoice, TransactionDelta]:
        """Replace an invoice's fields and item list.

        The id and invoice number are kept.

        Raises:
            NotFoundError: If the invoice does not exist
            ValidationError: If the new version is malformed
        """
        ledger = self.store.load_ledger()
        current = ledger.find_invoice(invoice_id)
        if current is None:
            raise NotFoundError(invoice_not_found(invoice_id))

        invoice = Invoice(
            id=current.id,
            invoice_number=current.invoice_number,
            client_name=client_name,
            date=date,
            items=tuple(items),
            status=status,
            cashier_name=cashier_name,
        )
        result = self.reconciler.on_invoice_updated(ledger, invoice)
        self.store.save_ledger(result.ledger, previous=ledger)
        logger.info(
            "invoice_updated",
            invoice_id=invoice.id,
            status=invoice.status.value,
            delta_empty=result.delta.is_empty,
        )
        return invoice, result.delta

    def delete_invoice(self, invoice_id: str) -> TransactionDelta:
        """Delete an invoice and its auto-transaction.

        Deleting an unknown invoice is a no-op.
        """
        ledger = self.store.load_ledger()
        result = self.reconciler.on_invoice_deleted(ledger, invoice_id)
        written = self.store.save_ledger(result.ledger, previous=ledger)
        if written:
            logger.info("invoice_deleted", invoice_id=invoice_id)
        return result.delta

    def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        return self.store.load_ledger().find_invoice(invoice_id)

    def require_invoice(self, invoice_ref: str) -> Invoice:
        """Find an invoice by id or invoice number.

        Raises:
            NotFoundError: If neither matches
        """
        for inv in self.store.load_ledger().invoices:
            if inv.id == invoice_ref or inv.invoice_number == invoice_ref:
                return inv
        raise NotFoundError(invoice_not_found(invoice_ref))

    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        invoices = self.store.load_ledger().invoices
        return [inv for inv in invoices if status is None or inv.status == status]
