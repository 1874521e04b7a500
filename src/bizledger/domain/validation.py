"""Validation of entities before they enter a ledger snapshot.

Every check raises ``ValidationError`` and none of them touch shared state, so
callers can validate first and mutate afterwards.
"""

from decimal import Decimal
from typing import Iterable

from bizledger.domain.entities import (
    AUTO_PREFIX,
    Bank,
    InventoryItem,
    Invoice,
    InvoiceItem,
    InvoiceOrigin,
    InvoiceStatus,
    PaymentMode,
    Staff,
    Transaction,
    TransactionType,
    auto_transaction_id,
)
from bizledger.domain.errors import ValidationError, bank_not_found, reserved_transaction_id

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("1000000000000")


def _require_text(value, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")


def _require_decimal(value, field_name: str) -> None:
    if not isinstance(value, Decimal) or not value.is_finite():
        raise ValidationError(f"{field_name} must be a finite decimal amount")
    # Stored as NUMERIC(14, 2)
    if abs(value) >= MAX_AMOUNT:
        raise ValidationError(f"{field_name} must be less than {MAX_AMOUNT:,}")
    if value != value.quantize(CENT):
        raise ValidationError(f"{field_name} must have at most two decimal places")


def _require_non_negative(value, field_name: str) -> None:
    _require_decimal(value, field_name)
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative")


def validate_transaction(txn: Transaction, banks: Iterable[Bank]) -> None:
    """Validate a transaction against the current bank reference data.

    Raises:
        ValidationError: If any field is malformed, the bank reference is
            missing or dangling, or a manual transaction uses the reserved
            invoice-derived id prefix
    """
    _require_text(txn.id, "Transaction id")
    if not isinstance(txn.type, TransactionType):
        raise ValidationError(f"Unknown transaction type: {txn.type!r}")
    if not isinstance(txn.payment_mode, PaymentMode):
        raise ValidationError(f"Unknown payment mode: {txn.payment_mode!r}")
    _require_decimal(txn.amount, "Amount")
    if txn.amount <= 0:
        raise ValidationError("Amount must be greater than zero")

    if isinstance(txn.origin, InvoiceOrigin):
        expected = auto_transaction_id(txn.origin.invoice_id)
        if txn.id != expected:
            raise ValidationError(
                f"Invoice-derived transaction must have id '{expected}', got '{txn.id}'"
            )
    elif txn.id.startswith(AUTO_PREFIX):
        raise ValidationError(reserved_transaction_id(txn.id))

    if txn.payment_mode == PaymentMode.BANK:
        if not txn.bank_id:
            raise ValidationError("Bank payments require a bank")
        if not any(bank.id == txn.bank_id for bank in banks):
            raise ValidationError(bank_not_found(txn.bank_id))
    elif txn.bank_id is not None:
        raise ValidationError("Cash payments cannot reference a bank")


def validate_invoice_item(item: InvoiceItem) -> None:
    """Validate a single invoice line item."""
    _require_text(item.id, "Item id")
    if not isinstance(item.description, str):
        raise ValidationError("Item description must be text")
    # bool is an int subclass but never a quantity
    if isinstance(item.quantity, bool) or not isinstance(item.quantity, int):
        raise ValidationError(f"Quantity must be a whole number, got {item.quantity!r}")
    if item.quantity < 0:
        raise ValidationError("Quantity must not be negative")
    _require_non_negative(item.unit_price, "Unit price")
    _require_non_negative(item.unit_cost, "Unit cost")


def validate_invoice(invoice: Invoice) -> None:
    """Validate an invoice and all of its items.

    An empty item list is valid; such an invoice simply totals zero.
    """
    _require_text(invoice.id, "Invoice id")
    _require_text(invoice.invoice_number, "Invoice number")
    _require_text(invoice.client_name, "Client name")
    if not isinstance(invoice.status, InvoiceStatus):
        raise ValidationError(f"Unknown invoice status: {invoice.status!r}")
    for item in invoice.items:
        validate_invoice_item(item)


def validate_bank(bank: Bank) -> None:
    _require_text(bank.id, "Bank id")
    _require_text(bank.bank_name, "Bank name")
    _require_decimal(bank.balance, "Opening balance")


def validate_staff(member: Staff) -> None:
    _require_text(member.id, "Staff id")
    _require_text(member.name, "Staff name")
    _require_non_negative(member.salary, "Salary")


def validate_inventory_item(item: InventoryItem) -> None:
    _require_text(item.id, "Inventory id")
    _require_text(item.name, "Item name")
    _require_non_negative(item.purchase_price, "Purchase price")
    _require_non_negative(item.selling_price, "Selling price")
    _require_decimal(item.stock, "Stock")
