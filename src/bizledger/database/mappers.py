"""Mapper functions to convert between domain models and SQLAlchemy models.

Decoding fails closed: a row that cannot be turned into a valid domain entity
raises ``DecodeError`` instead of being patched up with defaults.
"""

from decimal import Decimal
from enum import Enum
from typing import TypeVar

from bizledger.domain import entities as domain
from bizledger.domain.errors import DecodeError
from bizledger.database.models import (
    Bank as ORMBank,
    InventoryItem as ORMInventoryItem,
    Invoice as ORMInvoice,
    InvoiceItem as ORMInvoiceItem,
    Staff as ORMStaff,
    Transaction as ORMTransaction,
)

E = TypeVar("E", bound=Enum)


def _decode_enum(enum_cls: type[E], value, collection: str, record_id) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise DecodeError(
            collection, record_id, f"invalid {enum_cls.__name__} value {value!r}"
        ) from None


def _decode_decimal(value, collection: str, record_id, field_name: str) -> Decimal:
    if value is None:
        raise DecodeError(collection, record_id, f"missing {field_name}")
    return Decimal(value)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    record_id = orm_transaction.id
    if orm_transaction.date is None:
        raise DecodeError("transactions", record_id, "missing date")
    if orm_transaction.origin_invoice_id is None:
        origin = domain.ManualOrigin()
    else:
        origin = domain.InvoiceOrigin(orm_transaction.origin_invoice_id)
    return domain.Transaction(
        id=record_id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        category=orm_transaction.category,
        amount=_decode_decimal(orm_transaction.amount, "transactions", record_id, "amount"),
        type=_decode_enum(domain.TransactionType, orm_transaction.type, "transactions", record_id),
        payment_mode=_decode_enum(
            domain.PaymentMode, orm_transaction.payment_mode, "transactions", record_id
        ),
        bank_id=orm_transaction.bank_id,
        cashier_name=orm_transaction.cashier_name,
        origin=origin,
    )


def transaction_to_orm(txn: domain.Transaction, position: int) -> ORMTransaction:
    """Convert domain Transaction entity to SQLAlchemy Transaction model."""
    origin_invoice_id = None
    if isinstance(txn.origin, domain.InvoiceOrigin):
        origin_invoice_id = txn.origin.invoice_id
    return ORMTransaction(
        id=txn.id,
        position=position,
        date=txn.date,
        description=txn.description,
        category=txn.category,
        amount=txn.amount,
        type=txn.type.value,
        payment_mode=txn.payment_mode.value,
        bank_id=txn.bank_id,
        cashier_name=txn.cashier_name,
        origin_invoice_id=origin_invoice_id,
    )


def invoice_item_to_domain(orm_item: ORMInvoiceItem) -> domain.InvoiceItem:
    """Convert SQLAlchemy InvoiceItem model to domain InvoiceItem entity."""
    record_id = orm_item.invoice_id
    if orm_item.quantity is None or orm_item.quantity < 0:
        raise DecodeError("invoices", record_id, f"invalid quantity {orm_item.quantity!r}")
    return domain.InvoiceItem(
        id=orm_item.item_id,
        description=orm_item.description or "",
        quantity=orm_item.quantity,
        unit_price=_decode_decimal(orm_item.unit_price, "invoices", record_id, "unit price"),
        unit_cost=_decode_decimal(orm_item.unit_cost, "invoices", record_id, "unit cost"),
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    if orm_invoice.date is None:
        raise DecodeError("invoices", orm_invoice.id, "missing date")
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        client_name=orm_invoice.client_name,
        date=orm_invoice.date,
        items=tuple(invoice_item_to_domain(item) for item in orm_invoice.items),
        status=_decode_enum(domain.InvoiceStatus, orm_invoice.status, "invoices", orm_invoice.id),
        cashier_name=orm_invoice.cashier_name,
    )


def invoice_to_orm(invoice: domain.Invoice, position: int) -> ORMInvoice:
    """Convert domain Invoice entity to SQLAlchemy Invoice model."""
    return ORMInvoice(
        id=invoice.id,
        position=position,
        invoice_number=invoice.invoice_number,
        client_name=invoice.client_name,
        date=invoice.date,
        status=invoice.status.value,
        cashier_name=invoice.cashier_name,
        items=[
            ORMInvoiceItem(
                position=index,
                item_id=item.id,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                unit_cost=item.unit_cost,
            )
            for index, item in enumerate(invoice.items)
        ],
    )


def bank_to_domain(orm_bank: ORMBank) -> domain.Bank:
    """Convert SQLAlchemy Bank model to domain Bank entity."""
    return domain.Bank(
        id=orm_bank.id,
        bank_name=orm_bank.bank_name,
        account_number=orm_bank.account_number or "",
        branch=orm_bank.branch or "",
        balance=_decode_decimal(orm_bank.balance, "banks", orm_bank.id, "balance"),
    )


def bank_to_orm(bank: domain.Bank, position: int) -> ORMBank:
    return ORMBank(
        id=bank.id,
        position=position,
        bank_name=bank.bank_name,
        account_number=bank.account_number,
        branch=bank.branch,
        balance=bank.balance,
    )


def staff_to_domain(orm_staff: ORMStaff) -> domain.Staff:
    """Convert SQLAlchemy Staff model to domain Staff entity."""
    return domain.Staff(
        id=orm_staff.id,
        name=orm_staff.name,
        role=orm_staff.role or "",
        phone=orm_staff.phone or "",
        salary=_decode_decimal(orm_staff.salary, "staff", orm_staff.id, "salary"),
    )


def staff_to_orm(member: domain.Staff, position: int) -> ORMStaff:
    return ORMStaff(
        id=member.id,
        position=position,
        name=member.name,
        role=member.role,
        phone=member.phone,
        salary=member.salary,
    )


def inventory_item_to_domain(orm_item: ORMInventoryItem) -> domain.InventoryItem:
    """Convert SQLAlchemy InventoryItem model to domain InventoryItem entity."""
    record_id = orm_item.id
    return domain.InventoryItem(
        id=record_id,
        name=orm_item.name,
        unit=orm_item.unit or "Pcs",
        purchase_price=_decode_decimal(
            orm_item.purchase_price, "inventory", record_id, "purchase price"
        ),
        selling_price=_decode_decimal(
            orm_item.selling_price, "inventory", record_id, "selling price"
        ),
        stock=_decode_decimal(orm_item.stock, "inventory", record_id, "stock"),
    )


def inventory_item_to_orm(item: domain.InventoryItem, position: int) -> ORMInventoryItem:
    return ORMInventoryItem(
        id=item.id,
        position=position,
        name=item.name,
        unit=item.unit,
        purchase_price=item.purchase_price,
        selling_price=item.selling_price,
        stock=item.stock,
    )
