"""Domain model entities for bizledger.

These are pure data classes representing business concepts, independent of
the database schema. Collections are held as tuples so that a ``Ledger``
snapshot can be passed around by value: engine operations never mutate a
snapshot, they return a new one.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

AUTO_PREFIX = "auto-"
SALES_CATEGORY = "Sales"
UNKNOWN_BANK = "Unknown Bank"


class TransactionType(str, Enum):
    """Direction of a ledger transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class PaymentMode(str, Enum):
    """Payment channel a transaction is attributed to."""

    CASH = "CASH"
    BANK = "BANK"


class InvoiceStatus(str, Enum):
    """Invoice payment status."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


@dataclass(frozen=True)
class ManualOrigin:
    """Transaction entered by hand."""


@dataclass(frozen=True)
class InvoiceOrigin:
    """Transaction synthesized from a paid invoice."""

    invoice_id: str


TransactionOrigin = Union[ManualOrigin, InvoiceOrigin]


def new_entity_id() -> str:
    """Return a short random id for a new entity."""
    return uuid4().hex[:12]


def auto_transaction_id(invoice_id: str) -> str:
    """Return the transaction id reserved for an invoice's auto-transaction."""
    return f"{AUTO_PREFIX}{invoice_id}"


@dataclass(frozen=True)
class Transaction:
    """Cash or bank ledger transaction."""

    id: str
    date: date
    description: str
    category: str
    amount: Decimal
    type: TransactionType
    payment_mode: PaymentMode
    bank_id: Optional[str] = None
    cashier_name: Optional[str] = None
    origin: TransactionOrigin = field(default_factory=ManualOrigin)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with income positive and expense negative."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount

    @property
    def is_derived(self) -> bool:
        """True if the transaction was synthesized from an invoice."""
        return isinstance(self.origin, InvoiceOrigin)


@dataclass(frozen=True)
class InvoiceItem:
    """Line item on an invoice."""

    id: str
    description: str
    quantity: int
    unit_price: Decimal
    unit_cost: Decimal = Decimal("0")

    @property
    def revenue(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def cost(self) -> Decimal:
        return self.quantity * self.unit_cost

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.cost


@dataclass(frozen=True)
class Invoice:
    """Client invoice."""

    id: str
    invoice_number: str
    client_name: str
    date: date
    items: tuple[InvoiceItem, ...]
    status: InvoiceStatus
    cashier_name: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID


@dataclass(frozen=True)
class Bank:
    """Bank account reference data."""

    id: str
    bank_name: str
    account_number: str
    branch: str
    balance: Decimal


@dataclass(frozen=True)
class Staff:
    """Staff member reference data."""

    id: str
    name: str
    role: str
    phone: str
    salary: Decimal


@dataclass(frozen=True)
class InventoryItem:
    """Inventory reference data used to pre-fill invoice items."""

    id: str
    name: str
    unit: str
    purchase_price: Decimal
    selling_price: Decimal
    stock: Decimal


@dataclass(frozen=True)
class Ledger:
    """Immutable snapshot of every entity collection."""

    transactions: tuple[Transaction, ...] = ()
    invoices: tuple[Invoice, ...] = ()
    banks: tuple[Bank, ...] = ()
    staff: tuple[Staff, ...] = ()
    inventory: tuple[InventoryItem, ...] = ()

    def find_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for txn in self.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def find_invoice(self, invoice_id: str) -> Optional[Invoice]:
        for inv in self.invoices:
            if inv.id == invoice_id:
                return inv
        return None

    def find_bank(self, bank_id: str) -> Optional[Bank]:
        for bank in self.banks:
            if bank.id == bank_id:
                return bank
        return None

    def with_transactions(self, transactions) -> "Ledger":
        return replace(self, transactions=tuple(transactions))

    def with_invoices(self, invoices) -> "Ledger":
        return replace(self, invoices=tuple(invoices))


@dataclass(frozen=True)
class TransactionDelta:
    """Transactions added to and removed from the collection by one operation."""

    added: tuple[Transaction, ...] = ()
    removed: tuple[Transaction, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


@dataclass(frozen=True)
class Reconciliation:
    """Result of an invoice mutation: the new snapshot and its ledger delta."""

    ledger: Ledger
    delta: TransactionDelta


@dataclass(frozen=True)
class ChannelBalances:
    """Aggregate balance per payment channel."""

    cash: Decimal
    bank_total: Decimal


@dataclass(frozen=True)
class BankBalance:
    """Balance of a single bank account (or of unresolved bank references)."""

    bank_id: Optional[str]
    label: str
    opening_balance: Decimal
    movement: Decimal

    @property
    def balance(self) -> Decimal:
        return self.opening_balance + self.movement


@dataclass(frozen=True)
class TrendPoint:
    """Net signed amount of all transactions falling on one date."""

    date: date
    net: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Summed expense amount for one category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class InvoiceProfit:
    """Profit row for one invoice."""

    invoice_id: str
    invoice_number: str
    client_name: str
    date: date
    revenue: Decimal
    cost: Decimal
    profit: Decimal
    margin: Decimal


@dataclass(frozen=True)
class ItemProfit:
    """Profit row for all invoice items sharing a description."""

    description: str
    quantity: int
    revenue: Decimal
    profit: Decimal
    margin: Decimal


@dataclass(frozen=True)
class FinancialSummary:
    """Revenue, expenses and profit over a set of transactions."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal


@dataclass(frozen=True)
class FinancialReport:
    """All report views computed over one inclusive date range."""

    start_date: date
    end_date: date
    expense_by_category: tuple[CategoryTotal, ...]
    total_expense: Decimal
    invoice_profit: tuple[InvoiceProfit, ...]
    item_profit: tuple[ItemProfit, ...]
    profit_trend: tuple[TrendPoint, ...]
    summary: FinancialSummary
