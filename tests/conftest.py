"""Shared pytest fixtures for bizledger tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from bizledger.database.factories import create_sqlite_store
from bizledger.domain.entities import (
    Bank,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Ledger,
    PaymentMode,
    Transaction,
    TransactionType,
)
from bizledger.domain.invoice import InvoiceService
from bizledger.domain.master import MasterDataService
from bizledger.domain.reports import ReportService
from bizledger.domain.transaction import TransactionService
from bizledger.logging_config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep engine log output out of test output."""
    configure_logging(level="WARNING")


@pytest.fixture
def temp_store():
    """Create a temporary entity store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for CLI tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_store):
    """Create a TransactionService with a temporary store."""
    return TransactionService(temp_store)


@pytest.fixture
def invoice_service(temp_store):
    """Create an InvoiceService with a temporary store."""
    return InvoiceService(temp_store)


@pytest.fixture
def master_service(temp_store):
    """Create a MasterDataService with a temporary store."""
    return MasterDataService(temp_store)


@pytest.fixture
def report_service(temp_store):
    """Create a ReportService with a temporary store."""
    return ReportService(temp_store)


@pytest.fixture
def sample_bank():
    """The bank every fresh store starts with."""
    return Bank(
        id="bank1",
        bank_name="Main Corporate Account",
        account_number="88990011",
        branch="Mumbai",
        balance=Decimal("15000"),
    )


@pytest.fixture
def make_transaction():
    """Build manual transactions with sensible defaults."""

    def _make(
        txn_id="t1",
        amount="100",
        type=TransactionType.INCOME,
        payment_mode=PaymentMode.CASH,
        bank_id=None,
        on=date(2024, 1, 15),
        category="General",
        description="",
    ):
        return Transaction(
            id=txn_id,
            date=on,
            description=description,
            category=category,
            amount=Decimal(amount),
            type=type,
            payment_mode=payment_mode,
            bank_id=bank_id,
        )

    return _make


@pytest.fixture
def make_invoice():
    """Build invoices from (quantity, unit price, unit cost) tuples."""

    def _make(
        invoice_id="inv1",
        items=((2, "100", "60"),),
        status=InvoiceStatus.PAID,
        on=date(2024, 1, 15),
        number=None,
        client="Acme Traders",
        descriptions=None,
        cashier="Admin",
    ):
        line_items = tuple(
            InvoiceItem(
                id=f"{invoice_id}-item{i}",
                description=descriptions[i] if descriptions else f"Item {i}",
                quantity=qty,
                unit_price=Decimal(price),
                unit_cost=Decimal(cost),
            )
            for i, (qty, price, cost) in enumerate(items)
        )
        return Invoice(
            id=invoice_id,
            invoice_number=number or f"INV-{invoice_id}",
            client_name=client,
            date=on,
            items=line_items,
            status=status,
            cashier_name=cashier,
        )

    return _make


@pytest.fixture
def scenario_ledger(sample_bank, make_transaction):
    """Cash income of 5000 and a bank expense of 1200 against bank1."""
    return Ledger(
        transactions=(
            make_transaction("t1", "5000", TransactionType.INCOME, PaymentMode.CASH),
            make_transaction(
                "t2",
                "1200",
                TransactionType.EXPENSE,
                PaymentMode.BANK,
                bank_id="bank1",
                category="Rent",
            ),
        ),
        banks=(sample_bank,),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
