"""Tests for the SQLAlchemy entity store and its mappers."""

from datetime import date
from decimal import Decimal

import pytest

from bizledger.database import sqlalchemy_db
from bizledger.database.base import BANKS, INVOICES, TRANSACTIONS
from bizledger.database.mappers import (
    invoice_to_domain,
    invoice_to_orm,
    transaction_to_domain,
    transaction_to_orm,
)
from bizledger.database.models import (
    Invoice as ORMInvoice,
    SavedCollection,
    Transaction as ORMTransaction,
)
from bizledger.domain.entities import (
    InvoiceOrigin,
    InvoiceStatus,
    Ledger,
    ManualOrigin,
    PaymentMode,
    TransactionType,
)
from bizledger.domain.errors import DecodeError, ValidationError
from bizledger.domain.invoice import new_item
from bizledger.domain.reconciler import synthesize_transaction


def test_fresh_store_has_default_bank(temp_store, sample_bank):
    ledger = temp_store.load_ledger()

    assert ledger.banks == (sample_bank,)
    assert ledger.transactions == ()
    assert ledger.invoices == ()
    assert ledger.staff == ()
    assert ledger.inventory == ()


def test_saved_empty_bank_list_stays_empty(temp_store):
    temp_store.save(BANKS, [])

    assert temp_store.load(BANKS) == ()


def test_transactions_round_trip_in_order(temp_store, make_transaction, make_invoice):
    transactions = [
        make_transaction("z", "12.34", on=date(2024, 2, 1)),
        synthesize_transaction(make_invoice()),
        make_transaction(
            "a",
            "99",
            TransactionType.EXPENSE,
            PaymentMode.BANK,
            bank_id="bank1",
            on=date(2024, 1, 1),
        ),
    ]

    temp_store.save(TRANSACTIONS, transactions)
    loaded = temp_store.load(TRANSACTIONS)

    assert [txn.id for txn in loaded] == ["z", "auto-inv1", "a"]
    assert loaded == tuple(transactions)
    assert loaded[1].origin == InvoiceOrigin("inv1")
    assert loaded[0].origin == ManualOrigin()


def test_invoices_round_trip_with_items(temp_store, make_invoice):
    invoice = make_invoice(
        items=((2, "100", "60"), (1, "5.50", "0")), descriptions=["Widget", "Bolt"]
    )

    temp_store.save(INVOICES, [invoice])
    loaded = temp_store.load(INVOICES)

    assert loaded == (invoice,)
    assert [item.description for item in loaded[0].items] == ["Widget", "Bolt"]


def test_save_replaces_whole_collection(temp_store, make_invoice):
    temp_store.save(INVOICES, [make_invoice("a", number="INV-1"), make_invoice("b", number="INV-2")])
    temp_store.save(INVOICES, [make_invoice("b", number="INV-2")])

    assert [inv.id for inv in temp_store.load(INVOICES)] == ["b"]


def test_unknown_collection_rejected(temp_store):
    with pytest.raises(ValidationError, match="Unknown collection"):
        temp_store.load("widgets")


def test_corrupt_row_fails_closed(temp_store):
    session = temp_store._get_session()
    session.add(
        ORMTransaction(
            id="bad",
            position=0,
            date=date(2024, 1, 1),
            description="",
            category="General",
            amount=Decimal("10"),
            type="REFUND",
            payment_mode="CASH",
        )
    )
    session.add(SavedCollection(name=TRANSACTIONS))
    session.commit()

    with pytest.raises(DecodeError) as excinfo:
        temp_store.load(TRANSACTIONS)

    assert excinfo.value.collection == "transactions"
    assert excinfo.value.record_id == "bad"


def test_save_ledger_writes_only_changed_collections(temp_store, make_transaction):
    ledger = temp_store.load_ledger()
    updated = ledger.with_transactions([make_transaction()])

    written = temp_store.save_ledger(updated, previous=ledger)

    assert written == ["transactions"]
    assert temp_store.load_ledger() == updated


def test_save_ledger_without_previous_writes_everything(temp_store):
    written = temp_store.save_ledger(Ledger())

    assert written == ["transactions", "invoices", "banks", "staff", "inventory"]
    assert temp_store.load(BANKS) == ()


def test_transaction_mapper_keeps_origin(make_invoice):
    txn = synthesize_transaction(make_invoice("inv9"))

    orm = transaction_to_orm(txn, position=3)

    assert orm.origin_invoice_id == "inv9"
    assert orm.position == 3
    assert transaction_to_domain(orm) == txn


def test_invoice_mapper_rejects_unknown_status(make_invoice):
    orm = invoice_to_orm(make_invoice(), position=0)
    orm.status = "VOID"

    with pytest.raises(DecodeError, match="InvoiceStatus"):
        invoice_to_domain(orm)


def test_invoice_mapper_rejects_negative_quantity(make_invoice):
    orm = invoice_to_orm(make_invoice(), position=0)
    orm.items[0].quantity = -2

    with pytest.raises(DecodeError, match="quantity"):
        invoice_to_domain(orm)


def test_save_many_writes_collections_together(temp_store, make_transaction, make_invoice):
    temp_store.save_many(
        {TRANSACTIONS: [make_transaction()], INVOICES: [make_invoice("inv1", number="INV-1")]}
    )

    ledger = temp_store.load_ledger()
    assert [txn.id for txn in ledger.transactions] == ["t1"]
    assert [inv.id for inv in ledger.invoices] == ["inv1"]


def test_failed_save_leaves_every_collection_unchanged(
    monkeypatch, temp_store, invoice_service
):
    def broken_invoice_to_orm(invoice, position):
        raise RuntimeError("disk full")

    monkeypatch.setitem(
        sqlalchemy_db._COLLECTION_MAP,
        INVOICES,
        (ORMInvoice, invoice_to_domain, broken_invoice_to_orm),
    )
    items = [new_item("Widget", 2, Decimal("100"), Decimal("60"))]

    with pytest.raises(RuntimeError, match="disk full"):
        invoice_service.create_invoice("Acme", date(2024, 1, 15), items, status=InvoiceStatus.PAID)

    ledger = temp_store.load_ledger()
    assert ledger.transactions == ()
    assert ledger.invoices == ()
