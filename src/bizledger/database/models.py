"""SQLAlchemy models for the bizledger entity store."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    type = Column(String, nullable=False)
    payment_mode = Column(String, nullable=False)
    bank_id = Column(String, nullable=True)
    cashier_name = Column(String, nullable=True)
    # Set only for invoice-derived transactions
    origin_invoice_id = Column(String, nullable=True)


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    invoice_number = Column(String, unique=True, nullable=False)
    client_name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String, nullable=False)
    cashier_name = Column(String, nullable=True)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )


class InvoiceItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_items"

    row_id = Column(Integer, primary_key=True)
    invoice_id = Column(String, ForeignKey("invoices.id"), nullable=False)
    position = Column(Integer, nullable=False)
    item_id = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    unit_cost = Column(Numeric(14, 2), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")


class Bank(Base):
    """Bank account model."""

    __tablename__ = "banks"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    bank_name = Column(String, nullable=False)
    account_number = Column(String, nullable=False, default="")
    branch = Column(String, nullable=False, default="")
    balance = Column(Numeric(14, 2), nullable=False)


class Staff(Base):
    """Staff member model."""

    __tablename__ = "staff"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    salary = Column(Numeric(14, 2), nullable=False)


class InventoryItem(Base):
    """Inventory item model."""

    __tablename__ = "inventory_items"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    unit = Column(String, nullable=False, default="Pcs")
    purchase_price = Column(Numeric(14, 2), nullable=False)
    selling_price = Column(Numeric(14, 2), nullable=False)
    stock = Column(Numeric(14, 2), nullable=False)


class SavedCollection(Base):
    """Marks a collection as saved at least once."""

    __tablename__ = "saved_collections"

    name = Column(String, primary_key=True)
    saved_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
