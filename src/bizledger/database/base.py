"""Abstract entity store interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Mapping, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from bizledger.domain.entities import Bank, Ledger

TRANSACTIONS = "transactions"
INVOICES = "invoices"
BANKS = "banks"
STAFF = "staff"
INVENTORY = "inventory"

COLLECTIONS = (TRANSACTIONS, INVOICES, BANKS, STAFF, INVENTORY)

DEFAULT_BANKS = (
    Bank(
        id="bank1",
        bank_name="Main Corporate Account",
        account_number="88990011",
        branch="Mumbai",
        balance=Decimal("15000"),
    ),
)


def default_collection(collection: str) -> tuple[Any, ...]:
    """Return the contents of a collection that has never been saved."""
    if collection == BANKS:
        return DEFAULT_BANKS
    return ()


class EntityStore(ABC):
    """Abstract store holding whole entity collections by name."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize store schema (create tables)."""
        pass

    @abstractmethod
    def load(self, collection: str) -> tuple[Any, ...]:
        """Load a full collection in stored order.

        Returns the collection defaults if it has never been saved.

        Raises:
            DecodeError: If a stored record cannot be decoded
        """
        pass

    @abstractmethod
    def save_many(self, collections: Mapping[str, Sequence[Any]]) -> None:
        """Replace several full collections in one atomic write.

        If any collection fails to save, none of them is changed.
        """
        pass

    def save(self, collection: str, entities: Sequence[Any]) -> None:
        """Replace a full collection atomically."""
        self.save_many({collection: entities})

    def load_ledger(self) -> Ledger:
        """Load every collection into a ledger snapshot."""
        return Ledger(
            transactions=self.load(TRANSACTIONS),
            invoices=self.load(INVOICES),
            banks=self.load(BANKS),
            staff=self.load(STAFF),
            inventory=self.load(INVENTORY),
        )

    def save_ledger(self, ledger: Ledger, previous: Ledger | None = None) -> list[str]:
        """Save the changed collections of a ledger snapshot in one atomic write.

        Args:
            ledger: Snapshot to persist
            previous: Snapshot the ledger was derived from; when given, only
                collections that differ from it are written

        Returns:
            Names of the collections written
        """
        changed = {}
        for collection in COLLECTIONS:
            entities = getattr(ledger, collection)
            if previous is not None and getattr(previous, collection) == entities:
                continue
            changed[collection] = entities
        if changed:
            self.save_many(changed)
        return list(changed)
