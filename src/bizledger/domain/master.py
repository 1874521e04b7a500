"""Master data domain service: banks, staff and inventory."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from bizledger.domain.entities import Bank, InventoryItem, Staff, new_entity_id
from bizledger.domain.validation import (
    validate_bank,
    validate_inventory_item,
    validate_staff,
)
from bizledger.logging_config import get_logger

if TYPE_CHECKING:
    from bizledger.database.base import EntityStore

logger = get_logger(__name__)


class MasterDataService:
    """Service for managing reference data."""

    def __init__(self, store: EntityStore):
        """Initialize master data service.

        Args:
            store: Entity store instance
        """
        self.store = store

    def _append(self, collection: str, entity) -> None:
        ledger = self.store.load_ledger()
        updated = replace(ledger, **{collection: getattr(ledger, collection) + (entity,)})
        self.store.save_ledger(updated, previous=ledger)
        logger.info("master_data_added", collection=collection, entity_id=entity.id)

    def _remove(self, collection: str, entity_id: str) -> bool:
        ledger = self.store.load_ledger()
        current = getattr(ledger, collection)
        kept = tuple(entity for entity in current if entity.id != entity_id)
        if len(kept) == len(current):
            return False
        self.store.save_ledger(replace(ledger, **{collection: kept}), previous=ledger)
        logger.info("master_data_deleted", collection=collection, entity_id=entity_id)
        return True

    def add_bank(
        self,
        bank_name: str,
        account_number: str = "",
        branch: str = "",
        balance: Decimal = Decimal("0"),
    ) -> Bank:
        """Add a bank account with its opening balance.

        Raises:
            ValidationError: If the bank name is missing or balance malformed
        """
        bank = Bank(
            id=new_entity_id(),
            bank_name=bank_name,
            account_number=account_number,
            branch=branch,
            balance=balance,
        )
        validate_bank(bank)
        self._append("banks", bank)
        return bank

    def delete_bank(self, bank_id: str) -> bool:
        """Delete a bank.

        Transactions that refer to it are kept and shown against
        "Unknown Bank" from then on.

        Returns:
            True if a bank was removed
        """
        return self._remove("banks", bank_id)

    def list_banks(self) -> list[Bank]:
        return list(self.store.load_ledger().banks)

    def add_staff(
        self,
        name: str,
        role: str = "",
        phone: str = "",
        salary: Decimal = Decimal("0"),
    ) -> Staff:
        member = Staff(id=new_entity_id(), name=name, role=role, phone=phone, salary=salary)
        validate_staff(member)
        self._append("staff", member)
        return member

    def delete_staff(self, staff_id: str) -> bool:
        return self._remove("staff", staff_id)

    def list_staff(self) -> list[Staff]:
        return list(self.store.load_ledger().staff)

    def add_inventory_item(
        self,
        name: str,
        unit: str = "Pcs",
        purchase_price: Decimal = Decimal("0"),
        selling_price: Decimal = Decimal("0"),
        stock: Decimal = Decimal("0"),
    ) -> InventoryItem:
        item = InventoryItem(
            id=new_entity_id(),
            name=name,
            unit=unit,
            purchase_price=purchase_price,
            selling_price=selling_price,
            stock=stock,
        )
        validate_inventory_item(item)
        self._append("inventory", item)
        return item

    def delete_inventory_item(self, item_id: str) -> bool:
        return self._remove("inventory", item_id)

    def list_inventory(self) -> list[InventoryItem]:
        return list(self.store.load_ledger().inventory)

    def find_inventory_item(self, name: str) -> Optional[InventoryItem]:
        for item in self.store.load_ledger().inventory:
            if item.name == name:
                return item
        return None
