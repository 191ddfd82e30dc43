"""Inventory transaction ledger.

Independent of the loyalty ledger. Each transaction's ``total_cost`` is
``quantity * unit_cost``, positive for restocks and negative for everything
that takes stock out. Recording moves the item's stock level; edits and
deletes reverse the previous movement first.
"""

import datetime as dt
import logging
from decimal import Decimal

from pydantic import BaseModel

from beancounter.core.errors import FieldError, InsufficientStock, NotFoundError, ValidationError
from beancounter.db.store import Store
from beancounter.models import InventoryItem, InventoryTransaction, InventoryTransactionType
from beancounter.models.mixins import new_id

logger = logging.getLogger(__name__)

STOCK_DIRECTION: dict[InventoryTransactionType, int] = {
    InventoryTransactionType.RESTOCK: 1,
    InventoryTransactionType.USAGE: -1,
    InventoryTransactionType.ADJUSTMENT: -1,
    InventoryTransactionType.WRITE_OFF: -1,
}


class InventoryTransactionDraft(BaseModel):
    inventory_id: str = ""
    date: dt.date | None = None
    type: InventoryTransactionType = InventoryTransactionType.RESTOCK
    quantity: Decimal = Decimal("0")
    unit_cost: Decimal = Decimal("0.00")
    supplier_ref: str | None = None
    invoice_number: str | None = None
    notes: str | None = None


def signed_total_cost(type_: InventoryTransactionType, quantity: Decimal, unit_cost: Decimal) -> Decimal:
    return STOCK_DIRECTION[type_] * abs(quantity * unit_cost)


def stock_change(transaction: InventoryTransaction) -> Decimal:
    return STOCK_DIRECTION[transaction.type] * abs(transaction.quantity)


def validate(draft: InventoryTransactionDraft) -> list[FieldError]:
    errors: list[FieldError] = []
    if not draft.inventory_id:
        errors.append(FieldError(field="inventory_id", message="Item is required"))
    if draft.date is None:
        errors.append(FieldError(field="date", message="Date is required"))
    if draft.quantity <= 0:
        errors.append(FieldError(field="quantity", message="Quantity must be greater than zero"))
    if draft.unit_cost <= 0:
        errors.append(FieldError(field="unit_cost", message="Unit cost must be greater than zero"))
    if draft.type == InventoryTransactionType.RESTOCK:
        if not draft.supplier_ref:
            errors.append(FieldError(field="supplier_ref", message="Supplier is required for restock transactions"))
        if not draft.invoice_number:
            errors.append(
                FieldError(field="invoice_number", message="Invoice number is required for restock transactions")
            )
    return errors


class InventoryLedger:
    def __init__(self, store: Store):
        self.store = store

    def _item(self, inventory_id: str) -> InventoryItem:
        item = self.store.inventory.get(inventory_id)
        if item is None:
            raise NotFoundError(f"Inventory item not found: {inventory_id}")
        return item

    def _build(self, transaction_id: str, draft: InventoryTransactionDraft) -> InventoryTransaction:
        errors = validate(draft)
        if errors:
            raise ValidationError(errors, message=f"Invalid {draft.type.value} transaction")
        return InventoryTransaction(
            id=transaction_id,
            total_cost=signed_total_cost(draft.type, draft.quantity, draft.unit_cost),
            **draft.model_dump(),
        )

    @staticmethod
    def _move(item: InventoryItem, change: Decimal) -> None:
        if item.current_stock + change < 0:
            raise InsufficientStock(item.id, item.current_stock, abs(change))
        item.current_stock += change

    def record_transaction(self, draft: InventoryTransactionDraft) -> InventoryTransaction:
        transaction = self._build(new_id("trx"), draft)
        item = self._item(transaction.inventory_id)

        with self.store.inventory_lock(item.id):
            self._move(item, stock_change(transaction))
            if transaction.type == InventoryTransactionType.RESTOCK:
                item.last_restocked = transaction.date
            self.store.inventory_transactions[transaction.id] = transaction

        logger.info(
            "Inventory %s %s: %s %s, stock now %s",
            transaction.type.value, transaction.id, item.name, stock_change(transaction), item.current_stock,
        )
        return transaction

    def edit_transaction(self, transaction_id: str, draft: InventoryTransactionDraft) -> InventoryTransaction:
        current = self.get_transaction(transaction_id)
        updated = self._build(current.id, draft)
        old_item = self._item(current.inventory_id)
        new_item = self._item(updated.inventory_id)

        with self.store.inventory_locks(old_item.id, new_item.id):
            if old_item.id == new_item.id:
                self._move(old_item, stock_change(updated) - stock_change(current))
            else:
                if new_item.current_stock + stock_change(updated) < 0:
                    raise InsufficientStock(new_item.id, new_item.current_stock, abs(stock_change(updated)))
                self._move(old_item, -stock_change(current))
                self._move(new_item, stock_change(updated))
            if updated.type == InventoryTransactionType.RESTOCK:
                new_item.last_restocked = max(new_item.last_restocked or updated.date, updated.date)
            self.store.inventory_transactions[current.id] = updated

        logger.info("Inventory transaction %s edited", current.id)
        return updated

    def delete_transaction(self, transaction_id: str) -> InventoryTransaction:
        transaction = self.get_transaction(transaction_id)
        item = self._item(transaction.inventory_id)

        with self.store.inventory_lock(item.id):
            self._move(item, -stock_change(transaction))
            del self.store.inventory_transactions[transaction.id]

        logger.info("Inventory transaction %s deleted, %s stock now %s", transaction.id, item.name, item.current_stock)
        return transaction

    def get_transaction(self, transaction_id: str) -> InventoryTransaction:
        transaction = self.store.inventory_transactions.get(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Inventory transaction not found: {transaction_id}")
        return transaction
