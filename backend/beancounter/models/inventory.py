"""Inventory item & stock transaction models."""

import datetime as dt
import enum
from decimal import Decimal

from pydantic import Field

from beancounter.models.mixins import Record


class InventoryTransactionType(str, enum.Enum):
    RESTOCK = "restock"
    USAGE = "usage"
    ADJUSTMENT = "adjustment"
    WRITE_OFF = "write-off"


class InventoryItem(Record):
    id: str
    name: str
    category: str
    unit: str
    current_stock: Decimal = Field(Decimal("0"), ge=0)
    reorder_point: Decimal = Field(Decimal("0"), ge=0)
    ideal_stock: Decimal = Field(Decimal("0"), ge=0)
    cost_per_unit: Decimal = Field(Decimal("0.00"), ge=0)
    supplier: str | None = None
    last_restocked: dt.date | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.reorder_point

    def __repr__(self) -> str:
        return f"<InventoryItem {self.name} stock={self.current_stock}{self.unit}>"


class InventoryTransaction(Record):
    id: str
    inventory_id: str
    date: dt.date
    type: InventoryTransactionType
    quantity: Decimal
    unit_cost: Decimal
    # Signed: positive for restock, negative for stock leaving the shop.
    total_cost: Decimal
    supplier_ref: str | None = None
    invoice_number: str | None = None
    notes: str | None = None
