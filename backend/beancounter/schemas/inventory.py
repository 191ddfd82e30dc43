"""Inventory schemas for request/response."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from beancounter.models import InventoryTransactionType


class InventoryItemBase(BaseModel):
    """Base inventory schema with common fields."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1)
    unit: str = Field(..., min_length=1, description="Unit of measure, e.g. kg, L, pcs")
    current_stock: Decimal = Field(Decimal("0"), ge=0, description="Current stock quantity")
    reorder_point: Decimal = Field(Decimal("0"), ge=0, description="Alert when stock falls to this level")
    ideal_stock: Decimal = Field(..., gt=0, description="Target level after restocking")
    cost_per_unit: Decimal = Field(..., ge=0)
    supplier: str = Field(..., min_length=1)


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1)
    unit: str | None = Field(None, min_length=1)
    current_stock: Decimal | None = Field(None, ge=0)
    reorder_point: Decimal | None = Field(None, ge=0)
    ideal_stock: Decimal | None = Field(None, gt=0)
    cost_per_unit: Decimal | None = Field(None, ge=0)
    supplier: str | None = Field(None, min_length=1)


class InventoryItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    unit: str
    current_stock: Decimal
    reorder_point: Decimal
    ideal_stock: Decimal
    cost_per_unit: Decimal
    supplier: str | None
    last_restocked: dt.date | None
    is_low_stock: bool


class InventoryListResponse(BaseModel):
    """Paginated list of inventory items."""
    items: list[InventoryItemResponse]
    total: int
    page: int
    size: int


class LowStockResponse(BaseModel):
    """Response for low stock alerts."""
    items: list[InventoryItemResponse]
    count: int


class InventoryTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    inventory_id: str
    date: dt.date
    type: InventoryTransactionType
    quantity: Decimal
    unit_cost: Decimal
    total_cost: Decimal
    supplier_ref: str | None
    invoice_number: str | None
    notes: str | None


class InventoryTransactionListResponse(BaseModel):
    items: list[InventoryTransactionResponse]
    total: int
