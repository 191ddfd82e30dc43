"""Inventory management endpoints: items, low-stock alerts, stock transactions."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.deps import get_inventory_ledger, get_store
from beancounter.db.store import Store
from beancounter.models import InventoryItem, InventoryTransactionType
from beancounter.models.mixins import new_id
from beancounter.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryTransactionListResponse,
    InventoryTransactionResponse,
    LowStockResponse,
)
from beancounter.services.costing import ensure_ingredient_removable
from beancounter.services.inventory_ledger import InventoryLedger, InventoryTransactionDraft

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _get_item(store: Store, inventory_id: str) -> InventoryItem:
    item = store.inventory.get(inventory_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inventory record not found",
        )
    return item


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    low_stock_only: bool = False,
    category: str | None = None,
    search: str | None = None,
    store: Store = Depends(get_store),
):
    """List inventory items with pagination and optional filters."""
    items = list(store.inventory.values())

    # Apply filters
    if low_stock_only:
        items = [i for i in items if i.is_low_stock]
    if category:
        items = [i for i in items if i.category.lower() == category.lower()]
    if search:
        needle = search.lower()
        items = [i for i in items if needle in i.name.lower() or needle in (i.supplier or "").lower()]

    items.sort(key=lambda i: i.name)
    offset = (page - 1) * size

    return InventoryListResponse(
        items=[InventoryItemResponse.model_validate(i) for i in items[offset:offset + size]],
        total=len(items),
        page=page,
        size=size,
    )


@router.get("/low-stock", response_model=LowStockResponse)
async def get_low_stock_items(store: Store = Depends(get_store)):
    """Get all items at or below their reorder point, emptiest first."""
    items = sorted(
        (i for i in store.inventory.values() if i.is_low_stock),
        key=lambda i: i.current_stock,
    )
    return LowStockResponse(
        items=[InventoryItemResponse.model_validate(i) for i in items],
        count=len(items),
    )


# ── Stock transactions ─────────────────────────────
@router.get("/transactions", response_model=InventoryTransactionListResponse)
async def list_inventory_transactions(
    inventory_id: str | None = None,
    type: InventoryTransactionType | None = None,
    store: Store = Depends(get_store),
):
    items = list(store.inventory_transactions.values())
    if inventory_id:
        items = [t for t in items if t.inventory_id == inventory_id]
    if type:
        items = [t for t in items if t.type == type]

    items.sort(key=lambda t: t.date, reverse=True)
    return InventoryTransactionListResponse(
        items=[InventoryTransactionResponse.model_validate(t) for t in items],
        total=len(items),
    )


@router.get("/transactions/{transaction_id}", response_model=InventoryTransactionResponse)
async def get_inventory_transaction(
    transaction_id: str,
    ledger: InventoryLedger = Depends(get_inventory_ledger),
):
    return InventoryTransactionResponse.model_validate(ledger.get_transaction(transaction_id))


@router.post("/transactions", response_model=InventoryTransactionResponse, status_code=status.HTTP_201_CREATED)
async def record_inventory_transaction(
    body: InventoryTransactionDraft,
    ledger: InventoryLedger = Depends(get_inventory_ledger),
):
    """Record a stock movement; restocks add stock, everything else removes it."""
    transaction = ledger.record_transaction(body)
    return InventoryTransactionResponse.model_validate(transaction)


@router.put("/transactions/{transaction_id}", response_model=InventoryTransactionResponse)
async def edit_inventory_transaction(
    transaction_id: str,
    body: InventoryTransactionDraft,
    ledger: InventoryLedger = Depends(get_inventory_ledger),
):
    transaction = ledger.edit_transaction(transaction_id, body)
    return InventoryTransactionResponse.model_validate(transaction)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_transaction(
    transaction_id: str,
    ledger: InventoryLedger = Depends(get_inventory_ledger),
):
    ledger.delete_transaction(transaction_id)


# ── Items ──────────────────────────────────────────
@router.get("/{inventory_id}", response_model=InventoryItemResponse)
async def get_inventory(inventory_id: str, store: Store = Depends(get_store)):
    """Get a single inventory item by ID."""
    return InventoryItemResponse.model_validate(_get_item(store, inventory_id))


@router.get("/{inventory_id}/transactions", response_model=InventoryTransactionListResponse)
async def list_item_transactions(inventory_id: str, store: Store = Depends(get_store)):
    item = _get_item(store, inventory_id)
    items = sorted(store.transactions_for_item(item.id), key=lambda t: t.date, reverse=True)
    return InventoryTransactionListResponse(
        items=[InventoryTransactionResponse.model_validate(t) for t in items],
        total=len(items),
    )


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory(body: InventoryItemCreate, store: Store = Depends(get_store)):
    """Create a new inventory item."""
    if any(i.name.lower() == body.name.lower() for i in store.inventory.values()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Inventory item with this name already exists",
        )

    item = InventoryItem(id=new_id("inv"), **body.model_dump())
    store.inventory[item.id] = item
    logger.info("Created inventory item %s (%s)", item.id, item.name)
    return InventoryItemResponse.model_validate(item)


@router.patch("/{inventory_id}", response_model=InventoryItemResponse)
async def update_inventory(
    inventory_id: str,
    body: InventoryItemUpdate,
    store: Store = Depends(get_store),
):
    """Update item settings (thresholds, supplier, cost)."""
    item = _get_item(store, inventory_id)

    with store.inventory_lock(item.id):
        item.apply_changes(body.model_dump(exclude_unset=True))

    return InventoryItemResponse.model_validate(item)


@router.delete("/{inventory_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory(inventory_id: str, store: Store = Depends(get_store)):
    """Delete an inventory item together with its stock transactions.

    Items still used as a recipe ingredient cannot be deleted.
    """
    item = _get_item(store, inventory_id)
    ensure_ingredient_removable(store, item)

    with store.inventory_lock(item.id):
        for transaction in store.transactions_for_item(item.id):
            del store.inventory_transactions[transaction.id]
        del store.inventory[item.id]
    logger.info("Deleted inventory item %s", item.id)
