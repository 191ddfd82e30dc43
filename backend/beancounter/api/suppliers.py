"""Supplier management endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.models import InventoryTransactionType, Supplier
from beancounter.models.mixins import new_id
from beancounter.schemas.inventory import (
    InventoryItemResponse,
    InventoryTransactionListResponse,
    InventoryTransactionResponse,
)
from beancounter.schemas.supplier import (
    SupplierCreate,
    SupplierInventoryResponse,
    SupplierListResponse,
    SupplierResponse,
    SupplierUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


def _get_supplier(store: Store, supplier_id: str) -> Supplier:
    supplier = store.suppliers.get(supplier_id)
    if not supplier:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Supplier not found",
        )
    return supplier


def _ensure_unique_name(store: Store, name: str | None, exclude_id: str | None = None) -> None:
    if not name:
        return
    for other in store.suppliers.values():
        if other.id != exclude_id and other.name.lower() == name.lower():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Supplier with this name already exists",
            )


def _refers_to(supplier: Supplier, reference: str | None) -> bool:
    """Inventory records name a supplier by id or by name."""
    if not reference:
        return False
    return reference == supplier.id or reference.lower() == supplier.name.lower()


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    search: str | None = None,
    store: Store = Depends(get_store),
):
    """List suppliers; search matches id, name, contact, email and phone."""
    items = list(store.suppliers.values())

    if search:
        needle = search.lower()
        items = [
            s for s in items
            if needle in s.id.lower()
            or needle in s.name.lower()
            or needle in s.contact_person.lower()
            or needle in s.email.lower()
            or needle in s.phone.lower()
        ]

    items.sort(key=lambda s: s.name.lower())
    offset = (page - 1) * size

    return SupplierListResponse(
        items=[SupplierResponse.model_validate(s) for s in items[offset:offset + size]],
        total=len(items),
        page=page,
        size=size,
    )


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(supplier_id: str, store: Store = Depends(get_store)):
    return SupplierResponse.model_validate(_get_supplier(store, supplier_id))


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(body: SupplierCreate, store: Store = Depends(get_store)):
    _ensure_unique_name(store, body.name)

    supplier = Supplier(id=new_id("sup"), **body.model_dump())
    store.suppliers[supplier.id] = supplier

    logger.info("Added supplier %s (%s)", supplier.id, supplier.name)
    return SupplierResponse.model_validate(supplier)


@router.patch("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(supplier_id: str, body: SupplierUpdate, store: Store = Depends(get_store)):
    supplier = _get_supplier(store, supplier_id)

    update_data = body.model_dump(exclude_unset=True)
    _ensure_unique_name(store, update_data.get("name"), exclude_id=supplier.id)
    supplier.apply_changes(update_data)

    return SupplierResponse.model_validate(supplier)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(supplier_id: str, store: Store = Depends(get_store)):
    """Delete a supplier. Inventory keeps its free-text supplier references."""
    supplier = _get_supplier(store, supplier_id)
    del store.suppliers[supplier.id]
    logger.info("Removed supplier %s", supplier.id)


@router.get("/{supplier_id}/inventory", response_model=SupplierInventoryResponse)
async def list_supplier_inventory(supplier_id: str, store: Store = Depends(get_store)):
    """Inventory items sourced from this supplier."""
    supplier = _get_supplier(store, supplier_id)
    items = sorted(
        (i for i in store.inventory.values() if _refers_to(supplier, i.supplier)),
        key=lambda i: i.name,
    )
    return SupplierInventoryResponse(
        items=[InventoryItemResponse.model_validate(i) for i in items],
        total=len(items),
    )


@router.get("/{supplier_id}/restocks", response_model=InventoryTransactionListResponse)
async def list_supplier_restocks(supplier_id: str, store: Store = Depends(get_store)):
    """Restock transactions delivered by this supplier, newest first."""
    supplier = _get_supplier(store, supplier_id)
    items = sorted(
        (
            t for t in store.inventory_transactions.values()
            if t.type == InventoryTransactionType.RESTOCK and _refers_to(supplier, t.supplier_ref)
        ),
        key=lambda t: t.date,
        reverse=True,
    )
    return InventoryTransactionListResponse(
        items=[InventoryTransactionResponse.model_validate(t) for t in items],
        total=len(items),
    )
