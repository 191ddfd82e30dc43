"""Unit tests for inventory items and the stock ledger."""

import datetime as dt
from contextlib import contextmanager
from decimal import Decimal
from unittest.mock import patch

import pytest

from beancounter.core.errors import InsufficientStock, ValidationError
from beancounter.models import InventoryItem, InventoryTransactionType
from beancounter.services.inventory_ledger import InventoryLedger, InventoryTransactionDraft


def _draft(**overrides):
    values = dict(
        inventory_id="inv-001",
        date=dt.date(2024, 5, 20),
        type=InventoryTransactionType.RESTOCK,
        quantity=Decimal("10"),
        unit_cost=Decimal("14.50"),
        supplier_ref="Highland Roasters",
        invoice_number="HR-6000",
    )
    values.update(overrides)
    return InventoryTransactionDraft(**values)


# ── Inventory model properties ──────────────────────

def test_inventory_is_low_stock_property():
    """InventoryItem.is_low_stock should return True when stock <= reorder point."""
    item = InventoryItem(
        id="inv-x",
        name="Oat Milk",
        category="Dairy Alternatives",
        unit="L",
        current_stock=Decimal("5"),
        reorder_point=Decimal("10"),
        ideal_stock=Decimal("30"),
    )

    assert item.is_low_stock is True

    item.current_stock = Decimal("15")
    assert item.is_low_stock is False

    item.current_stock = Decimal("10")  # exactly at reorder point
    assert item.is_low_stock is True


# ── Stock ledger ─────────────────────────────────────

def test_restock_adds_stock_and_stamps_date(store):
    item = store.inventory["inv-001"]

    transaction = InventoryLedger(store).record_transaction(_draft())

    assert item.current_stock == Decimal("28")
    assert item.last_restocked == dt.date(2024, 5, 20)
    assert transaction.total_cost == Decimal("145.00")


def test_usage_removes_stock_with_negative_cost(store):
    item = store.inventory["inv-002"]

    transaction = InventoryLedger(store).record_transaction(
        _draft(inventory_id="inv-002", type=InventoryTransactionType.USAGE, quantity=Decimal("4"), unit_cost=Decimal("1.10"))
    )

    assert item.current_stock == Decimal("20")
    assert transaction.total_cost == Decimal("-4.40")
    assert item.last_restocked == dt.date(2024, 5, 12)


def test_usage_beyond_stock_is_rejected(store):
    item = store.inventory["inv-003"]
    count = len(store.inventory_transactions)

    with pytest.raises(InsufficientStock):
        InventoryLedger(store).record_transaction(
            _draft(inventory_id="inv-003", type=InventoryTransactionType.WRITE_OFF, quantity=Decimal("7"))
        )

    assert item.current_stock == Decimal("6")
    assert len(store.inventory_transactions) == count


def test_restock_requires_supplier_and_invoice(store):
    with pytest.raises(ValidationError) as exc_info:
        InventoryLedger(store).record_transaction(_draft(supplier_ref=None, invoice_number=""))

    assert {e.field for e in exc_info.value.errors} == {"supplier_ref", "invoice_number"}


@pytest.mark.parametrize("field", ["quantity", "unit_cost"])
def test_quantity_and_unit_cost_must_be_positive(store, field):
    with pytest.raises(ValidationError) as exc_info:
        InventoryLedger(store).record_transaction(_draft(**{field: Decimal("0")}))

    assert exc_info.value.errors[0].field == field


def test_edit_reverses_previous_movement(store):
    ledger = InventoryLedger(store)
    item = store.inventory["inv-001"]
    transaction = ledger.record_transaction(_draft())

    ledger.edit_transaction(transaction.id, _draft(quantity=Decimal("4")))

    assert item.current_stock == Decimal("22")
    assert store.inventory_transactions[transaction.id].total_cost == Decimal("58.00")


def test_edit_can_move_transaction_to_another_item(store):
    ledger = InventoryLedger(store)
    transaction = ledger.record_transaction(_draft())

    ledger.edit_transaction(
        transaction.id,
        _draft(inventory_id="inv-004", quantity=Decimal("2"), unit_cost=Decimal("7.25"), supplier_ref="Sweet Supply Co."),
    )

    assert store.inventory["inv-001"].current_stock == Decimal("18")
    assert store.inventory["inv-004"].current_stock == Decimal("7")


def test_edit_across_items_locks_in_id_order(store):
    ledger = InventoryLedger(store)
    transaction = ledger.record_transaction(
        _draft(inventory_id="inv-004", quantity=Decimal("2"), unit_cost=Decimal("7.25"), supplier_ref="Sweet Supply Co.")
    )
    taken = []
    inventory_lock = store.inventory_lock

    @contextmanager
    def recording_lock(inventory_id):
        taken.append(inventory_id)
        with inventory_lock(inventory_id):
            yield

    with patch.object(store, "inventory_lock", recording_lock):
        ledger.edit_transaction(transaction.id, _draft())

    assert taken == ["inv-001", "inv-004"]
    assert store.inventory["inv-004"].current_stock == Decimal("5")
    assert store.inventory["inv-001"].current_stock == Decimal("28")


def test_delete_reverses_movement(store):
    ledger = InventoryLedger(store)
    transaction = ledger.record_transaction(
        _draft(type=InventoryTransactionType.USAGE, quantity=Decimal("3"))
    )
    assert store.inventory["inv-001"].current_stock == Decimal("15")

    ledger.delete_transaction(transaction.id)

    assert store.inventory["inv-001"].current_stock == Decimal("18")
    assert transaction.id not in store.inventory_transactions


# ── Endpoints ────────────────────────────────────────

@pytest.mark.asyncio
async def test_low_stock_lists_items_at_or_below_reorder_point(store):
    from beancounter.api.inventory import get_low_stock_items

    result = await get_low_stock_items(store=store)

    assert result.count == 1
    assert result.items[0].id == "inv-003"


@pytest.mark.asyncio
async def test_list_inventory_low_stock_filter(store):
    from beancounter.api.inventory import list_inventory

    result = await list_inventory(page=1, size=50, low_stock_only=True, category=None, search=None, store=store)

    assert result.total == 1
    assert result.page == 1


@pytest.mark.asyncio
async def test_inventory_transaction_endpoints(client):
    response = await client.post(
        "/inventory/transactions",
        json={
            "inventory_id": "inv-005",
            "date": "2024-05-20",
            "type": "usage",
            "quantity": "50",
            "unit_cost": "0.08",
        },
    )
    assert response.status_code == 201
    assert Decimal(response.json()["total_cost"]) == Decimal("-4.00")

    item = (await client.get("/inventory/inv-005")).json()
    assert Decimal(item["current_stock"]) == Decimal("800")

    response = await client.post(
        "/inventory/transactions",
        json={"inventory_id": "inv-004", "date": "2024-05-20", "type": "usage", "quantity": "9", "unit_cost": "7.25"},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "quantity"


@pytest.mark.asyncio
async def test_get_missing_inventory_item_returns_404(client):
    response = await client.get("/inventory/inv-missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Inventory record not found"


@pytest.mark.asyncio
async def test_update_inventory_item(client, store):
    response = await client.patch("/inventory/inv-003", json={"reorder_point": 4, "supplier": "Oatly Direct"})

    assert response.status_code == 200
    assert store.inventory["inv-003"].reorder_point == 4
    assert store.inventory["inv-003"].supplier == "Oatly Direct"
    assert not store.inventory["inv-003"].is_low_stock


@pytest.mark.asyncio
async def test_rejected_update_leaves_inventory_item_unchanged(client, store):
    before = store.inventory["inv-001"].model_dump()

    response = await client.patch("/inventory/inv-001", json={"reorder_point": 3, "name": None})

    assert response.status_code == 422
    assert store.inventory["inv-001"].model_dump() == before

