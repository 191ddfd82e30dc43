"""Endpoint tests for supplier management."""

import pytest

NEW_SUPPLIER = {
    "name": "Leaf & Co.",
    "contact_person": "Hana Sato",
    "email": "hana@leafandco.com",
    "phone": "555-902-1188",
    "address": "7 Tea Garden Row, Eugene, OR",
}


@pytest.mark.asyncio
async def test_list_suppliers_sorted_by_name(client):
    response = await client.get("/suppliers")

    data = response.json()
    assert data["total"] == 4
    assert [s["name"] for s in data["items"]] == ["Highland Roasters", "PackRight", "Sweet Supply Co.", "Valley Dairy"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "term, expected",
    [
        ("marco", ["sup-002"]),
        ("sweetsupply", ["sup-003"]),
        ("555-640", ["sup-004"]),
        ("SUP-001", ["sup-001"]),
    ],
)
async def test_search_suppliers(client, term, expected):
    response = await client.get("/suppliers", params={"search": term})
    assert [s["id"] for s in response.json()["items"]] == expected


@pytest.mark.asyncio
async def test_create_supplier_defaults_payment_terms(client, store):
    response = await client.post("/suppliers", json=NEW_SUPPLIER)

    assert response.status_code == 201
    data = response.json()
    assert data["preferred_payment_terms"] == "Net 30"
    assert data["id"] in store.suppliers


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"name": ""},
        {"contact_person": "  "},
        {"email": "hana-at-leafandco"},
        {"email": "hana@leafandco"},
        {"phone": ""},
        {"address": ""},
        {"preferred_payment_terms": ""},
    ],
)
async def test_create_supplier_validation(client, override):
    response = await client.post("/suppliers", json={**NEW_SUPPLIER, **override})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_supplier_duplicate_name_conflicts(client):
    response = await client.post("/suppliers", json={**NEW_SUPPLIER, "name": "valley dairy"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_supplier(client, store):
    response = await client.patch("/suppliers/sup-002", json={"preferred_payment_terms": "Net 30"})

    assert response.status_code == 200
    assert store.suppliers["sup-002"].preferred_payment_terms == "Net 30"
    assert store.suppliers["sup-002"].contact_person == "Marco Rossi"


@pytest.mark.asyncio
async def test_rejected_update_leaves_supplier_unchanged(client, store):
    before = store.suppliers["sup-001"].model_dump()

    response = await client.patch("/suppliers/sup-001", json={"contact_person": "Someone Else", "address": None})

    assert response.status_code == 422
    assert store.suppliers["sup-001"].model_dump() == before


@pytest.mark.asyncio
async def test_delete_supplier(client, store):
    response = await client.delete("/suppliers/sup-004")

    assert response.status_code == 204
    assert "sup-004" not in store.suppliers
    assert (await client.get("/suppliers/sup-004")).status_code == 404
    assert store.inventory["inv-005"].supplier == "PackRight"


@pytest.mark.asyncio
async def test_supplier_inventory_and_restocks(client):
    response = await client.get("/suppliers/sup-002/inventory")
    assert [i["id"] for i in response.json()["items"]] == ["inv-003", "inv-002"]

    response = await client.get("/suppliers/sup-002/restocks")
    assert [t["id"] for t in response.json()["items"]] == ["trx-002"]


@pytest.mark.asyncio
async def test_restock_referencing_supplier_id_is_listed(client):
    response = await client.post(
        "/inventory/transactions",
        json={
            "inventory_id": "inv-004",
            "date": "2024-05-21",
            "type": "restock",
            "quantity": "3",
            "unit_cost": "7.25",
            "supplier_ref": "sup-003",
            "invoice_number": "SS-1001",
        },
    )
    assert response.status_code == 201

    response = await client.get("/suppliers/sup-003/restocks")
    assert [t["invoice_number"] for t in response.json()["items"]] == ["SS-1001"]


@pytest.mark.asyncio
async def test_missing_supplier_returns_404(client):
    assert (await client.get("/suppliers/sup-missing")).status_code == 404
    assert (await client.get("/suppliers/sup-missing/inventory")).status_code == 404
