"""Endpoint tests for the POS order flow."""

from decimal import Decimal

import pytest


async def _open_order(client, customer_id=None):
    response = await client.post("/orders", json={"customer_id": customer_id})
    assert response.status_code == 201
    return response.json()


async def _add(client, order_id, product_id="prod-003", options=None):
    body = {"product_id": product_id}
    if options is not None:
        body["options"] = options
    response = await client.post(f"/orders/{order_id}/items", json=body)
    assert response.status_code == 201
    return response.json()


# ── Cart ─────────────────────────────────────────────

@pytest.mark.asyncio
async def test_new_order_is_open_and_empty(client):
    order = await _open_order(client)

    assert order["status"] == "open"
    assert order["order_number"].startswith("ORD-")
    assert order["lines"] == []
    assert Decimal(order["total"]) == 0


@pytest.mark.asyncio
async def test_customized_latte_totals(client):
    """Two large oat vanilla lattes come to 12.96 with 8% tax."""
    order = await _open_order(client)
    order = await _add(client, order["id"], options={"size": "large", "milk": "oat", "extras": ["vanilla"]})
    line_id = order["lines"][0]["id"]

    response = await client.patch(f"/orders/{order['id']}/items/{line_id}", json={"delta": 1})
    assert response.status_code == 200
    order = response.json()

    assert Decimal(order["lines"][0]["unit_price"]) == Decimal("6.00")
    assert Decimal(order["subtotal"]) == Decimal("12.00")
    assert Decimal(order["tax"]) == Decimal("0.96")
    assert Decimal(order["total"]) == Decimal("12.96")


@pytest.mark.asyncio
async def test_customize_line_reprices_it(client):
    order = await _open_order(client)
    order = await _add(client, order["id"])
    line_id = order["lines"][0]["id"]

    response = await client.put(
        f"/orders/{order['id']}/items/{line_id}/options",
        json={"size": "small", "milk": "almond", "extras": ["cinnamon"]},
    )

    assert response.status_code == 200
    line = response.json()["lines"][0]
    assert Decimal(line["unit_price"]) == Decimal("4.75")
    assert line["options"] == {"size": "small", "milk": "almond", "extras": ["cinnamon"]}


@pytest.mark.asyncio
async def test_quantity_to_zero_removes_line(client):
    order = await _open_order(client)
    await _add(client, order["id"], "prod-001")
    order = await _add(client, order["id"], "prod-008")
    line_id = order["lines"][0]["id"]

    response = await client.patch(f"/orders/{order['id']}/items/{line_id}", json={"delta": -1})

    lines = response.json()["lines"]
    assert [line["product_id"] for line in lines] == ["prod-008"]


@pytest.mark.asyncio
async def test_unknown_line_returns_404(client):
    order = await _open_order(client)

    response = await client.delete(f"/orders/{order['id']}/items/line-missing")

    assert response.status_code == 404
    assert "line-missing" in response.json()["detail"]


@pytest.mark.asyncio
async def test_unknown_product_or_order_returns_404(client):
    order = await _open_order(client)

    response = await client.post(f"/orders/{order['id']}/items", json={"product_id": "prod-missing"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"

    response = await client.get("/orders/order-missing")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_clear_order(client):
    order = await _open_order(client, "cust-001")
    await _add(client, order["id"])
    await client.patch(f"/orders/{order['id']}", json={"payment_method": "card"})

    response = await client.post(f"/orders/{order['id']}/clear")

    order = response.json()
    assert order["lines"] == []
    assert order["customer_id"] is None
    assert order["payment_method"] == "none"


# ── Checkout ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_checkout_credits_customer_and_returns_receipt(client, store):
    order = await _open_order(client, "cust-001")
    order = await _add(client, order["id"], options={"size": "large", "milk": "oat", "extras": ["vanilla"]})
    await client.patch(f"/orders/{order['id']}/items/{order['lines'][0]['id']}", json={"delta": 1})
    await client.patch(f"/orders/{order['id']}", json={"payment_method": "card"})

    response = await client.post(f"/orders/{order['id']}/complete")

    assert response.status_code == 200
    body = response.json()
    assert body["order"]["status"] == "completed"
    assert body["points_earned"] == 13
    assert "TOTAL: $12.96" in body["receipt"]
    assert "Points balance: 55" in body["receipt"]

    customer = store.customers["cust-001"]
    assert customer.points == 42 + 13
    transaction = store.transactions[body["transaction_id"]]
    assert transaction.order_id == order["id"]
    assert transaction.amount == Decimal("12.96")


@pytest.mark.asyncio
async def test_checkout_without_payment_method_is_rejected(client):
    order = await _open_order(client)
    await _add(client, order["id"])

    response = await client.post(f"/orders/{order['id']}/complete")

    assert response.status_code == 422
    assert response.json()["errors"] == [{"field": "payment_method", "message": "Please select a payment method"}]


@pytest.mark.asyncio
async def test_completed_order_cannot_change(client):
    order = await _open_order(client)
    await _add(client, order["id"])
    await client.patch(f"/orders/{order['id']}", json={"payment_method": "cash"})
    await client.post(f"/orders/{order['id']}/complete")

    response = await client.post(f"/orders/{order['id']}/items", json={"product_id": "prod-001"})
    assert response.status_code == 400

    response = await client.post(f"/orders/{order['id']}/complete")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_receipt_endpoints(client):
    order = await _open_order(client)
    await _add(client, order["id"])

    response = await client.get(f"/receipts/{order['id']}/text")
    assert response.status_code == 400

    await client.patch(f"/orders/{order['id']}", json={"payment_method": "cash"})
    await client.post(f"/orders/{order['id']}/complete")

    response = await client.get(f"/receipts/{order['id']}/text")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert order["order_number"] in response.text

    response = await client.get(f"/receipts/{order['id']}/preview")
    assert response.json()[0]["align"] == "center"


@pytest.mark.asyncio
async def test_list_orders_filters_by_status(client):
    first = await _open_order(client)
    await _open_order(client)
    await _add(client, first["id"])
    await client.patch(f"/orders/{first['id']}", json={"payment_method": "cash"})
    await client.post(f"/orders/{first['id']}/complete")

    response = await client.get("/orders", params={"status_filter": "completed"})

    body = response.json()
    assert body["total"] == 1
    assert body["items"][0]["id"] == first["id"]
