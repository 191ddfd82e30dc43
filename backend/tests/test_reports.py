"""Endpoint tests for sales, product and payment method reports."""

import datetime as dt
from decimal import Decimal

import pytest
import pytest_asyncio

from beancounter.models.mixins import utcnow


async def _sell(client, payment_method, *product_ids):
    order = (await client.post("/orders", json={})).json()
    for product_id in product_ids:
        await client.post(f"/orders/{order['id']}/items", json={"product_id": product_id})
    await client.patch(f"/orders/{order['id']}", json={"payment_method": payment_method})
    response = await client.post(f"/orders/{order['id']}/complete")
    assert response.status_code == 200
    return response.json()["order"]


def _period(start=None, end=None):
    today = utcnow().date()
    return {"start_date": (start or today).isoformat(), "end_date": (end or today).isoformat()}


@pytest_asyncio.fixture
async def sales(client):
    """Two lattes on card (8.64) and an espresso in cash (2.97); one order left open."""
    await _sell(client, "card", "prod-003", "prod-003")
    await _sell(client, "cash", "prod-001")
    open_order = (await client.post("/orders", json={})).json()
    await client.post(f"/orders/{open_order['id']}/items", json={"product_id": "prod-008"})


@pytest.mark.asyncio
async def test_sales_report_counts_completed_orders(client, sales):
    response = await client.get("/reports/sales", params=_period())

    assert response.status_code == 200
    data = response.json()
    assert data["total_orders"] == 2
    assert Decimal(data["total_revenue"]) == Decimal("11.61")
    assert Decimal(data["avg_order_value"]) == Decimal("5.81")
    assert len(data["items"]) == 1
    assert data["best_day"] == data["worst_day"] == data["items"][0]


@pytest.mark.asyncio
async def test_sales_report_outside_period_is_empty(client, sales):
    last_week = utcnow().date() - dt.timedelta(days=7)
    response = await client.get("/reports/sales", params=_period(last_week, last_week))

    data = response.json()
    assert data["items"] == []
    assert data["total_orders"] == 0
    assert Decimal(data["avg_order_value"]) == 0
    assert data["best_day"] is None


@pytest.mark.asyncio
async def test_product_report_uses_recipe_cost(client, sales):
    response = await client.get("/reports/products", params=_period())

    data = response.json()
    latte, espresso = data["items"]
    assert (latte["product_id"], latte["quantity"]) == ("prod-003", 2)
    assert Decimal(latte["revenue"]) == Decimal("8.00")
    assert Decimal(latte["cost"]) == Decimal("1.29")
    assert Decimal(latte["profit"]) == Decimal("6.71")
    assert (espresso["product_id"], espresso["cost"], espresso["profit"]) == ("prod-001", None, None)
    assert Decimal(data["total_revenue"]) == Decimal("10.75")
    assert Decimal(data["total_profit"]) == Decimal("6.71")


@pytest.mark.asyncio
async def test_product_report_category_filter(client, sales):
    response = await client.get("/reports/products", params={**_period(), "category": "pastries"})
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_product_growth_against_previous_period(client, store):
    earlier = await _sell(client, "card", "prod-003")
    store.orders[earlier["id"]].completed_at -= dt.timedelta(days=1)
    await _sell(client, "card", "prod-003", "prod-003")

    response = await client.get("/reports/products", params=_period())

    (latte,) = response.json()["items"]
    assert Decimal(latte["growth"]) == Decimal("100.0")


@pytest.mark.asyncio
async def test_payment_method_breakdown(client, sales):
    response = await client.get("/reports/payment-methods", params=_period())

    data = response.json()
    assert [(i["payment_method"], i["total_orders"]) for i in data["items"]] == [("card", 1), ("cash", 1)]
    assert [Decimal(i["percentage"]) for i in data["items"]] == [Decimal("74.42"), Decimal("25.58")]
    assert Decimal(data["total_revenue"]) == Decimal("11.61")


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/reports/sales", "/reports/products", "/reports/payment-methods"])
async def test_reversed_period_is_rejected(client, path):
    today = utcnow().date()
    response = await client.get(path, params=_period(today, today - dt.timedelta(days=1)))
    assert response.status_code == 400
