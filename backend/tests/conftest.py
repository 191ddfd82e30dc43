"""Shared fixtures: a store seeded from the bundled fixtures and an HTTP client over it."""

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from beancounter.core.config import settings
from beancounter.db.seed import load_fixtures
from beancounter.main import create_app
from beancounter.models import Order, Product


@pytest.fixture
def store():
    """Fresh store per test; mutations never leak between tests."""
    return load_fixtures(settings.FIXTURES_DIR)


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def latte():
    return Product(id="prod-latte", name="Latte", price=Decimal("4.00"), category="Coffee")


@pytest.fixture
def espresso():
    return Product(id="prod-espresso", name="Espresso", price=Decimal("2.75"), category="Coffee")


@pytest.fixture
def order():
    return Order(order_number="ORD-20240520-0001")
