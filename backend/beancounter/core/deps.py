"""Dependency injection: store access, ledgers and tax configuration."""

from decimal import Decimal

from fastapi import Depends, Request

from beancounter.core.config import settings
from beancounter.db.store import Store
from beancounter.services.inventory_ledger import InventoryLedger
from beancounter.services.loyalty import LoyaltyLedger


def get_store(request: Request) -> Store:
    """The store seeded for this app instance."""
    return request.app.state.store


def get_loyalty_ledger(store: Store = Depends(get_store)) -> LoyaltyLedger:
    return LoyaltyLedger(store)


def get_inventory_ledger(store: Store = Depends(get_store)) -> InventoryLedger:
    return InventoryLedger(store)


def get_tax_rate() -> Decimal:
    """Tax rate applied to POS orders; override per deployment via settings."""
    return settings.TAX_RATE
