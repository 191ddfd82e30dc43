"""Load JSON fixtures into a fresh ``Store``.

Each fixture file holds a JSON array of records shaped like the models in
``beancounter.models``. Missing files are treated as empty collections. After
loading, every customer's balance is reconciled against the transaction
history so the store starts with the ledger invariant intact, and every
recipe is re-costed from current inventory prices.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel

from beancounter.db.store import Store
from beancounter.models import (
    Customer,
    CustomerFeedback,
    CustomerTransaction,
    InventoryItem,
    InventoryTransaction,
    MenuItem,
    Product,
    Recipe,
    Shift,
    Staff,
    Supplier,
)
from beancounter.services.costing import recost_recipe
from beancounter.services.loyalty import LoyaltyLedger

logger = logging.getLogger(__name__)

FIXTURES: dict[str, tuple[str, type[BaseModel]]] = {
    "products": ("products.json", Product),
    "customers": ("customers.json", Customer),
    "transactions": ("transactions.json", CustomerTransaction),
    "feedback": ("feedback.json", CustomerFeedback),
    "staff": ("staff.json", Staff),
    "shifts": ("shifts.json", Shift),
    "inventory": ("inventory.json", InventoryItem),
    "inventory_transactions": ("inventory_transactions.json", InventoryTransaction),
    "suppliers": ("suppliers.json", Supplier),
    "recipes": ("recipes.json", Recipe),
    "menu_items": ("menu_items.json", MenuItem),
}


def read_fixture(path: Path, model: type[BaseModel]) -> list[BaseModel]:
    if not path.exists():
        logger.warning("Fixture %s not found, starting empty", path)
        return []
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, list):
        raise ValueError(f"Fixture {path} must contain a JSON array")
    return [model.model_validate(record) for record in raw]


def load_fixtures(directory: Path) -> Store:
    store = Store()
    for attr, (filename, model) in FIXTURES.items():
        collection = getattr(store, attr)
        for record in read_fixture(directory / filename, model):
            if record.id in collection:
                raise ValueError(f"Duplicate id {record.id!r} in {filename}")
            collection[record.id] = record
        logger.info("Loaded %d %s from %s", len(collection), attr, filename)

    orphans = [t.id for t in store.transactions.values() if t.customer_id not in store.customers]
    if orphans:
        raise ValueError(f"Transactions reference unknown customers: {', '.join(orphans)}")

    orphans = [m.id for m in store.menu_items.values() if m.recipe_id not in store.recipes]
    if orphans:
        raise ValueError(f"Menu items reference unknown recipes: {', '.join(orphans)}")

    ledger = LoyaltyLedger(store)
    for customer in store.customers.values():
        ledger.reconcile(customer)
    for recipe in list(store.recipes.values()):
        recost_recipe(store, recipe)
    return store
