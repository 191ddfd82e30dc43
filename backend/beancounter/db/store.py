"""In-memory store owning every collection of the shop.

One ``Store`` instance is created per app and handed to endpoints through
``beancounter.core.deps.get_store``. Collections are plain dicts keyed by id
(insertion ordered). Ledger mutations on a customer's balance go through
``customer_lock`` so that concurrent record/delete calls on the same customer
cannot interleave.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from datetime import datetime

from beancounter.models import (
    Customer,
    CustomerFeedback,
    CustomerTransaction,
    InventoryItem,
    InventoryTransaction,
    MenuItem,
    Order,
    Product,
    Recipe,
    Shift,
    Staff,
    Supplier,
)
from beancounter.models.mixins import utcnow


class Store:
    def __init__(self) -> None:
        self.products: dict[str, Product] = {}
        self.customers: dict[str, Customer] = {}
        self.transactions: dict[str, CustomerTransaction] = {}
        self.feedback: dict[str, CustomerFeedback] = {}
        self.staff: dict[str, Staff] = {}
        self.shifts: dict[str, Shift] = {}
        self.inventory: dict[str, InventoryItem] = {}
        self.inventory_transactions: dict[str, InventoryTransaction] = {}
        self.suppliers: dict[str, Supplier] = {}
        self.recipes: dict[str, Recipe] = {}
        self.menu_items: dict[str, MenuItem] = {}
        self.orders: dict[str, Order] = {}

        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()
        self._order_seq = 0

    # ── Locking ──────────────────────────────────────

    @contextmanager
    def customer_lock(self, customer_id: str) -> Iterator[None]:
        """Serialize balance mutations for one customer."""
        with self._locks_guard:
            lock = self._locks.setdefault(customer_id, threading.RLock())
        with lock:
            yield

    @contextmanager
    def inventory_lock(self, inventory_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(f"inventory:{inventory_id}", threading.RLock())
        with lock:
            yield

    @contextmanager
    def inventory_locks(self, *inventory_ids: str) -> Iterator[None]:
        """Hold several item locks, always taken in id order."""
        with ExitStack() as stack:
            for inventory_id in sorted(set(inventory_ids)):
                stack.enter_context(self.inventory_lock(inventory_id))
            yield

    # ── Queries ──────────────────────────────────────

    def transactions_for(self, customer_id: str) -> list[CustomerTransaction]:
        return [t for t in self.transactions.values() if t.customer_id == customer_id]

    def feedback_for(self, customer_id: str) -> list[CustomerFeedback]:
        return [f for f in self.feedback.values() if f.customer_id == customer_id]

    def shifts_for(self, staff_id: str) -> list[Shift]:
        return [s for s in self.shifts.values() if s.staff_id == staff_id]

    def transactions_for_item(self, inventory_id: str) -> list[InventoryTransaction]:
        return [t for t in self.inventory_transactions.values() if t.inventory_id == inventory_id]

    def recipes_using(self, inventory_id: str) -> list[Recipe]:
        return [r for r in self.recipes.values() if r.uses(inventory_id)]

    def menu_items_for(self, recipe_id: str) -> list[MenuItem]:
        return [m for m in self.menu_items.values() if m.recipe_id == recipe_id]

    # ── Orders ───────────────────────────────────────

    def next_order_number(self, now: datetime | None = None) -> str:
        """ORD-YYYYMMDD-NNNN, sequence unique per store instance."""
        self._order_seq += 1
        stamp = (now or utcnow()).strftime("%Y%m%d")
        return f"ORD-{stamp}-{self._order_seq:04d}"

    def __repr__(self) -> str:
        return (
            f"<Store customers={len(self.customers)} transactions={len(self.transactions)} "
            f"orders={len(self.orders)} inventory={len(self.inventory)}>"
        )
