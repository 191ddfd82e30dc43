"""Sales and product reports over completed orders.

Orders count on the date they were completed. Sales figures use order totals
(tax included); product figures use line totals (before tax). A product's
cost is known when a menu item links it to a costed recipe.
"""

import datetime as dt
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal

from beancounter.db.store import Store
from beancounter.models import Order, OrderStatus
from beancounter.schemas.report import (
    DailySalesItem,
    PaymentMethodReport,
    PaymentMethodStat,
    ProductPerformance,
    ProductPerformanceReport,
    SalesReport,
)

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def completed_orders(store: Store, start_date: dt.date, end_date: dt.date) -> list[Order]:
    return [
        o for o in store.orders.values()
        if o.status == OrderStatus.COMPLETED
        and o.totals is not None
        and start_date <= o.completed_at.date() <= end_date
    ]


def sales_report(store: Store, start_date: dt.date, end_date: dt.date) -> SalesReport:
    by_day: dict[dt.date, list[Order]] = defaultdict(list)
    for order in completed_orders(store, start_date, end_date):
        by_day[order.completed_at.date()].append(order)

    items = []
    for day in sorted(by_day):
        revenue = sum((o.totals.total for o in by_day[day]), Decimal("0.00"))
        items.append(
            DailySalesItem(
                date=day,
                total_orders=len(by_day[day]),
                total_revenue=_cents(revenue),
                avg_order_value=_cents(revenue / len(by_day[day])),
            )
        )

    total_revenue = sum((i.total_revenue for i in items), Decimal("0.00"))
    total_orders = sum(i.total_orders for i in items)
    return SalesReport(
        items=items,
        period_start=start_date,
        period_end=end_date,
        total_revenue=total_revenue,
        total_orders=total_orders,
        avg_order_value=_cents(total_revenue / total_orders) if total_orders else Decimal("0.00"),
        best_day=max(items, key=lambda i: i.total_revenue, default=None),
        worst_day=min(items, key=lambda i: i.total_revenue, default=None),
    )


def _product_totals(orders: list[Order]) -> dict[str, tuple[str, int, Decimal]]:
    """product_id -> (name, quantity, revenue)"""
    totals: dict[str, tuple[str, int, Decimal]] = {}
    for order in orders:
        for line in order.lines:
            name, quantity, revenue = totals.get(line.product_id, (line.name, 0, Decimal("0.00")))
            totals[line.product_id] = (name, quantity + line.quantity, revenue + line.line_total)
    return totals


def _unit_costs(store: Store) -> dict[str, Decimal]:
    costs = {}
    for menu_item in store.menu_items.values():
        recipe = store.recipes.get(menu_item.recipe_id)
        if menu_item.product_id and recipe:
            costs[menu_item.product_id] = recipe.cost_per_serving
    return costs


def product_performance(
    store: Store,
    start_date: dt.date,
    end_date: dt.date,
    category: str | None = None,
) -> ProductPerformanceReport:
    """Quantity, revenue and profit per product, best sellers first."""
    period = end_date - start_date + dt.timedelta(days=1)
    current = _product_totals(completed_orders(store, start_date, end_date))
    previous = _product_totals(completed_orders(store, start_date - period, start_date - dt.timedelta(days=1)))
    unit_costs = _unit_costs(store)

    items = []
    for product_id, (name, quantity, revenue) in current.items():
        product = store.products.get(product_id)
        product_category = product.category if product else "Uncategorized"
        if category and product_category.lower() != category.lower():
            continue

        cost = profit = growth = None
        if product_id in unit_costs:
            cost = _cents(unit_costs[product_id] * quantity)
            profit = _cents(revenue) - cost
        previous_revenue = previous.get(product_id, (name, 0, Decimal("0.00")))[2]
        if previous_revenue > 0:
            growth = ((revenue - previous_revenue) / previous_revenue * 100).quantize(TENTHS, rounding=ROUND_HALF_UP)

        items.append(
            ProductPerformance(
                product_id=product_id,
                product_name=product.name if product else name,
                category=product_category,
                quantity=quantity,
                revenue=_cents(revenue),
                cost=cost,
                profit=profit,
                growth=growth,
            )
        )

    items.sort(key=lambda i: (-i.quantity, i.product_name))
    return ProductPerformanceReport(
        items=items,
        period_start=start_date,
        period_end=end_date,
        total_quantity=sum(i.quantity for i in items),
        total_revenue=sum((i.revenue for i in items), Decimal("0.00")),
        total_profit=sum((i.profit for i in items if i.profit is not None), Decimal("0.00")),
    )


def payment_method_report(store: Store, start_date: dt.date, end_date: dt.date) -> PaymentMethodReport:
    grouped: dict = defaultdict(list)
    for order in completed_orders(store, start_date, end_date):
        grouped[order.payment_method].append(order)

    total_revenue = _cents(
        sum((o.totals.total for orders in grouped.values() for o in orders), Decimal("0.00"))
    )
    items = []
    for method, orders in grouped.items():
        revenue = _cents(sum((o.totals.total for o in orders), Decimal("0.00")))
        items.append(
            PaymentMethodStat(
                payment_method=method,
                total_orders=len(orders),
                total_revenue=revenue,
                percentage=_cents(revenue / total_revenue * 100) if total_revenue > 0 else Decimal("0.00"),
            )
        )

    items.sort(key=lambda i: i.total_revenue, reverse=True)
    return PaymentMethodReport(
        items=items,
        period_start=start_date,
        period_end=end_date,
        total_revenue=total_revenue,
    )
