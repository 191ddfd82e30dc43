"""Cart/Order engine for the POS screen.

Operations mutate an open ``Order`` in place and return it. Money is kept as
exact ``Decimal`` values; nothing is rounded until a receipt or a loyalty
transaction needs cents.

Same-product lines are merged only when their options are identical; any
other add creates a separate line.
"""

import logging
from decimal import Decimal

from beancounter.core.errors import (
    DomainInvariantError,
    FieldError,
    LineItemNotFound,
    OrderClosed,
    ValidationError,
)
from beancounter.models import (
    LineItem,
    LineOptions,
    Milk,
    Order,
    OrderStatus,
    OrderTotals,
    PaymentMethod,
    Product,
    Size,
)
from beancounter.models.mixins import utcnow

logger = logging.getLogger(__name__)

SIZE_ADJUSTMENTS: dict[Size, Decimal] = {
    Size.SMALL: Decimal("-0.50"),
    Size.MEDIUM: Decimal("0.00"),
    Size.LARGE: Decimal("0.75"),
}
PREMIUM_MILKS = frozenset({Milk.OAT, Milk.ALMOND})
PREMIUM_MILK_ADJUSTMENT = Decimal("0.75")
EXTRA_PRICE = Decimal("0.50")


def price_for_options(base_price: Decimal, options: LineOptions) -> Decimal:
    """Unit price for a base price plus size, milk and extras adjustments."""
    price = base_price + SIZE_ADJUSTMENTS[options.size]
    if options.milk in PREMIUM_MILKS:
        price += PREMIUM_MILK_ADJUSTMENT
    price += EXTRA_PRICE * len(options.extras)
    return price


def _ensure_open(order: Order) -> None:
    if order.status != OrderStatus.OPEN:
        raise OrderClosed(order.id)


def _find_line(order: Order, line_id: str) -> LineItem:
    for line in order.lines:
        if line.id == line_id:
            return line
    raise LineItemNotFound(line_id)


def _priced(base_price: Decimal, options: LineOptions) -> Decimal:
    price = price_for_options(base_price, options)
    if price < 0:
        raise DomainInvariantError(
            f"Options {options.describe()} would make the unit price negative",
            [FieldError(field="size", message="Unit price cannot be negative")],
        )
    return price


def add_item(order: Order, product: Product, options: LineOptions | None = None) -> Order:
    _ensure_open(order)
    options = options or LineOptions()

    for line in order.lines:
        if line.product_id == product.id and line.options == options:
            line.quantity += 1
            return order

    order.lines.append(
        LineItem(
            product_id=product.id,
            name=product.name,
            base_price=product.price,
            unit_price=_priced(product.price, options),
            quantity=1,
            options=options,
        )
    )
    return order


def update_quantity(order: Order, line_id: str, delta: int) -> Order:
    """Shift a line's quantity; a result of zero or less drops the line."""
    _ensure_open(order)
    line = _find_line(order, line_id)
    new_quantity = line.quantity + delta
    if new_quantity <= 0:
        order.lines.remove(line)
    else:
        line.quantity = new_quantity
    return order


def apply_customization(
    order: Order,
    line_id: str,
    size: Size,
    milk: Milk,
    extras: set[str] | frozenset[str] | list[str],
) -> Order:
    """Re-price a line from its immutable base price and the new options."""
    _ensure_open(order)
    line = _find_line(order, line_id)
    options = LineOptions(size=size, milk=milk, extras=frozenset(e.strip() for e in extras if e.strip()))
    line.unit_price = _priced(line.base_price, options)
    line.options = options
    return order


def remove_item(order: Order, line_id: str) -> Order:
    _ensure_open(order)
    order.lines.remove(_find_line(order, line_id))
    return order


def compute_totals(order: Order, tax_rate: Decimal) -> OrderTotals:
    subtotal = sum((line.line_total for line in order.lines), Decimal("0.00"))
    tax = subtotal * tax_rate
    return OrderTotals(subtotal=subtotal, tax_rate=tax_rate, tax=tax, total=subtotal + tax)


def clear(order: Order) -> Order:
    _ensure_open(order)
    order.lines.clear()
    order.customer_id = None
    order.payment_method = PaymentMethod.NONE
    return order


def attach_customer(order: Order, customer_id: str | None) -> Order:
    _ensure_open(order)
    order.customer_id = customer_id
    return order


def set_payment_method(order: Order, payment_method: PaymentMethod) -> Order:
    _ensure_open(order)
    order.payment_method = payment_method
    return order


def complete_order(order: Order, tax_rate: Decimal) -> OrderTotals:
    """Close an order, freezing its totals."""
    _ensure_open(order)
    errors = []
    if order.payment_method == PaymentMethod.NONE:
        errors.append(FieldError(field="payment_method", message="Please select a payment method"))
    if not order.lines:
        errors.append(FieldError(field="lines", message="Order is empty"))
    if errors:
        raise ValidationError(errors, message="Order cannot be completed")

    totals = compute_totals(order, tax_rate)
    order.totals = totals
    order.status = OrderStatus.COMPLETED
    order.completed_at = utcnow()
    logger.info("Order %s completed: total=%s payment=%s", order.order_number, totals.total, order.payment_method.value)
    return totals
