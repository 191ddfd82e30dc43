"""Order completion: closes the order and credits the customer's loyalty."""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from beancounter.db.store import Store
from beancounter.models import CustomerTransaction, Order, OrderTotals, TransactionDraft, TransactionType
from beancounter.services import cart
from beancounter.services.loyalty import LoyaltyLedger

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult:
    order: Order
    totals: OrderTotals
    transaction: CustomerTransaction | None = None


def checkout(store: Store, order: Order, tax_rate: Decimal) -> CheckoutResult:
    """Complete ``order``; with a customer attached, record a purchase for it."""
    customer = store.customers.get(order.customer_id) if order.customer_id else None
    totals = cart.complete_order(order, tax_rate)

    transaction = None
    amount = totals.total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if customer is not None and amount > 0:
        draft = TransactionDraft(
            customer_id=customer.id,
            date=order.completed_at.date(),
            type=TransactionType.PURCHASE,
            order_id=order.id,
            amount=amount,
            notes=f"POS order {order.order_number}",
        )
        transaction = LoyaltyLedger(store).record_transaction(customer, draft)
    elif order.customer_id and customer is None:
        logger.warning("Order %s references unknown customer %s; no points recorded", order.id, order.customer_id)

    return CheckoutResult(order=order, totals=totals, transaction=transaction)
