"""Receipt generation for completed POS orders."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from pydantic import BaseModel

from beancounter.db.store import Store
from beancounter.models import Customer, Order, TransactionType

RECEIPT_WIDTH = 32
CENTS = Decimal("0.01")


def money(value: Decimal) -> str:
    return f"${value.quantize(CENTS, rounding=ROUND_HALF_UP):,.2f}"


class ReceiptLine(BaseModel):
    """Single line in receipt."""
    text: str
    align: Literal["left", "center", "right"] = "left"
    bold: bool = False


class ReceiptItem(BaseModel):
    name: str
    options: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class ReceiptData(BaseModel):
    """Everything printed on a receipt."""
    # Shop info
    shop_name: str
    shop_address: str | None = None
    shop_phone: str | None = None

    # Order info
    order_number: str
    order_date: datetime
    customer_name: str | None = None

    items: list[ReceiptItem]

    # Totals
    subtotal: Decimal
    tax_rate: Decimal
    tax: Decimal
    total: Decimal
    payment_method: str

    # Loyalty
    points_earned: int | None = None
    points_balance: int | None = None

    footer_message: str = "Thank you for visiting!"


def build_receipt_data(
    order: Order,
    *,
    shop_name: str,
    customer: Customer | None = None,
    points_earned: int | None = None,
    shop_address: str | None = None,
    shop_phone: str | None = None,
) -> ReceiptData:
    """Collect receipt data from a completed order."""
    if order.totals is None:
        raise ValueError(f"Order {order.order_number} has no totals; complete it first")

    return ReceiptData(
        shop_name=shop_name,
        shop_address=shop_address,
        shop_phone=shop_phone,
        order_number=order.order_number,
        order_date=order.completed_at or order.created_at,
        customer_name=customer.name if customer else None,
        items=[
            ReceiptItem(
                name=line.name,
                options=line.options.describe(),
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
            )
            for line in order.lines
        ],
        subtotal=order.totals.subtotal,
        tax_rate=order.totals.tax_rate,
        tax=order.totals.tax,
        total=order.totals.total,
        payment_method=order.payment_method.value,
        points_earned=points_earned,
        points_balance=customer.points if customer else None,
    )


def receipt_for_order(
    store: Store,
    order: Order,
    *,
    shop_name: str,
    shop_address: str | None = None,
    shop_phone: str | None = None,
) -> ReceiptData:
    """Receipt data for a stored order, with the loyalty purchase it earned."""
    customer = store.customers.get(order.customer_id) if order.customer_id else None
    purchase = next(
        (
            t for t in store.transactions.values()
            if t.order_id == order.id and t.type == TransactionType.PURCHASE
        ),
        None,
    )
    return build_receipt_data(
        order,
        shop_name=shop_name,
        customer=customer,
        points_earned=purchase.points_earned if purchase else None,
        shop_address=shop_address,
        shop_phone=shop_phone,
    )


def generate_receipt_lines(receipt_data: ReceiptData) -> list[ReceiptLine]:
    lines: list[ReceiptLine] = [ReceiptLine(text=receipt_data.shop_name, align="center", bold=True)]

    if receipt_data.shop_address:
        lines.append(ReceiptLine(text=receipt_data.shop_address, align="center"))
    if receipt_data.shop_phone:
        lines.append(ReceiptLine(text=f"Tel: {receipt_data.shop_phone}", align="center"))

    lines.append(ReceiptLine(text="=" * RECEIPT_WIDTH, align="center"))
    lines.append(ReceiptLine(text=f"Order: {receipt_data.order_number}", bold=True))
    lines.append(ReceiptLine(text=receipt_data.order_date.strftime("%Y-%m-%d %H:%M:%S")))
    if receipt_data.customer_name:
        lines.append(ReceiptLine(text=f"Customer: {receipt_data.customer_name}"))
    lines.append(ReceiptLine(text="-" * RECEIPT_WIDTH))

    for item in receipt_data.items:
        lines.append(ReceiptLine(text=item.name))
        lines.append(ReceiptLine(text=f"  ({item.options})"))
        lines.append(ReceiptLine(text=f"  {item.quantity} x {money(item.unit_price)} = {money(item.line_total)}"))

    lines.append(ReceiptLine(text="-" * RECEIPT_WIDTH))
    lines.append(ReceiptLine(text=f"Subtotal: {money(receipt_data.subtotal)}", align="right"))
    rate = (receipt_data.tax_rate * 100).normalize()
    lines.append(ReceiptLine(text=f"Tax ({rate:f}%): {money(receipt_data.tax)}", align="right"))
    lines.append(ReceiptLine(text="=" * RECEIPT_WIDTH))
    lines.append(ReceiptLine(text=f"TOTAL: {money(receipt_data.total)}", align="right", bold=True))
    lines.append(ReceiptLine(text=f"Paid by: {receipt_data.payment_method}"))

    if receipt_data.points_earned is not None:
        lines.append(ReceiptLine(text="-" * RECEIPT_WIDTH))
        lines.append(ReceiptLine(text=f"Points earned: {receipt_data.points_earned}"))
        if receipt_data.points_balance is not None:
            lines.append(ReceiptLine(text=f"Points balance: {receipt_data.points_balance}"))

    lines.append(ReceiptLine(text="=" * RECEIPT_WIDTH))
    lines.append(ReceiptLine(text=receipt_data.footer_message, align="center", bold=True))
    return lines


def format_receipt_text(receipt_data: ReceiptData) -> str:
    """Plain text receipt for preview/testing."""
    return "\n".join(line.text for line in generate_receipt_lines(receipt_data))
