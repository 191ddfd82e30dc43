"""POS order schemas for API request/response."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from beancounter.models import LineOptions, Milk, Order, OrderStatus, OrderTotals, PaymentMethod, Size


class LineOptionsIn(BaseModel):
    size: Size = Size.MEDIUM
    milk: Milk = Milk.WHOLE
    extras: list[str] = Field(default_factory=list)

    def to_options(self) -> LineOptions:
        return LineOptions(size=self.size, milk=self.milk, extras=frozenset(e.strip() for e in self.extras if e.strip()))


class OrderCreate(BaseModel):
    customer_id: str | None = None


class OrderUpdate(BaseModel):
    customer_id: str | None = None
    payment_method: PaymentMethod | None = None


class AddItemRequest(BaseModel):
    product_id: str
    options: LineOptionsIn | None = None


class QuantityUpdate(BaseModel):
    delta: int = Field(..., description="Change in quantity; reaching zero removes the line")


class CustomizationRequest(LineOptionsIn):
    pass


class LineOptionsResponse(BaseModel):
    size: Size
    milk: Milk
    extras: list[str]


class LineItemResponse(BaseModel):
    id: str
    product_id: str
    name: str
    base_price: Decimal
    unit_price: Decimal
    quantity: int
    options: LineOptionsResponse
    line_total: Decimal


class OrderResponse(BaseModel):
    id: str
    order_number: str
    status: OrderStatus
    customer_id: str | None
    payment_method: PaymentMethod
    lines: list[LineItemResponse]
    subtotal: Decimal
    tax_rate: Decimal
    tax: Decimal
    total: Decimal
    created_at: datetime
    completed_at: datetime | None

    @classmethod
    def from_order(cls, order: Order, totals: OrderTotals) -> "OrderResponse":
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            customer_id=order.customer_id,
            payment_method=order.payment_method,
            lines=[
                LineItemResponse(
                    id=line.id,
                    product_id=line.product_id,
                    name=line.name,
                    base_price=line.base_price,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    options=LineOptionsResponse(
                        size=line.options.size,
                        milk=line.options.milk,
                        extras=sorted(line.options.extras),
                    ),
                    line_total=line.line_total,
                )
                for line in order.lines
            ],
            subtotal=totals.subtotal,
            tax_rate=totals.tax_rate,
            tax=totals.tax,
            total=totals.total,
            created_at=order.created_at,
            completed_at=order.completed_at,
        )


class CheckoutResponse(BaseModel):
    order: OrderResponse
    transaction_id: str | None = None
    points_earned: int | None = None
    receipt: str


class OrderListResponse(BaseModel):
    items: list[OrderResponse]
    total: int
    page: int
    size: int
