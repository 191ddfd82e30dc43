"""Order & LineItem models."""

import enum
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from beancounter.models.mixins import Record, new_id, utcnow


class OrderStatus(str, enum.Enum):
    OPEN = "open"
    COMPLETED = "completed"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    NONE = "none"


class Size(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Milk(str, enum.Enum):
    WHOLE = "whole"
    SKIM = "skim"
    OAT = "oat"
    ALMOND = "almond"
    SOY = "soy"
    COCONUT = "coconut"
    LACTOSE_FREE = "lactose_free"
    NONE = "none"


class LineOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: Size = Size.MEDIUM
    milk: Milk = Milk.WHOLE
    extras: frozenset[str] = frozenset()

    def describe(self) -> str:
        text = f"{self.size.value}, {self.milk.value} milk"
        if self.extras:
            text += ", " + ", ".join(sorted(self.extras))
        return text


class LineItem(Record):
    id: str = Field(default_factory=lambda: new_id("line"))
    product_id: str
    name: str
    base_price: Decimal = Field(..., ge=0, frozen=True)
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    options: LineOptions = Field(default_factory=LineOptions)

    @computed_field
    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def __repr__(self) -> str:
        return f"<LineItem product={self.product_id} qty={self.quantity}>"


class OrderTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    # Rate in force when the totals were taken; receipts print this one.
    tax_rate: Decimal
    tax: Decimal
    total: Decimal


class Order(Record):
    id: str = Field(default_factory=lambda: new_id("order"))
    order_number: str
    status: OrderStatus = OrderStatus.OPEN
    lines: list[LineItem] = Field(default_factory=list)
    customer_id: str | None = None
    payment_method: PaymentMethod = PaymentMethod.NONE
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None
    # Snapshot taken at completion; open orders derive totals on demand.
    totals: OrderTotals | None = None

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN

    def __repr__(self) -> str:
        return f"<Order {self.order_number} lines={len(self.lines)}>"
