"""Report schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel

from beancounter.models import PaymentMethod


class DailySalesItem(BaseModel):
    date: dt.date
    total_orders: int
    total_revenue: Decimal
    avg_order_value: Decimal


class SalesReport(BaseModel):
    items: list[DailySalesItem]
    period_start: dt.date
    period_end: dt.date
    total_revenue: Decimal
    total_orders: int
    avg_order_value: Decimal
    best_day: DailySalesItem | None = None
    worst_day: DailySalesItem | None = None


class ProductPerformance(BaseModel):
    product_id: str
    product_name: str
    category: str
    quantity: int
    revenue: Decimal
    # Known only for products sold as a costed menu item
    cost: Decimal | None = None
    profit: Decimal | None = None
    # Revenue change against the previous period of the same length, in percent
    growth: Decimal | None = None


class ProductPerformanceReport(BaseModel):
    items: list[ProductPerformance]
    period_start: dt.date
    period_end: dt.date
    total_quantity: int
    total_revenue: Decimal
    total_profit: Decimal


class PaymentMethodStat(BaseModel):
    payment_method: PaymentMethod
    total_orders: int
    total_revenue: Decimal
    percentage: Decimal


class PaymentMethodReport(BaseModel):
    items: list[PaymentMethodStat]
    period_start: dt.date
    period_end: dt.date
    total_revenue: Decimal
