"""Reporting endpoints over completed orders."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.schemas.report import PaymentMethodReport, ProductPerformanceReport, SalesReport
from beancounter.services import reports

router = APIRouter(prefix="/reports", tags=["reports"])


def _check_period(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must be >= start_date",
        )


@router.get("/sales", response_model=SalesReport)
async def get_sales_report(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    store: Store = Depends(get_store),
):
    """Daily sales with period totals and the best and worst day."""
    _check_period(start_date, end_date)
    return reports.sales_report(store, start_date, end_date)


@router.get("/products", response_model=ProductPerformanceReport)
async def get_product_performance_report(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    category: str | None = None,
    store: Store = Depends(get_store),
):
    """Quantity, revenue, profit and growth per product."""
    _check_period(start_date, end_date)
    return reports.product_performance(store, start_date, end_date, category)


@router.get("/payment-methods", response_model=PaymentMethodReport)
async def get_payment_method_report(
    start_date: date = Query(..., description="Start date (YYYY-MM-DD)"),
    end_date: date = Query(..., description="End date (YYYY-MM-DD)"),
    store: Store = Depends(get_store),
):
    """Get payment method breakdown report."""
    _check_period(start_date, end_date)
    return reports.payment_method_report(store, start_date, end_date)
