"""POS order endpoints: build a cart, customize lines, check out."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.config import settings
from beancounter.core.deps import get_store, get_tax_rate
from beancounter.db.store import Store
from beancounter.models import Order, OrderStatus
from beancounter.schemas.order import (
    AddItemRequest,
    CheckoutResponse,
    CustomizationRequest,
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderUpdate,
    QuantityUpdate,
)
from beancounter.services import cart
from beancounter.services.checkout import checkout
from beancounter.services.receipt import format_receipt_text, receipt_for_order

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _get_order(store: Store, order_id: str) -> Order:
    order = store.orders.get(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )
    return order


def _ensure_customer(store: Store, customer_id: str | None) -> None:
    if customer_id and customer_id not in store.customers:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )


def _to_response(order: Order, tax_rate: Decimal) -> OrderResponse:
    totals = order.totals or cart.compute_totals(order, tax_rate)
    return OrderResponse.from_order(order, totals)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    status_filter: OrderStatus | None = None,
    customer_id: str | None = None,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    """List orders, newest first, with optional filters."""
    orders = list(store.orders.values())
    if status_filter:
        orders = [o for o in orders if o.status == status_filter]
    if customer_id:
        orders = [o for o in orders if o.customer_id == customer_id]
    orders.sort(key=lambda o: o.created_at, reverse=True)

    offset = (page - 1) * size
    return OrderListResponse(
        items=[_to_response(o, tax_rate) for o in orders[offset:offset + size]],
        total=len(orders),
        page=page,
        size=size,
    )


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderCreate,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    """Open a new, empty order."""
    _ensure_customer(store, body.customer_id)
    order = Order(order_number=store.next_order_number(), customer_id=body.customer_id)
    store.orders[order.id] = order
    logger.info("Opened order %s", order.order_number)
    return _to_response(order, tax_rate)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    return _to_response(_get_order(store, order_id), tax_rate)


@router.patch("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    body: OrderUpdate,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    """Attach/detach a customer or choose the payment method."""
    order = _get_order(store, order_id)
    update_data = body.model_dump(exclude_unset=True)

    if "customer_id" in update_data:
        _ensure_customer(store, update_data["customer_id"])
        cart.attach_customer(order, update_data["customer_id"])
    if update_data.get("payment_method") is not None:
        cart.set_payment_method(order, update_data["payment_method"])

    return _to_response(order, tax_rate)


@router.post("/{order_id}/items", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def add_item(
    order_id: str,
    body: AddItemRequest,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    """Add one unit of a product; identical lines are merged."""
    order = _get_order(store, order_id)
    product = store.products.get(body.product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    options = body.options.to_options() if body.options else None
    cart.add_item(order, product, options)
    return _to_response(order, tax_rate)


@router.patch("/{order_id}/items/{line_id}", response_model=OrderResponse)
async def update_quantity(
    order_id: str,
    line_id: str,
    body: QuantityUpdate,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    order = _get_order(store, order_id)
    cart.update_quantity(order, line_id, body.delta)
    return _to_response(order, tax_rate)


@router.put("/{order_id}/items/{line_id}/options", response_model=OrderResponse)
async def customize_item(
    order_id: str,
    line_id: str,
    body: CustomizationRequest,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    """Replace a line's size, milk and extras; the line is re-priced."""
    order = _get_order(store, order_id)
    cart.apply_customization(order, line_id, body.size, body.milk, body.extras)
    return _to_response(order, tax_rate)


@router.delete("/{order_id}/items/{line_id}", response_model=OrderResponse)
async def remove_item(
    order_id: str,
    line_id: str,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    order = _get_order(store, order_id)
    cart.remove_item(order, line_id)
    return _to_response(order, tax_rate)


@router.post("/{order_id}/clear", response_model=OrderResponse)
async def clear_order(
    order_id: str,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    order = _get_order(store, order_id)
    cart.clear(order)
    return _to_response(order, tax_rate)


@router.post("/{order_id}/complete", response_model=CheckoutResponse)
async def complete_order(
    order_id: str,
    store: Store = Depends(get_store),
    tax_rate: Decimal = Depends(get_tax_rate),
):
    """Complete the order, credit loyalty points and return the receipt."""
    order = _get_order(store, order_id)
    result = checkout(store, order, tax_rate)

    receipt = receipt_for_order(
        store,
        order,
        shop_name=settings.SHOP_NAME,
        shop_address=settings.SHOP_ADDRESS,
        shop_phone=settings.SHOP_PHONE,
    )
    return CheckoutResponse(
        order=OrderResponse.from_order(order, result.totals),
        transaction_id=result.transaction.id if result.transaction else None,
        points_earned=receipt.points_earned,
        receipt=format_receipt_text(receipt),
    )
