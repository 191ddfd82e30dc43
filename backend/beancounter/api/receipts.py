"""Receipt generation endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status, Response

from beancounter.core.config import settings
from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.models import OrderStatus
from beancounter.services.receipt import (
    ReceiptData,
    ReceiptLine,
    format_receipt_text,
    generate_receipt_lines,
    receipt_for_order,
)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("/{order_id}/data", response_model=ReceiptData)
async def get_receipt_data(order_id: str, store: Store = Depends(get_store)):
    """Get receipt data for a completed order."""
    order = store.orders.get(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )

    if order.status != OrderStatus.COMPLETED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot print receipt for order with status: {order.status.value}",
        )

    return receipt_for_order(
        store,
        order,
        shop_name=settings.SHOP_NAME,
        shop_address=settings.SHOP_ADDRESS,
        shop_phone=settings.SHOP_PHONE,
    )


@router.get("/{order_id}/preview", response_model=list[ReceiptLine])
async def get_receipt_preview(order_id: str, store: Store = Depends(get_store)):
    """Get formatted receipt lines for preview."""
    receipt_data = await get_receipt_data(order_id, store)
    return generate_receipt_lines(receipt_data)


@router.get("/{order_id}/text", response_class=Response)
async def get_receipt_text(order_id: str, store: Store = Depends(get_store)):
    """Get plain text receipt."""
    receipt_data = await get_receipt_data(order_id, store)
    text = format_receipt_text(receipt_data)
    return Response(content=text, media_type="text/plain; charset=utf-8")
