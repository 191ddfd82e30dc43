"""Customer management endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.deps import get_loyalty_ledger, get_store
from beancounter.db.store import Store
from beancounter.models import Customer, CustomerStatus
from beancounter.models.mixins import new_id, today
from beancounter.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
    FeedbackListResponse,
    FeedbackResponse,
    PointsReconcileResponse,
    TransactionListResponse,
    TransactionResponse,
)
from beancounter.services.loyalty import LoyaltyLedger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


def _get_customer(store: Store, customer_id: str) -> Customer:
    customer = store.customers.get(customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )
    return customer


def _ensure_unique(store: Store, *, email: str | None, phone: str | None, exclude_id: str | None = None) -> None:
    for other in store.customers.values():
        if other.id == exclude_id:
            continue
        if email and other.email and other.email.lower() == email.lower():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Customer with this email already exists",
            )
        if phone and other.phone == phone:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Customer with this phone already exists",
            )


@router.get("", response_model=CustomerListResponse)
async def list_customers(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    search: str | None = None,
    status_filter: CustomerStatus | None = None,
    store: Store = Depends(get_store),
):
    """List customers with pagination, optional search and status filter."""
    items = list(store.customers.values())

    if search:
        needle = search.lower()
        items = [
            c for c in items
            if needle in c.name.lower()
            or needle in (c.email or "").lower()
            or needle in (c.phone or "")
        ]
    if status_filter:
        items = [c for c in items if c.status == status_filter]

    items.sort(key=lambda c: c.join_date, reverse=True)
    offset = (page - 1) * size

    return CustomerListResponse(
        items=[CustomerResponse.model_validate(c) for c in items[offset:offset + size]],
        total=len(items),
        page=page,
        size=size,
    )


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: str, store: Store = Depends(get_store)):
    """Get a single customer by ID."""
    return CustomerResponse.model_validate(_get_customer(store, customer_id))


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(body: CustomerCreate, store: Store = Depends(get_store)):
    """Create a new customer. Points start at zero; the ledger credits them."""
    _ensure_unique(store, email=body.email, phone=body.phone)

    data = body.model_dump()
    data["join_date"] = data["join_date"] or today()
    customer = Customer(id=new_id("cust"), **data)
    store.customers[customer.id] = customer

    logger.info("Created customer %s (%s)", customer.id, customer.name)
    return CustomerResponse.model_validate(customer)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    body: CustomerUpdate,
    store: Store = Depends(get_store),
):
    """Update profile fields of a customer."""
    customer = _get_customer(store, customer_id)

    update_data = body.model_dump(exclude_unset=True)
    _ensure_unique(
        store,
        email=update_data.get("email"),
        phone=update_data.get("phone"),
        exclude_id=customer.id,
    )

    with store.customer_lock(customer.id):
        customer.apply_changes(update_data)

    return CustomerResponse.model_validate(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: str, store: Store = Depends(get_store)):
    """Delete a customer together with their transactions and feedback."""
    customer = _get_customer(store, customer_id)

    with store.customer_lock(customer.id):
        for transaction in store.transactions_for(customer.id):
            del store.transactions[transaction.id]
        for feedback in store.feedback_for(customer.id):
            del store.feedback[feedback.id]
        del store.customers[customer.id]

    logger.info("Deleted customer %s", customer.id)


@router.get("/{customer_id}/transactions", response_model=TransactionListResponse)
async def list_customer_transactions(
    customer_id: str,
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    store: Store = Depends(get_store),
):
    """Loyalty history of one customer, newest first."""
    customer = _get_customer(store, customer_id)
    items = sorted(store.transactions_for(customer.id), key=lambda t: t.date, reverse=True)
    offset = (page - 1) * size

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in items[offset:offset + size]],
        total=len(items),
        page=page,
        size=size,
    )


@router.get("/{customer_id}/feedback", response_model=FeedbackListResponse)
async def list_customer_feedback(customer_id: str, store: Store = Depends(get_store)):
    customer = _get_customer(store, customer_id)
    items = sorted(store.feedback_for(customer.id), key=lambda f: f.date, reverse=True)
    return FeedbackListResponse(
        items=[FeedbackResponse.model_validate(f) for f in items],
        total=len(items),
    )


@router.post("/{customer_id}/points/reconcile", response_model=PointsReconcileResponse)
async def reconcile_points(
    customer_id: str,
    store: Store = Depends(get_store),
    ledger: LoyaltyLedger = Depends(get_loyalty_ledger),
):
    """Recompute the points balance and total spent from transaction history."""
    customer = _get_customer(store, customer_id)
    drift = ledger.reconcile(customer)
    return PointsReconcileResponse(
        customer_id=customer.id,
        points=customer.points,
        total_spent=customer.total_spent,
        drift=drift,
    )
