"""Loyalty transaction endpoints.

Recording, editing and deleting all go through the loyalty ledger so the
customer's points balance always follows their history.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.deps import get_loyalty_ledger, get_store
from beancounter.db.store import Store
from beancounter.models import TransactionDraft, TransactionType
from beancounter.schemas.customer import (
    ChangeTypeRequest,
    DraftValidationResponse,
    TransactionListResponse,
    TransactionResponse,
)
from beancounter.services import transaction_policy
from beancounter.services.loyalty import LoyaltyLedger

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    customer_id: str | None = None,
    type: TransactionType | None = None,
    store: Store = Depends(get_store),
):
    """List transactions, newest first, optionally by customer and type."""
    items = list(store.transactions.values())
    if customer_id:
        items = [t for t in items if t.customer_id == customer_id]
    if type:
        items = [t for t in items if t.type == type]

    items.sort(key=lambda t: t.date, reverse=True)
    offset = (page - 1) * size

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in items[offset:offset + size]],
        total=len(items),
        page=page,
        size=size,
    )


@router.post("/validate", response_model=DraftValidationResponse)
async def validate_transaction(body: TransactionDraft):
    """Apply the type rules to a draft and report field errors without recording."""
    draft = transaction_policy.apply_type_rules(body)
    errors = transaction_policy.validate(draft)
    return DraftValidationResponse(valid=not errors, draft=draft, errors=errors)


@router.post("/change-type", response_model=TransactionDraft)
async def change_transaction_type(body: ChangeTypeRequest):
    """Re-derive a draft after the user switches its type."""
    return transaction_policy.change_type(body.draft, body.type)


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    ledger: LoyaltyLedger = Depends(get_loyalty_ledger),
):
    return TransactionResponse.model_validate(ledger.get_transaction(transaction_id))


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def record_transaction(
    body: TransactionDraft,
    store: Store = Depends(get_store),
    ledger: LoyaltyLedger = Depends(get_loyalty_ledger),
):
    """Record a transaction and apply its points to the customer."""
    if not body.customer_id:
        # Reports every field problem at once, customer included.
        transaction_policy.prepare(body)

    customer = store.customers.get(body.customer_id)
    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    transaction = ledger.record_transaction(customer, body)
    return TransactionResponse.model_validate(transaction)


@router.put("/{transaction_id}", response_model=TransactionResponse)
async def edit_transaction(
    transaction_id: str,
    body: TransactionDraft,
    ledger: LoyaltyLedger = Depends(get_loyalty_ledger),
):
    """Replace a recorded transaction; its old point effect is reversed first."""
    transaction = ledger.edit_transaction(transaction_id, body)
    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: str,
    ledger: LoyaltyLedger = Depends(get_loyalty_ledger),
):
    """Delete a transaction and reverse its points."""
    ledger.delete_transaction(transaction_id)
