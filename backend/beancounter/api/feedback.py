"""Customer feedback endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.models import CustomerFeedback, FeedbackCategory
from beancounter.models.mixins import new_id
from beancounter.schemas.customer import (
    FeedbackCreate,
    FeedbackListResponse,
    FeedbackResolve,
    FeedbackResponse,
    FeedbackUpdate,
)

router = APIRouter(prefix="/feedback", tags=["feedback"])


def _get_feedback(store: Store, feedback_id: str) -> CustomerFeedback:
    feedback = store.feedback.get(feedback_id)
    if not feedback:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Feedback not found",
        )
    return feedback


@router.get("", response_model=FeedbackListResponse)
async def list_feedback(
    customer_id: str | None = None,
    category: FeedbackCategory | None = None,
    resolved: bool | None = None,
    store: Store = Depends(get_store),
):
    """List feedback, newest first."""
    items = list(store.feedback.values())
    if customer_id:
        items = [f for f in items if f.customer_id == customer_id]
    if category:
        items = [f for f in items if f.category == category]
    if resolved is not None:
        items = [f for f in items if f.resolved == resolved]

    items.sort(key=lambda f: f.date, reverse=True)
    return FeedbackListResponse(
        items=[FeedbackResponse.model_validate(f) for f in items],
        total=len(items),
    )


@router.get("/{feedback_id}", response_model=FeedbackResponse)
async def get_feedback(feedback_id: str, store: Store = Depends(get_store)):
    return FeedbackResponse.model_validate(_get_feedback(store, feedback_id))


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def create_feedback(body: FeedbackCreate, store: Store = Depends(get_store)):
    if body.customer_id not in store.customers:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer not found",
        )

    feedback = CustomerFeedback(id=new_id("feedback"), **body.model_dump())
    store.feedback[feedback.id] = feedback
    return FeedbackResponse.model_validate(feedback)


@router.patch("/{feedback_id}", response_model=FeedbackResponse)
async def update_feedback(feedback_id: str, body: FeedbackUpdate, store: Store = Depends(get_store)):
    feedback = _get_feedback(store, feedback_id)
    feedback.apply_changes(body.model_dump(exclude_unset=True))
    return FeedbackResponse.model_validate(feedback)


@router.post("/{feedback_id}/resolve", response_model=FeedbackResponse)
async def resolve_feedback(feedback_id: str, body: FeedbackResolve, store: Store = Depends(get_store)):
    """Mark feedback resolved, optionally recording the shop's response."""
    feedback = _get_feedback(store, feedback_id)
    feedback.resolved = True
    if body.response is not None:
        feedback.response = body.response
    return FeedbackResponse.model_validate(feedback)


@router.delete("/{feedback_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feedback(feedback_id: str, store: Store = Depends(get_store)):
    feedback = _get_feedback(store, feedback_id)
    del store.feedback[feedback.id]
