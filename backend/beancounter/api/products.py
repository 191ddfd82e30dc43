"""Product catalog endpoints (read-only, seeded from fixtures)."""

from fastapi import APIRouter, Depends, HTTPException, status

from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.schemas.product import ProductListResponse, ProductResponse

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    search: str | None = None,
    store: Store = Depends(get_store),
):
    """List products, optionally filtered by category or name."""
    items = list(store.products.values())
    categories = sorted({p.category for p in items})

    if category:
        items = [p for p in items if p.category.lower() == category.lower()]
    if search:
        needle = search.lower()
        items = [p for p in items if needle in p.name.lower()]

    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in items],
        total=len(items),
        categories=categories,
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, store: Store = Depends(get_store)):
    product = store.products.get(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return ProductResponse.model_validate(product)
