import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from beancounter.api import (
    customers,
    feedback,
    inventory,
    orders,
    products,
    receipts,
    recipes,
    reports,
    staff,
    suppliers,
    transactions,
)
from beancounter.core.config import settings
from beancounter.core.errors import (
    BeanCounterError,
    DomainInvariantError,
    FieldError,
    NotFoundError,
    ValidationError,
)
from beancounter.db.seed import load_fixtures
from beancounter.db.store import Store
from beancounter.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[BeanCounterError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DomainInvariantError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def _status_for(exc: BeanCounterError) -> int:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def _domain_error_handler(request: Request, exc: BeanCounterError):
    code = _status_for(exc)
    logger.info("%s %s rejected (%d): %s", request.method, request.url.path, code, exc.message)
    return JSONResponse(
        status_code=code,
        content=ErrorResponse(detail=exc.message, errors=exc.errors).model_dump(),
    )


async def _record_validation_handler(request: Request, exc: PydanticValidationError):
    """Assignments that a stored record refuses, e.g. a required field set to null."""
    errors = [
        FieldError(field=".".join(str(part) for part in err["loc"]) or "__root__", message=err["msg"])
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(detail="Validation failed", errors=errors).model_dump(),
    )


def create_app(store: Store | None = None) -> FastAPI:
    """Build the API. Without an injected ``store`` one is seeded from fixtures at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "store", None) is None:
            if settings.SEED_ON_STARTUP:
                app.state.store = load_fixtures(settings.FIXTURES_DIR)
                logger.info("Seeded store from %s: %r", settings.FIXTURES_DIR, app.state.store)
            else:
                app.state.store = Store()
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=f"Point of sale, loyalty and back office for {settings.SHOP_NAME}",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BeanCounterError, _domain_error_handler)
    app.add_exception_handler(PydanticValidationError, _record_validation_handler)

    # Routers
    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(receipts.router)
    app.include_router(customers.router)
    app.include_router(transactions.router)
    app.include_router(feedback.router)
    app.include_router(staff.router)
    app.include_router(staff.shifts_router)
    app.include_router(inventory.router)
    app.include_router(suppliers.router)
    app.include_router(recipes.router)
    app.include_router(recipes.menu_router)
    app.include_router(reports.router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": "0.1.0"}

    return app


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
