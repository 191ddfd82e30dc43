"""Domain error taxonomy.

Services raise these; the HTTP layer maps them onto status codes in
``beancounter.main``. None of them is fatal: every error is reported to the
caller as a message plus a list of field-level problems.
"""

from pydantic import BaseModel


class FieldError(BaseModel):
    field: str
    message: str


class BeanCounterError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str, errors: list[FieldError] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: list[FieldError] = errors or []


class ValidationError(BeanCounterError):
    """Missing or malformed input, reported per field."""

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        super().__init__(message, errors)


class NotFoundError(BeanCounterError):
    pass


class LineItemNotFound(NotFoundError):
    def __init__(self, line_id: str):
        super().__init__(f"Line item not found: {line_id}")
        self.line_id = line_id


class DomainInvariantError(BeanCounterError):
    """A request that would break a ledger or order invariant."""


class InsufficientPoints(DomainInvariantError):
    def __init__(self, customer_id: str, balance: int, delta: int):
        super().__init__(
            f"Insufficient loyalty points. Customer has {balance}, change of {delta} would leave {balance + delta}",
            [FieldError(field="points_redeemed", message="Points balance cannot go negative")],
        )
        self.customer_id = customer_id
        self.balance = balance
        self.delta = delta


class InsufficientStock(DomainInvariantError):
    def __init__(self, inventory_id: str, current, requested):
        super().__init__(
            f"Insufficient stock. Current: {current}, requested: {requested}",
            [FieldError(field="quantity", message="Stock level cannot go negative")],
        )
        self.inventory_id = inventory_id


class OrderClosed(DomainInvariantError):
    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} is already completed")
        self.order_id = order_id
