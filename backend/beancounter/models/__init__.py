"""Domain records for Bean Counter ERP."""

from beancounter.models.product import Product
from beancounter.models.order import (
    LineItem,
    LineOptions,
    Milk,
    Order,
    OrderStatus,
    OrderTotals,
    PaymentMethod,
    Size,
)
from beancounter.models.customer import (
    Customer,
    CustomerFeedback,
    CustomerPreferences,
    CustomerStatus,
    CustomerTransaction,
    FeedbackCategory,
    TransactionDraft,
    TransactionType,
)
from beancounter.models.staff import Staff, Shift, StaffStatus, ShiftStatus
from beancounter.models.inventory import (
    InventoryItem,
    InventoryTransaction,
    InventoryTransactionType,
)
from beancounter.models.supplier import Supplier
from beancounter.models.recipe import MenuItem, NutritionalInfo, Recipe, RecipeIngredient

__all__ = [
    "Product",
    "LineItem",
    "LineOptions",
    "Milk",
    "Order",
    "OrderStatus",
    "OrderTotals",
    "PaymentMethod",
    "Size",
    "Customer",
    "CustomerFeedback",
    "CustomerPreferences",
    "CustomerStatus",
    "CustomerTransaction",
    "FeedbackCategory",
    "TransactionDraft",
    "TransactionType",
    "Staff",
    "Shift",
    "StaffStatus",
    "ShiftStatus",
    "InventoryItem",
    "InventoryTransaction",
    "InventoryTransactionType",
    "Supplier",
    "MenuItem",
    "NutritionalInfo",
    "Recipe",
    "RecipeIngredient",
]
