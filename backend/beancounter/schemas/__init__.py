from beancounter.schemas.common import ErrorResponse, PHONE_PATTERN
from beancounter.schemas.product import ProductResponse, ProductListResponse
from beancounter.schemas.order import (
    AddItemRequest, CheckoutResponse, CustomizationRequest, OrderCreate, OrderResponse,
    OrderListResponse, OrderUpdate, QuantityUpdate,
)
from beancounter.schemas.customer import (
    CustomerCreate, CustomerUpdate, CustomerResponse, CustomerListResponse,
    TransactionResponse, TransactionListResponse, ChangeTypeRequest, DraftValidationResponse,
    FeedbackCreate, FeedbackUpdate, FeedbackResolve, FeedbackResponse, FeedbackListResponse,
)
from beancounter.schemas.staff import (
    StaffCreate, StaffUpdate, StaffResponse, StaffListResponse, ShiftUpdate, ShiftResponse,
    ShiftListResponse,
)
from beancounter.schemas.inventory import (
    InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse, InventoryListResponse,
    LowStockResponse, InventoryTransactionResponse, InventoryTransactionListResponse,
)
from beancounter.schemas.supplier import (
    SupplierCreate, SupplierUpdate, SupplierResponse, SupplierListResponse, SupplierInventoryResponse,
)
from beancounter.schemas.recipe import (
    RecipeUpdate, RecipeResponse, RecipeListResponse, MenuItemUpdate, MenuItemResponse, MenuItemListResponse,
)
from beancounter.schemas.report import (
    DailySalesItem, SalesReport, ProductPerformance, ProductPerformanceReport, PaymentMethodStat,
    PaymentMethodReport,
)

__all__ = [
    "ErrorResponse", "PHONE_PATTERN",
    "ProductResponse", "ProductListResponse",
    "AddItemRequest", "CheckoutResponse", "CustomizationRequest", "OrderCreate", "OrderResponse",
    "OrderListResponse", "OrderUpdate", "QuantityUpdate",
    "CustomerCreate", "CustomerUpdate", "CustomerResponse", "CustomerListResponse",
    "TransactionResponse", "TransactionListResponse", "ChangeTypeRequest", "DraftValidationResponse",
    "FeedbackCreate", "FeedbackUpdate", "FeedbackResolve", "FeedbackResponse", "FeedbackListResponse",
    "StaffCreate", "StaffUpdate", "StaffResponse", "StaffListResponse", "ShiftUpdate", "ShiftResponse",
    "ShiftListResponse",
    "InventoryItemCreate", "InventoryItemUpdate", "InventoryItemResponse", "InventoryListResponse",
    "LowStockResponse", "InventoryTransactionResponse", "InventoryTransactionListResponse",
    "SupplierCreate", "SupplierUpdate", "SupplierResponse", "SupplierListResponse", "SupplierInventoryResponse",
    "RecipeUpdate", "RecipeResponse", "RecipeListResponse", "MenuItemUpdate", "MenuItemResponse",
    "MenuItemListResponse",
    "DailySalesItem", "SalesReport", "ProductPerformance", "ProductPerformanceReport", "PaymentMethodStat",
    "PaymentMethodReport",
]
