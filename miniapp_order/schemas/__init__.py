"""Schema exports."""

from miniapp_order.schemas.api import ApiResponse
from miniapp_order.schemas.history import HistoryOrder, HistoryOrderStatus
from miniapp_order.schemas.menu import Cart, CartLine, MenuItem, MenuItemStatus
from miniapp_order.schemas.order import (
    ConfirmedOrder,
    CreateOrderResult,
    OrderDraft,
    OrderForm,
    OrderItemPayload,
    OrderPayload,
    OrderTotals,
    ValidationResult,
)
from miniapp_order.schemas.session import SessionState, StatusLevel, UserProfile

__all__ = [
    "ApiResponse",
    "HistoryOrder",
    "HistoryOrderStatus",
    "Cart",
    "CartLine",
    "MenuItem",
    "MenuItemStatus",
    "ConfirmedOrder",
    "CreateOrderResult",
    "OrderDraft",
    "OrderForm",
    "OrderItemPayload",
    "OrderPayload",
    "OrderTotals",
    "ValidationResult",
    "SessionState",
    "StatusLevel",
    "UserProfile",
]
