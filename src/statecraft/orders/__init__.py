"""Order-processing state machine with injected collaborators."""

from __future__ import annotations

from .collaborators import (
    InventoryChecker,
    PaymentGateway,
    ShippingService,
    StaticInventory,
    StaticPaymentGateway,
    StaticShipping,
)
from .contracts import OrderInfo
from .order import Order
from .states import ORDER_STATES, OrderState

__all__ = [
    "ORDER_STATES",
    "InventoryChecker",
    "Order",
    "OrderInfo",
    "OrderState",
    "PaymentGateway",
    "ShippingService",
    "StaticInventory",
    "StaticPaymentGateway",
    "StaticShipping",
]
