"""Serializable views of an order.

`OrderInfo` is what `Order.info()` returns and what the CLI prints with
`--json`. It is a read model: building one never mutates the order.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentStatus = Literal["pending", "paid", "refunded"]
ShippingStatus = Literal["not_shipped", "ready"]
DeliveryStatus = Literal["not_delivered", "delivered"]


class TransitionEntry(BaseModel):
    """One transition record, keyed the way it is rendered (`from`/`to`)."""

    from_state: str = Field(alias="from")
    to_state: str = Field(alias="to")
    timestamp: str

    model_config = ConfigDict(populate_by_name=True)


class OrderInfo(BaseModel):
    """Snapshot of an order's public fields and transition history."""

    id: str
    state: str
    description: str
    payment_status: PaymentStatus
    shipping_status: ShippingStatus
    delivery_status: DeliveryStatus
    refunded: bool = False
    items: list[str] = Field(default_factory=list)
    created_at: datetime
    transition_count: int = 0
    history: list[TransitionEntry] = Field(default_factory=list)


__all__ = [
    "DeliveryStatus",
    "OrderInfo",
    "PaymentStatus",
    "ShippingStatus",
    "TransitionEntry",
]
