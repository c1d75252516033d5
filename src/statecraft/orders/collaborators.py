"""
External collaborators consulted by the order state machine.

The state variants never decide availability, payment or delivery on their
own; they ask injected collaborators. Production code supplies real adapters
(warehouse, payment provider, carrier); tests and the CLI use the static
adapters below, which answer with fixed values and record every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .order import Order


@runtime_checkable
class InventoryChecker(Protocol):
    def is_available(self, order: Order) -> bool:
        """Return True if every item of ``order`` can be reserved."""
        ...


@runtime_checkable
class PaymentGateway(Protocol):
    def is_paid(self, order: Order) -> bool:
        """Return True once the payment for ``order`` has been captured."""
        ...

    def refund(self, order: Order) -> None:
        """Return the captured payment to the customer."""
        ...


@runtime_checkable
class ShippingService(Protocol):
    def prepare(self, order: Order) -> bool:
        """Pack and hand over ``order``; True if it is ready to ship."""
        ...

    def is_delivered(self, order: Order) -> bool:
        """Return True once the carrier confirms delivery."""
        ...


# --------------------------------------------------------------------------- #
# Static adapters
# --------------------------------------------------------------------------- #


@dataclass
class StaticInventory:
    """Inventory that always answers ``available``."""

    available: bool = True
    checked: list[str] = field(default_factory=list)

    def is_available(self, order: Order) -> bool:
        self.checked.append(order.id)
        return self.available


@dataclass
class StaticPaymentGateway:
    """Gateway that always answers ``paid`` and records refunds per order id."""

    paid: bool = True
    refunds: list[str] = field(default_factory=list)

    def is_paid(self, order: Order) -> bool:
        return self.paid

    def refund(self, order: Order) -> None:
        self.refunds.append(order.id)


@dataclass
class StaticShipping:
    """Carrier that always answers ``prepared`` / ``delivered``."""

    prepared: bool = True
    delivered: bool = True

    def prepare(self, order: Order) -> bool:
        return self.prepared

    def is_delivered(self, order: Order) -> bool:
        return self.delivered


__all__ = [
    "InventoryChecker",
    "PaymentGateway",
    "ShippingService",
    "StaticInventory",
    "StaticPaymentGateway",
    "StaticShipping",
]
