"""
Order lifecycle variants.

=========  ==========================  =====================  ==================
state      process()                   cancel()               return_()
=========  ==========================  =====================  ==================
Created    Confirmed (available)       Cancelled              rejected
           Cancelled (unavailable)
Confirmed  Paid (paid), else rejected  Cancelled              rejected
Paid       Shipped (prepared)          Cancelled + refund     rejected
Shipped    Delivered (delivered)       rejected               rejected
Delivered  rejected                    rejected               Returned + refund
Returned   refund guard, no change     rejected               rejected
Cancelled  rejected                    rejected               rejected
=========  ==========================  =====================  ==================

Every handler returns a :class:`TransitionResult`. Handlers that do not apply
to the current variant log the rejection and return ``accepted=False``
without touching the order's history.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from statecraft.core.machine.context import StateVariant, TransitionResult

if TYPE_CHECKING:
    from .order import Order


class OrderState(StateVariant["Order"]):
    """Base class for order variants; subclasses implement all three events."""

    @abstractmethod
    def process(self, order: Order) -> TransitionResult:
        """Advance the order one step if its collaborators allow it."""

    @abstractmethod
    def cancel(self, order: Order) -> TransitionResult:
        """Cancel the order if still possible."""

    @abstractmethod
    def return_(self, order: Order) -> TransitionResult:
        """Take a delivered order back."""

    # ----- helpers shared by the variants --------------------------------------

    def _move(
        self, order: Order, target: OrderState, reason: str | None = None
    ) -> TransitionResult:
        record = order.set_state(target)
        return TransitionResult.accept(record.from_state, record.to_state, reason)

    def _reject(self, order: Order, reason: str) -> TransitionResult:
        order.log.info("[%s] %s rejected: %s", order.id, self.name, reason)
        return TransitionResult.reject(self.name, reason)


class CreatedState(OrderState):
    name = "Created"
    description = "Order created, awaiting confirmation"

    def process(self, order: Order) -> TransitionResult:
        if order.check_availability():
            return self._move(order, ConfirmedState(), "items available")
        return self._move(order, CancelledState(), "items unavailable")

    def cancel(self, order: Order) -> TransitionResult:
        return self._move(order, CancelledState(), "cancelled by customer")

    def return_(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot return an order that was never shipped")


class ConfirmedState(OrderState):
    name = "Confirmed"
    description = "Order confirmed, awaiting payment"

    def process(self, order: Order) -> TransitionResult:
        if order.check_payment():
            return self._move(order, PaidState(), "payment captured")
        return self._reject(order, "awaiting payment")

    def cancel(self, order: Order) -> TransitionResult:
        return self._move(order, CancelledState(), "cancelled by customer")

    def return_(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot return an order that was never shipped")


class PaidState(OrderState):
    name = "Paid"
    description = "Order paid, being prepared for shipping"

    def process(self, order: Order) -> TransitionResult:
        if order.prepare_shipping():
            return self._move(order, ShippedState(), "handed to carrier")
        return self._reject(order, "shipping preparation failed")

    def cancel(self, order: Order) -> TransitionResult:
        order.refund()
        return self._move(order, CancelledState(), "cancelled with refund")

    def return_(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot return an order that was never shipped")


class ShippedState(OrderState):
    name = "Shipped"
    description = "Order shipped, in transit"

    def process(self, order: Order) -> TransitionResult:
        if order.check_delivery():
            return self._move(order, DeliveredState(), "delivery confirmed")
        return self._reject(order, "in transit")

    def cancel(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot cancel a shipped order")

    def return_(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot return an order still in transit")


class DeliveredState(OrderState):
    name = "Delivered"
    description = "Order delivered"
    final = True

    def process(self, order: Order) -> TransitionResult:
        return self._reject(order, "already delivered")

    def cancel(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot cancel a delivered order")

    def return_(self, order: Order) -> TransitionResult:
        result = self._move(order, ReturnedState(), "returned by customer")
        order.refund()
        return result


class ReturnedState(OrderState):
    name = "Returned"
    description = "Order returned"
    final = True

    def process(self, order: Order) -> TransitionResult:
        # refund() is guarded, so repeated processing never refunds twice
        if order.refund():
            return self._reject(order, "refund issued")
        return self._reject(order, "already refunded")

    def cancel(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot cancel a returned order")

    def return_(self, order: Order) -> TransitionResult:
        return self._reject(order, "already returned")


class CancelledState(OrderState):
    name = "Cancelled"
    description = "Order cancelled"
    final = True

    def process(self, order: Order) -> TransitionResult:
        return self._reject(order, "order is cancelled")

    def cancel(self, order: Order) -> TransitionResult:
        return self._reject(order, "already cancelled")

    def return_(self, order: Order) -> TransitionResult:
        return self._reject(order, "cannot return a cancelled order")


ORDER_STATES: tuple[type[OrderState], ...] = (
    CreatedState,
    ConfirmedState,
    PaidState,
    ShippedState,
    DeliveredState,
    ReturnedState,
    CancelledState,
)

__all__ = [
    "ORDER_STATES",
    "CancelledState",
    "ConfirmedState",
    "CreatedState",
    "DeliveredState",
    "OrderState",
    "PaidState",
    "ReturnedState",
    "ShippedState",
]
