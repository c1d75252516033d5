"""
Order: the context of the order-processing state machine.

An order starts in ``Created`` and moves through its lifecycle as the caller
fires ``process()``, ``cancel()`` and ``return_()``. Each call is delegated to
the current :mod:`~statecraft.orders.states` variant and answered with a
:class:`TransitionResult`; rejected calls never touch the history.

Availability, payment and delivery are decided by injected collaborators,
which makes every transition deterministic under test.

Refunds
-------
``refund()`` is idempotent: the payment gateway is called at most once per
order, however many times a variant asks for it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from statecraft.core.clock import utc_now
from statecraft.core.errors import StatecraftError
from statecraft.core.machine.context import Context, TransitionResult
from statecraft.core.settings import get_logger, load_settings

from .collaborators import InventoryChecker, PaymentGateway, ShippingService
from .contracts import (
    DeliveryStatus,
    OrderInfo,
    PaymentStatus,
    ShippingStatus,
    TransitionEntry,
)
from .states import CreatedState, OrderState

_UNSET: Any = object()


class Order(Context[OrderState]):
    """An order whose behaviour is its current :class:`OrderState`."""

    def __init__(
        self,
        order_id: str,
        items: Iterable[str] = (),
        *,
        inventory: InventoryChecker,
        payment: PaymentGateway,
        shipping: ShippingService,
        history_limit: int | None = _UNSET,
        logger: logging.Logger | None = None,
    ) -> None:
        if history_limit is _UNSET:
            history_limit = load_settings().transition_history_limit
        super().__init__(
            CreatedState(),
            history_limit=history_limit,
            logger=logger if logger is not None else get_logger("statecraft.orders"),
            label=order_id,
        )
        self.id = order_id
        self.items: tuple[str, ...] = tuple(items)
        self.created_at = utc_now()
        self.payment_status: PaymentStatus = "pending"
        self.shipping_status: ShippingStatus = "not_shipped"
        self.delivery_status: DeliveryStatus = "not_delivered"
        self.refunded = False
        self._inventory = inventory
        self._payment = payment
        self._shipping = shipping

    # ------------------------------- Events ---------------------------------

    def process(self) -> TransitionResult:
        """Advance the order one step."""
        return self._current().process(self)

    def cancel(self) -> TransitionResult:
        return self._current().cancel(self)

    def return_(self) -> TransitionResult:
        return self._current().return_(self)

    # ------------------------------- Collaborator calls ---------------------

    def check_availability(self) -> bool:
        available = self._inventory.is_available(self)
        self.log.info("[%s] availability check: %s", self.id, "ok" if available else "missing")
        return available

    def check_payment(self) -> bool:
        paid = self._payment.is_paid(self)
        if paid:
            self.payment_status = "paid"
        self.log.info("[%s] payment check: %s", self.id, "paid" if paid else "not paid")
        return paid

    def prepare_shipping(self) -> bool:
        prepared = self._shipping.prepare(self)
        if prepared:
            self.shipping_status = "ready"
        self.log.info("[%s] shipping preparation: %s", self.id, "ready" if prepared else "failed")
        return prepared

    def check_delivery(self) -> bool:
        delivered = self._shipping.is_delivered(self)
        if delivered:
            self.delivery_status = "delivered"
        outcome = "delivered" if delivered else "in transit"
        self.log.info("[%s] delivery check: %s", self.id, outcome)
        return delivered

    def refund(self) -> bool:
        """Refund the payment once. Returns ``True`` only when a refund was issued."""
        if self.refunded:
            self.log.info("[%s] refund skipped: already refunded", self.id)
            return False
        self._payment.refund(self)
        self.refunded = True
        self.payment_status = "refunded"
        self.log.info("[%s] payment refunded", self.id)
        return True

    # ------------------------------- Queries --------------------------------

    def describe(self) -> str:
        """Return the current variant's human-readable description."""
        return self._current().description

    def info(self) -> OrderInfo:
        return OrderInfo(
            id=self.id,
            state=self.state_name,
            description=self.describe(),
            payment_status=self.payment_status,
            shipping_status=self.shipping_status,
            delivery_status=self.delivery_status,
            refunded=self.refunded,
            items=list(self.items),
            created_at=self.created_at,
            transition_count=self.transition_count,
            history=[TransitionEntry.model_validate(r.as_dict()) for r in self.history()],
        )

    def _current(self) -> OrderState:
        state = self.state
        if state is None:
            raise StatecraftError(f"order {self.id!r} has no current state")
        return state

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        return f"Order({self.id!r}, state={self.state_name})"


__all__ = ["Order"]
