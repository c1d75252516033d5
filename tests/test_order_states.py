"""
Tests for the order-processing state machine.

Collaborators are deterministic stubs, so every transition below is fixed by
the test's arrangement. Rejections are checked to never grow the history.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from statecraft.core.errors import StatecraftError
from statecraft.orders.collaborators import (
    InventoryChecker,
    PaymentGateway,
    ShippingService,
    StaticInventory,
    StaticPaymentGateway,
    StaticShipping,
)
from statecraft.orders.order import Order
from statecraft.orders.states import (
    ORDER_STATES,
    CancelledState,
    ConfirmedState,
    CreatedState,
    DeliveredState,
    OrderState,
    PaidState,
    ReturnedState,
    ShippedState,
)


@dataclass
class Rig:
    """An order plus handles on its stub collaborators."""

    order: Order
    inventory: StaticInventory
    payment: StaticPaymentGateway
    shipping: StaticShipping = field(default_factory=StaticShipping)


def make_order(
    *, available: bool = True, paid: bool = True, prepared: bool = True, delivered: bool = True
) -> Rig:
    inventory = StaticInventory(available=available)
    payment = StaticPaymentGateway(paid=paid)
    shipping = StaticShipping(prepared=prepared, delivered=delivered)
    order = Order(
        "ORD-001",
        ["laptop", "mouse"],
        inventory=inventory,
        payment=payment,
        shipping=shipping,
        history_limit=None,
    )
    return Rig(order=order, inventory=inventory, payment=payment, shipping=shipping)


def test_stubs_satisfy_collaborator_protocols() -> None:
    assert isinstance(StaticInventory(), InventoryChecker)
    assert isinstance(StaticPaymentGateway(), PaymentGateway)
    assert isinstance(StaticShipping(), ShippingService)


def test_order_starts_created_with_empty_history() -> None:
    rig = make_order()
    assert rig.order.state_name == "Created"
    assert rig.order.history() == ()
    assert rig.order.describe() == CreatedState.description
    assert rig.order.payment_status == "pending"


def test_confirm_pay_cancel_scenario() -> None:
    """Created -> Confirmed -> Paid -> Cancelled with exactly one refund."""
    rig = make_order()
    order = rig.order

    r1 = order.process()
    assert r1.accepted and (r1.from_state, r1.to_state) == ("Created", "Confirmed")
    assert [(h.from_state, h.to_state) for h in order.history()] == [("Created", "Confirmed")]
    assert rig.inventory.checked == ["ORD-001"]

    r2 = order.process()
    assert r2.accepted and order.state_name == "Paid"
    assert order.payment_status == "paid"
    assert len(order.history()) == 2

    r3 = order.cancel()
    assert r3.accepted and order.state_name == "Cancelled"
    assert rig.payment.refunds == ["ORD-001"]
    assert len(order.history()) == 3

    r4 = order.cancel()
    assert r4.accepted is False and r4.to_state is None
    assert len(order.history()) == 3
    assert rig.payment.refunds == ["ORD-001"]


def test_full_lifecycle_to_delivered_then_returned() -> None:
    rig = make_order()
    order = rig.order
    for _ in range(4):
        assert order.process().accepted
    assert order.state_name == "Delivered"
    assert (order.shipping_status, order.delivery_status) == ("ready", "delivered")

    result = order.return_()
    assert result.accepted and result.to_state == "Returned"
    assert order.refunded and order.payment_status == "refunded"
    assert rig.payment.refunds == ["ORD-001"]
    assert [h.to_state for h in order.history()] == [
        "Confirmed",
        "Paid",
        "Shipped",
        "Delivered",
        "Returned",
    ]


def test_returned_process_never_double_refunds() -> None:
    rig = make_order()
    order = rig.order
    for _ in range(4):
        order.process()
    order.return_()

    first = order.process()
    second = order.process()

    assert not first and not second
    assert first.reason == "already refunded"
    assert rig.payment.refunds == ["ORD-001"]
    assert order.state_name == "Returned"
    assert len(order.history()) == 5


def test_returned_process_issues_missing_refund_once() -> None:
    """If an order lands in Returned without a refund, processing issues exactly one."""
    rig = make_order()
    order = rig.order
    order.set_state(ReturnedState())

    assert order.process().reason == "refund issued"
    assert order.process().reason == "already refunded"
    assert rig.payment.refunds == ["ORD-001"]


def test_unavailable_items_cancel_the_order() -> None:
    rig = make_order(available=False)
    result = rig.order.process()
    assert result.accepted and result.to_state == "Cancelled"
    assert rig.payment.refunds == []


def test_unpaid_order_waits_in_confirmed() -> None:
    rig = make_order(paid=False)
    order = rig.order
    order.process()

    waiting = order.process()

    assert not waiting and waiting.reason == "awaiting payment"
    assert order.state_name == "Confirmed"
    assert len(order.history()) == 1

    cancelled = order.cancel()
    assert cancelled.accepted and rig.payment.refunds == []


def test_shipping_failures_are_rejections() -> None:
    rig = make_order(prepared=False)
    rig.order.process()
    rig.order.process()
    assert not rig.order.process()
    assert rig.order.state_name == "Paid"

    rig = make_order(delivered=False)
    for _ in range(3):
        rig.order.process()
    in_transit = rig.order.process()
    assert in_transit.reason == "in transit" and rig.order.state_name == "Shipped"


@pytest.mark.parametrize(  # type: ignore[misc]
    "state_cls", [ShippedState, DeliveredState, ReturnedState, CancelledState]
)
def test_cancel_is_rejected_after_shipping(state_cls: type[OrderState]) -> None:
    rig = make_order()
    rig.order.set_state(state_cls())
    before = rig.order.history()

    result = rig.order.cancel()

    assert result.accepted is False
    assert rig.order.state_name == state_cls.name
    assert rig.order.history() == before


@pytest.mark.parametrize(  # type: ignore[misc]
    "state_cls",
    [CreatedState, ConfirmedState, PaidState, ShippedState, ReturnedState, CancelledState],
)
def test_return_is_only_legal_from_delivered(state_cls: type[OrderState]) -> None:
    rig = make_order()
    rig.order.set_state(state_cls())
    count = rig.order.transition_count

    result = rig.order.return_()

    assert not result
    assert rig.order.transition_count == count
    assert rig.payment.refunds == []


def test_delivered_absorbs_cancel_repeatedly() -> None:
    rig = make_order()
    rig.order.set_state(DeliveredState())
    for _ in range(3):
        assert rig.order.cancel().accepted is False
    assert rig.order.state_name == "Delivered"


def test_history_length_equals_accepted_calls() -> None:
    rig = make_order(paid=False)
    order = rig.order
    results = [order.process(), order.process(), order.return_(), order.cancel(), order.cancel()]
    accepted = sum(1 for r in results if r.accepted)
    assert accepted == 2
    assert len(order.history()) == accepted == order.transition_count


def test_info_is_a_serializable_view() -> None:
    rig = make_order()
    rig.order.process()
    info = rig.order.info()

    assert info.id == "ORD-001" and info.state == "Confirmed"
    assert info.items == ["laptop", "mouse"]
    assert info.transition_count == 1
    dumped = info.model_dump(by_alias=True)
    assert dumped["history"][0]["from"] == "Created"
    assert dumped["history"][0]["to"] == "Confirmed"


def test_order_state_names_are_unique() -> None:
    names = [cls.name for cls in ORDER_STATES]
    assert len(set(names)) == 7
    assert "OrderState" not in names


def test_order_without_a_state_raises_instead_of_guessing() -> None:
    rig = make_order()
    rig.order._state = None

    with pytest.raises(StatecraftError, match="no current state"):
        rig.order.process()
