from decimal import Decimal

import pytest

from core.order_workflow import (
    InvalidStatusTransition,
    MissingRejectionReason,
    apply_status_change,
    can_transition,
    get_valid_transitions,
)
from database.models import OrderStatus, PaymentStatus


def test_transition_table():
    assert get_valid_transitions(OrderStatus.PENDING_APPROVAL) == [
        OrderStatus.APPROVED, OrderStatus.REJECTED, OrderStatus.CANCELLED,
    ]
    assert get_valid_transitions("approved") == [
        OrderStatus.PRINTING, OrderStatus.REJECTED, OrderStatus.CANCELLED,
    ]
    assert get_valid_transitions(OrderStatus.PRINTED) == [OrderStatus.READY_TO_SHIP]
    assert get_valid_transitions(OrderStatus.PAID) == []
    assert get_valid_transitions(OrderStatus.REJECTED) == []


@pytest.mark.parametrize("current, target, allowed", [
    (OrderStatus.SHIPPED, OrderStatus.DELIVERED, True),
    (OrderStatus.DELIVERED, OrderStatus.PAID, True),
    (OrderStatus.PENDING_APPROVAL, OrderStatus.SHIPPED, False),
    (OrderStatus.PRINTING, OrderStatus.CANCELLED, False),
    (OrderStatus.CANCELLED, OrderStatus.APPROVED, False),
])
def test_can_transition(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_invalid_transition_leaves_order_untouched(db_session, make_order):
    order = make_order(status=OrderStatus.PENDING_APPROVAL)

    with pytest.raises(InvalidStatusTransition) as exc:
        apply_status_change(db_session, order, OrderStatus.SHIPPED)

    assert "pending_approval to shipped" in str(exc.value)
    assert order.status == OrderStatus.PENDING_APPROVAL


def test_reject_requires_reason(db_session, make_order):
    order = make_order()

    with pytest.raises(MissingRejectionReason):
        apply_status_change(db_session, order, OrderStatus.REJECTED, rejection_reason="  ")

    apply_status_change(db_session, order, OrderStatus.REJECTED, rejection_reason="Blurry photo")
    assert order.status == OrderStatus.REJECTED
    assert order.rejection_reason == "Blurry photo"


def test_approval_credits_agent_and_design(db_session, agent, design, make_order):
    order = make_order(agent=agent)

    apply_status_change(db_session, order, OrderStatus.APPROVED)
    db_session.commit()

    assert order.approved_at is not None
    assert agent.total_sales == 1
    assert Decimal(str(agent.available_balance)) == Decimal("200")
    assert Decimal(str(agent.total_earnings)) == Decimal("200")
    assert design.total_sales == 1


def test_below_msp_approval_credits_base_or_override(db_session, agent, make_order):
    order = make_order(agent=agent, sale_price=500, commission_amount=0, is_below_msp=True)

    apply_status_change(db_session, order, OrderStatus.APPROVED, approved_commission=75)
    db_session.commit()

    assert Decimal(str(order.commission_amount)) == Decimal("75")
    assert Decimal(str(agent.available_balance)) == Decimal("75")


def test_cancel_after_approval_reverses_credit(db_session, agent, design, make_order):
    order = make_order(agent=agent)
    apply_status_change(db_session, order, OrderStatus.APPROVED)
    db_session.commit()

    apply_status_change(db_session, order, OrderStatus.CANCELLED)
    db_session.commit()

    assert agent.total_sales == 0
    assert Decimal(str(agent.available_balance)) == 0
    assert Decimal(str(agent.total_earnings)) == 0
    assert design.total_sales == 0


def test_milestones_are_stamped(db_session, make_order):
    order = make_order(status=OrderStatus.READY_TO_SHIP)

    apply_status_change(db_session, order, OrderStatus.SHIPPED, tracking_number="DTDC123")
    assert order.shipped_at is not None
    assert order.tracking_number == "DTDC123"

    apply_status_change(db_session, order, OrderStatus.DELIVERED)
    apply_status_change(db_session, order, OrderStatus.PAID, admin_notes="Cash collected")
    assert order.delivered_at is not None
    assert order.paid_at is not None
    assert order.payment_status == PaymentStatus.PAID
    assert order.admin_notes == "Cash collected"
