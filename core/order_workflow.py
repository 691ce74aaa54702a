# Order status state machine
# Every status change goes through apply_status_change so milestone
# timestamps and agent totals stay in step with the order row.

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from config.order_statuses import STATUS_TRANSITIONS
from core.commission import commission_on_approval
from database.models import Agent, CardDesign, Order, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

StatusLike = Union[OrderStatus, str]


class OrderWorkflowError(Exception):
    """Base class for rejected status changes."""


class InvalidStatusTransition(OrderWorkflowError):
    def __init__(self, current: StatusLike, target: StatusLike):
        self.current = OrderStatus(current)
        self.target = OrderStatus(target)
        super().__init__(f"Invalid status transition from {self.current.value} to {self.target.value}")


class MissingRejectionReason(OrderWorkflowError):
    def __init__(self):
        super().__init__("Rejection reason is required")


def get_valid_transitions(current: StatusLike) -> List[OrderStatus]:
    return list(STATUS_TRANSITIONS.get(OrderStatus(current), []))


def can_transition(current: StatusLike, target: StatusLike) -> bool:
    return OrderStatus(target) in STATUS_TRANSITIONS.get(OrderStatus(current), [])


def credit_agent(db: Session, order: Order, approved_amount=None) -> Decimal:
    """Credit the selling agent and bump sales counters for a newly approved order."""
    amount = commission_on_approval(order, approved_amount=approved_amount)
    order.commission_amount = amount

    if order.card_design_id:
        design = db.query(CardDesign).filter(CardDesign.id == order.card_design_id).first()
        if design:
            design.total_sales = (design.total_sales or 0) + 1

    if order.agent_id:
        agent = db.query(Agent).filter(Agent.id == order.agent_id).first()
        if agent:
            agent.total_sales = (agent.total_sales or 0) + 1
            agent.total_earnings = (agent.total_earnings or 0) + amount
            agent.available_balance = (agent.available_balance or 0) + amount
            logger.info(f"Credited {amount} to agent {agent.referral_code} for order #{order.order_number}")

    return amount


def reverse_agent_credit(db: Session, order: Order) -> None:
    """Undo credit_agent when an approved order is rejected or cancelled."""
    amount = order.commission_amount or Decimal(0)

    if order.card_design_id:
        design = db.query(CardDesign).filter(CardDesign.id == order.card_design_id).first()
        if design and design.total_sales:
            design.total_sales -= 1

    if order.agent_id:
        agent = db.query(Agent).filter(Agent.id == order.agent_id).first()
        if agent:
            agent.total_sales = max((agent.total_sales or 0) - 1, 0)
            agent.total_earnings = (agent.total_earnings or 0) - amount
            agent.available_balance = (agent.available_balance or 0) - amount
            logger.info(f"Reversed {amount} from agent {agent.referral_code} for order #{order.order_number}")

    # Below-MSP orders go back to carrying no commission
    if order.is_below_msp or order.is_direct_sale:
        order.commission_amount = 0


def apply_status_change(
    db: Session,
    order: Order,
    new_status: StatusLike,
    tracking_number: Optional[str] = None,
    rejection_reason: Optional[str] = None,
    admin_notes: Optional[str] = None,
    approved_commission=None,
) -> Order:
    """
    Move an order to new_status, stamping milestone timestamps.
    Does not commit; callers own the transaction.
    """
    current = OrderStatus(order.status)
    target = OrderStatus(new_status)

    if not can_transition(current, target):
        raise InvalidStatusTransition(current, target)

    if target == OrderStatus.REJECTED and not (rejection_reason and rejection_reason.strip()):
        raise MissingRejectionReason()

    now = datetime.utcnow()
    order.status = target

    if target == OrderStatus.APPROVED:
        order.approved_at = now
        credit_agent(db, order, approved_amount=approved_commission)
    elif target == OrderStatus.SHIPPED:
        order.shipped_at = now
        if tracking_number:
            order.tracking_number = tracking_number
    elif target == OrderStatus.DELIVERED:
        order.delivered_at = now
    elif target == OrderStatus.PAID:
        order.paid_at = now
        order.payment_status = PaymentStatus.PAID
    elif target == OrderStatus.REJECTED:
        order.rejection_reason = rejection_reason.strip()

    if current == OrderStatus.APPROVED and target in (OrderStatus.REJECTED, OrderStatus.CANCELLED):
        reverse_agent_credit(db, order)

    if admin_notes is not None:
        order.admin_notes = admin_notes

    order.updated_at = now
    logger.info(f"Order #{order.order_number}: {current.value} -> {target.value}")
    return order
