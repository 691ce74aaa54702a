# Order Service for TapOnce
# Direct website orders, agent orders, approval, tracking and finance rollups

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from config.app_config import BASE_COMMISSION, ESTIMATED_DELIVERY_DAYS, FALLBACK_TEMPLATE_MSP
from config.order_statuses import CLOSED_STATUSES, TRACKING_LABELS, TRACKING_TIMELINE
from core.commission import calculate_commission, resolve_msp
from core.draft_order import clear_draft
from core.identifiers import generate_claim_token, next_order_number
from core.order_workflow import apply_status_change, get_valid_transitions
from database.models import (
    Agent,
    CardDesign,
    DesignStatus,
    Expense,
    ExpenseCategory,
    Order,
    OrderStatus,
    PaymentStatus,
)
from schemas.orders import AgentOrderCreate, DirectOrderSubmit, PaymentMethod
from services.account_service import create_customer_account
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)

# Revenue counts once an order has been approved and not undone
REVENUE_STATUSES = [
    OrderStatus.APPROVED,
    OrderStatus.PRINTING,
    OrderStatus.PRINTED,
    OrderStatus.READY_TO_SHIP,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.PAID,
]

# orders.order_number is a 32-bit INTEGER column
MAX_ORDER_NUMBER = 2_147_483_647


class OrderServiceError(Exception):
    pass


class BelowMspNotConfirmed(OrderServiceError):
    def __init__(self, msp):
        self.msp = msp
        super().__init__(f"Sale price is below the minimum selling price of {msp}. Confirm to send it for admin approval.")


# ============================================================================
# DIRECT ORDERS
# ============================================================================

def design_for_direct_order(db: Session, template_id: Optional[str] = None) -> CardDesign:
    """Requested template if it is a known design, else the first active one, else a fallback."""
    if template_id:
        design = db.query(CardDesign).filter(CardDesign.id == template_id).first()
        if design:
            return design

    design = db.query(CardDesign).filter(
        CardDesign.status == DesignStatus.ACTIVE
    ).order_by(CardDesign.created_at).first()
    if design:
        return design

    logger.warning("No active card designs, creating fallback template")
    design = CardDesign(
        name="Default Template",
        description="Default card design",
        base_msp=FALLBACK_TEMPLATE_MSP,
        status=DesignStatus.ACTIVE,
    )
    db.add(design)
    db.flush()
    return design


def submit_direct_order(db: Session, payload: DirectOrderSubmit) -> Order:
    design = design_for_direct_order(db, payload.template_id)
    address = payload.shipping_address

    order = Order(
        order_number=next_order_number(db),
        card_design_id=design.id,
        customer_name=payload.customer_name,
        customer_phone=payload.customer_phone,
        customer_email=str(payload.customer_email).strip().lower(),
        customer_whatsapp=payload.customer_whatsapp or payload.customer_phone,
        customer_company=payload.customer_company,
        customer_photo_url=payload.logo_url,
        line1_text=payload.line1_text.strip().upper(),
        line2_text=payload.line2_text or None,
        msp_at_order=design.base_msp,
        sale_price=payload.sale_price,
        commission_amount=0,
        status=OrderStatus.PENDING_APPROVAL,
        payment_status=PaymentStatus.COD if payload.payment_method == PaymentMethod.COD else PaymentStatus.PENDING,
        is_direct_sale=True,
        is_below_msp=False,
        shipping_address={
            "flat": address.flat,
            "building": address.building or "",
            "street": address.street or "",
            "city": address.city,
            "state": address.state or "",
            "pincode": address.pincode,
        },
        special_instructions=f"Material: {payload.material.value.upper()}, Template: {payload.template_name or payload.template_id or design.name}",
    )
    db.add(order)
    db.flush()

    if payload.draft_id:
        clear_draft(db, payload.draft_id)

    NotificationService(db).notify_new_order(order.order_number, order.customer_name, "website")
    logger.info(f"Direct order #{order.order_number} placed by {order.customer_email}")
    return order


# ============================================================================
# AGENT ORDERS
# ============================================================================

def preview_commission(db: Session, agent: Agent, card_design: CardDesign, sale_price) -> dict:
    msp = resolve_msp(db, agent.id, card_design)
    breakdown = calculate_commission(msp, sale_price, agent.base_commission or BASE_COMMISSION)
    return {
        "msp": float(breakdown["msp"]),
        "salePrice": float(breakdown["sale_price"]),
        "base": float(breakdown["base"]),
        "bonus": float(breakdown["bonus"]),
        "total": float(breakdown["total"]),
        "isBelowMsp": breakdown["is_below_msp"],
    }


def create_agent_order(db: Session, agent: Agent, payload: AgentOrderCreate) -> Order:
    design = db.query(CardDesign).filter(
        CardDesign.id == payload.card_design_id,
        CardDesign.status == DesignStatus.ACTIVE
    ).first()
    if not design:
        raise LookupError("Card design not found")

    msp = resolve_msp(db, agent.id, design)
    breakdown = calculate_commission(msp, payload.sale_price, agent.base_commission or BASE_COMMISSION)
    if breakdown["is_below_msp"] and not payload.confirm_below_msp:
        raise BelowMspNotConfirmed(msp)

    order = Order(
        order_number=next_order_number(db),
        agent_id=agent.id,
        card_design_id=design.id,
        customer_name=payload.customer_name,
        customer_phone=payload.customer_phone,
        customer_email=str(payload.customer_email).strip().lower(),
        customer_whatsapp=payload.customer_whatsapp or payload.customer_phone,
        customer_company=payload.customer_company,
        customer_photo_url=payload.customer_photo_url,
        line1_text=payload.line1_text.strip().upper(),
        line2_text=payload.line2_text or None,
        msp_at_order=msp,
        sale_price=payload.sale_price,
        commission_amount=breakdown["total"],
        status=OrderStatus.PENDING_APPROVAL,
        payment_status=payload.payment_status,
        is_direct_sale=False,
        is_below_msp=breakdown["is_below_msp"],
        shipping_address=payload.shipping_address.model_dump() if payload.shipping_address else None,
        special_instructions=payload.special_instructions,
        claim_token=generate_claim_token(),
        claim_token_used=False,
    )
    db.add(order)
    db.flush()

    NotificationService(db).notify_new_order(order.order_number, order.customer_name, f"agent {agent.referral_code}")
    logger.info(f"Agent {agent.referral_code} created order #{order.order_number} (below MSP: {order.is_below_msp})")
    return order


# ============================================================================
# APPROVAL
# ============================================================================

def approve_order(db: Session, order: Order, admin_notes: Optional[str] = None, commission_amount=None) -> dict:
    """
    Approve a pending order: create or link the customer account, then credit
    the agent through the status workflow. Returns the account details so the
    caller can send the welcome email.
    """
    if order.status != OrderStatus.PENDING_APPROVAL:
        raise OrderServiceError(f"Order cannot be approved. Current status: {order.status.value}")

    account = create_customer_account(
        db,
        full_name=order.customer_name,
        email=order.customer_email,
        phone=order.customer_phone,
        company=order.customer_company,
    )
    customer = account["customer"]
    order.customer_id = customer.id
    order.portfolio_slug = customer.slug

    apply_status_change(
        db, order, OrderStatus.APPROVED,
        admin_notes=admin_notes,
        approved_commission=commission_amount,
    )

    if order.agent and order.agent.profile_id:
        NotificationService(db).notify_order_decision(order.agent.profile_id, order.order_number, approved=True)

    return account


def reject_order(db: Session, order: Order, reason: str) -> Order:
    if order.status not in (OrderStatus.PENDING_APPROVAL, OrderStatus.APPROVED):
        raise OrderServiceError(f"Order cannot be rejected. Current status: {order.status.value}")

    apply_status_change(db, order, OrderStatus.REJECTED, rejection_reason=reason)

    if order.agent and order.agent.profile_id:
        NotificationService(db).notify_order_decision(order.agent.profile_id, order.order_number, approved=False, reason=reason)
    return order


# ============================================================================
# TRACKING
# ============================================================================

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _timeline_position(status: OrderStatus) -> int:
    # Printed cards have left the printer but not yet reached dispatch
    if status == OrderStatus.PRINTED:
        status = OrderStatus.PRINTING
    if status == OrderStatus.PAID:
        status = OrderStatus.DELIVERED
    return TRACKING_TIMELINE.index(status) if status in TRACKING_TIMELINE else -1


def build_timeline(order: Order) -> List[dict]:
    current = _timeline_position(OrderStatus(order.status))
    dates = {
        OrderStatus.PENDING_APPROVAL: order.created_at,
        OrderStatus.APPROVED: order.approved_at,
        OrderStatus.SHIPPED: order.shipped_at,
        OrderStatus.DELIVERED: order.delivered_at,
    }
    return [
        {
            "status": status.value,
            "label": TRACKING_LABELS[status],
            "completed": index <= current,
            "date": _iso(dates.get(status)),
        }
        for index, status in enumerate(TRACKING_TIMELINE)
    ]


def estimated_delivery(order: Order, now: Optional[datetime] = None) -> Optional[str]:
    if OrderStatus(order.status) in CLOSED_STATUSES:
        return None

    now = now or datetime.utcnow()
    estimate = (order.created_at or now) + timedelta(days=ESTIMATED_DELIVERY_DAYS)
    if estimate < now:
        return "Soon"
    return estimate.strftime("%A, %d %b")


def track_order(db: Session, order_number: str, email: str) -> Optional[dict]:
    digits = order_number.lstrip("0") or "0"
    if len(digits) > len(str(MAX_ORDER_NUMBER)) or int(digits) > MAX_ORDER_NUMBER:
        return None

    order = db.query(Order).filter(
        Order.order_number == int(digits),
        func.lower(Order.customer_email) == email.strip().lower()
    ).first()
    if not order:
        return None

    status = OrderStatus(order.status)
    return {
        "orderNumber": order.order_number,
        "customerName": order.customer_name,
        "status": status.value,
        "statusLabel": TRACKING_LABELS.get(status, status.value),
        "paymentStatus": order.payment_status.value,
        "total": float(order.sale_price),
        "cardDetails": {"line1": order.line1_text, "line2": order.line2_text},
        "shippingAddress": order.shipping_address,
        "trackingNumber": order.tracking_number,
        "profileSlug": order.portfolio_slug,
        "timeline": build_timeline(order),
        "estimatedDelivery": estimated_delivery(order),
    }


# ============================================================================
# SERIALIZATION
# ============================================================================

def order_detail(order: Order) -> dict:
    agent = order.agent
    return {
        "id": order.id,
        "orderNumber": order.order_number,
        "status": order.status.value,
        "paymentStatus": order.payment_status.value,
        "customerId": order.customer_id,
        "customerName": order.customer_name,
        "customerCompany": order.customer_company,
        "customerPhone": order.customer_phone,
        "customerEmail": order.customer_email,
        "customerWhatsapp": order.customer_whatsapp,
        "customerPhotoUrl": order.customer_photo_url,
        "cardDesignId": order.card_design_id,
        "cardDesignName": order.card_design.name if order.card_design else None,
        "line1Text": order.line1_text,
        "line2Text": order.line2_text,
        "mspAtOrder": float(order.msp_at_order),
        "salePrice": float(order.sale_price),
        "commissionAmount": float(order.commission_amount or 0),
        "isDirectSale": bool(order.is_direct_sale),
        "isBelowMsp": bool(order.is_below_msp),
        "agentId": order.agent_id,
        "agentName": agent.profile.full_name if agent and agent.profile else None,
        "agentReferralCode": agent.referral_code if agent else None,
        "portfolioSlug": order.portfolio_slug,
        "shippingAddress": order.shipping_address,
        "trackingNumber": order.tracking_number,
        "specialInstructions": order.special_instructions,
        "adminNotes": order.admin_notes,
        "rejectionReason": order.rejection_reason,
        "createdAt": _iso(order.created_at),
        "updatedAt": _iso(order.updated_at),
        "approvedAt": _iso(order.approved_at),
        "shippedAt": _iso(order.shipped_at),
        "deliveredAt": _iso(order.delivered_at),
        "paidAt": _iso(order.paid_at),
        "validTransitions": [s.value for s in get_valid_transitions(order.status)],
    }


# ============================================================================
# FINANCE
# ============================================================================

def finance_summary(db: Session) -> dict:
    revenue = db.query(func.coalesce(func.sum(Order.sale_price), 0)).filter(
        Order.status.in_(REVENUE_STATUSES)
    ).scalar()

    by_category = {category.value: 0.0 for category in ExpenseCategory}
    for category, total in db.query(Expense.category, func.sum(Expense.amount)).group_by(Expense.category).all():
        by_category[ExpenseCategory(category).value] = float(total or 0)

    liabilities = db.query(func.coalesce(func.sum(Agent.available_balance), 0)).filter(
        Agent.available_balance > 0
    ).scalar()

    total_expenses = sum(by_category.values())
    revenue = float(Decimal(str(revenue or 0)))
    return {
        "revenue": revenue,
        "expenses": by_category,
        "totalExpenses": total_expenses,
        "outstandingLiabilities": float(liabilities or 0),
        "netProfit": revenue - total_expenses,
    }
