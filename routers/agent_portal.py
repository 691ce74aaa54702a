# Agent Portal Router for TapOnce
# Dashboard, catalog, order entry, payouts and referral network for agents

import logging
from collections import Counter
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from auth.decorators import require_agent
from config.app_config import APP_URL
from core.commission import resolve_msp
from core.email_service import EmailService, claim_account_email, get_email_service
from core.kanban import KanbanOrder
from database.config import get_db
from database.models import Agent, CardDesign, DesignStatus, Order, OrderStatus, Payout
from schemas.agents import PayoutRequest
from schemas.catalog import card_design_dict
from schemas.orders import AgentOrderCreate, CommissionPreviewRequest
from services import agent_service
from services.agent_service import PayoutError
from services.order_service import BelowMspNotConfirmed, create_agent_order, preview_commission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agent", tags=["Agent Portal"])

RECENT_ORDERS = 5


def _agent_orders(db: Session, agent: Agent):
    return db.query(Order).options(joinedload(Order.card_design)).filter(
        Order.agent_id == agent.id
    ).order_by(desc(Order.created_at), desc(Order.order_number))


def _card(order: Order) -> dict:
    return KanbanOrder.from_order(order).model_dump(mode="json", by_alias=True)


# ============================================================================
# DASHBOARD
# ============================================================================

@router.get("/dashboard")
async def dashboard(
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    orders = _agent_orders(db, agent).all()
    counts = Counter(o.status.value for o in orders)
    return {
        "agent": {
            "id": agent.id,
            "name": agent.profile.full_name,
            "referralCode": agent.referral_code,
            "referralLink": agent_service.referral_link(agent),
        },
        "totalSales": agent.total_sales or 0,
        "totalEarnings": float(agent.total_earnings or 0),
        "availableBalance": float(agent.available_balance or 0),
        "ordersByStatus": {s.value: counts.get(s.value, 0) for s in OrderStatus},
        "pendingOrders": counts.get(OrderStatus.PENDING_APPROVAL.value, 0),
        "recentOrders": [_card(o) for o in orders[:RECENT_ORDERS]],
    }


# ============================================================================
# CATALOG & COMMISSION
# ============================================================================

@router.get("/catalog")
async def catalog(
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    """Active designs with the MSP that applies to this agent."""
    designs = db.query(CardDesign).filter(
        CardDesign.status == DesignStatus.ACTIVE
    ).order_by(CardDesign.created_at).all()
    return [card_design_dict(d, effective_msp=resolve_msp(db, agent.id, d)) for d in designs]


@router.post("/commission/preview")
async def commission_preview(
    request: CommissionPreviewRequest,
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    design = db.query(CardDesign).filter(CardDesign.id == request.card_design_id).first()
    if not design:
        raise HTTPException(status_code=404, detail="Card design not found")
    return preview_commission(db, agent, design, request.sale_price)


# ============================================================================
# ORDERS
# ============================================================================

@router.get("/orders")
async def my_orders(
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    query = _agent_orders(db, agent)
    if order_status:
        query = query.filter(Order.status == order_status)
    return [_card(o) for o in query.all()]


@router.post("/orders", status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: AgentOrderCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent()),
    email_service: EmailService = Depends(get_email_service)
):
    """
    Book an order for a customer. Orders below MSP need confirm_below_msp and
    carry no commission until an admin approves them.
    The claim link goes to the customer by email only.
    """
    try:
        order = create_agent_order(db, agent, payload)
        db.commit()
        db.refresh(order)
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except BelowMspNotConfirmed as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Agent {agent.referral_code} failed to create order: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create order")

    email = claim_account_email(
        customer_name=order.customer_name,
        order_number=order.order_number,
        claim_url=f"{APP_URL}/claim-account?token={order.claim_token}",
    )
    background_tasks.add_task(
        email_service.send_email,
        to={"email": order.customer_email, "name": order.customer_name},
        subject=email["subject"],
        html=email["html"],
        tags=["claim-account"],
    )

    return {
        "success": True,
        "orderId": order.id,
        "orderNumber": order.order_number,
        "commissionAmount": float(order.commission_amount or 0),
        "isBelowMsp": order.is_below_msp,
    }


# ============================================================================
# PAYOUTS
# ============================================================================

@router.get("/payouts")
async def my_payouts(
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    payouts = db.query(Payout).filter(Payout.agent_id == agent.id).order_by(desc(Payout.created_at)).all()
    return {
        "availableBalance": float(agent.available_balance or 0),
        "totalEarnings": float(agent.total_earnings or 0),
        "payouts": [
            {
                "id": p.id,
                "amount": float(p.amount),
                "paymentMethod": p.payment_method.value,
                "status": p.status.value,
                "reference": p.reference,
                "processedAt": p.processed_at.isoformat() if p.processed_at else None,
                "createdAt": p.created_at.isoformat() if p.created_at else None,
            }
            for p in payouts
        ],
    }


@router.post("/payouts/request", status_code=status.HTTP_201_CREATED)
async def request_payout(
    request: PayoutRequest,
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    try:
        payout = agent_service.request_payout(db, agent, request.amount, request.payment_method)
        db.commit()
    except PayoutError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"success": True, "payoutId": payout.id, "status": payout.status.value}


# ============================================================================
# NETWORK
# ============================================================================

@router.get("/network")
async def network(
    db: Session = Depends(get_db),
    agent: Agent = Depends(require_agent())
):
    sub_agents = agent_service.get_sub_agents(db, agent.id)
    return {
        "referralCode": agent.referral_code,
        "referralLink": agent_service.referral_link(agent),
        "subAgents": sub_agents,
        "totalOverrideEarnings": sum(s["overrideEarnings"] for s in sub_agents),
    }
