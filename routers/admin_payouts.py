"""
Admin Finance Router
Records agent payouts, lists commission liabilities and tracks expenses
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from auth.decorators import require_admin
from database.config import get_db
from database.models import Agent, Expense, ExpenseCategory, Payout, PayoutStatus, Profile
from schemas.agents import CamelModel, PayoutCreate
from services import agent_service
from services.agent_service import PayoutError
from services.order_service import finance_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Finance"])


# Pydantic models
class ExpenseCreate(CamelModel):
    category: ExpenseCategory
    amount: Decimal = Field(..., gt=0)
    description: Optional[str] = None
    expense_date: Optional[date] = None
    order_id: Optional[str] = None


def payout_dict(payout: Payout) -> dict:
    agent = payout.agent
    return {
        "id": payout.id,
        "agentId": payout.agent_id,
        "agentName": agent.profile.full_name if agent and agent.profile else None,
        "referralCode": agent.referral_code if agent else None,
        "amount": float(payout.amount),
        "paymentMethod": payout.payment_method.value,
        "reference": payout.reference,
        "adminNotes": payout.admin_notes,
        "status": payout.status.value,
        "processedAt": payout.processed_at.isoformat() if payout.processed_at else None,
        "createdAt": payout.created_at.isoformat() if payout.created_at else None,
    }


def expense_dict(expense: Expense) -> dict:
    return {
        "id": expense.id,
        "category": expense.category.value,
        "amount": float(expense.amount),
        "description": expense.description,
        "expenseDate": expense.expense_date.isoformat() if expense.expense_date else None,
        "orderId": expense.order_id,
        "agentPayoutId": expense.agent_payout_id,
    }


# ============================================================================
# PAYOUTS
# ============================================================================

@router.get("/payouts")
async def list_payouts(
    agent_id: Optional[str] = Query(None, alias="agentId"),
    payout_status: Optional[PayoutStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    query = db.query(Payout).options(joinedload(Payout.agent).joinedload(Agent.profile))
    if agent_id:
        query = query.filter(Payout.agent_id == agent_id)
    if payout_status:
        query = query.filter(Payout.status == payout_status)
    return [payout_dict(p) for p in query.order_by(desc(Payout.created_at)).all()]


@router.post("/payouts", status_code=status.HTTP_201_CREATED)
async def record_payout(
    data: PayoutCreate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    """
    Record money sent to an agent. Refused when the amount is more than the
    agent's available balance.
    """
    try:
        payout = agent_service.process_payout(
            db,
            agent_id=data.agent_id,
            amount=data.amount,
            payment_method=data.payment_method,
            reference=data.reference,
            admin_notes=data.admin_notes,
            payout_id=data.payout_id,
        )
        db.commit()
        db.refresh(payout)
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except PayoutError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to record payout for agent {data.agent_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to record payout")

    agent = payout.agent
    return {
        "success": True,
        "payout": payout_dict(payout),
        "newBalance": float(agent.available_balance),
    }


# ============================================================================
# FINANCE
# ============================================================================

@router.get("/finance/liabilities")
async def commission_liabilities(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    liabilities = agent_service.get_commission_liabilities(db)
    return {
        "liabilities": liabilities,
        "totalOwed": sum(item["availableBalance"] for item in liabilities),
    }


@router.get("/finance/summary")
async def get_finance_summary(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    return finance_summary(db)


@router.get("/expenses")
async def list_expenses(
    category: Optional[ExpenseCategory] = Query(None),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    query = db.query(Expense)
    if category:
        query = query.filter(Expense.category == category)
    return [expense_dict(e) for e in query.order_by(desc(Expense.expense_date), desc(Expense.created_at)).all()]


@router.post("/expenses", status_code=status.HTTP_201_CREATED)
async def record_expense(
    data: ExpenseCreate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    expense = Expense(
        category=data.category,
        amount=data.amount,
        description=data.description,
        expense_date=data.expense_date or date.today(),
        order_id=data.order_id,
    )
    db.add(expense)

    try:
        db.commit()
        db.refresh(expense)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to record expense: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to record expense")

    return expense_dict(expense)
