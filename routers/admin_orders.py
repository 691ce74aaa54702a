# Admin Orders Router for TapOnce
# Kanban board data, order detail/edit and the status workflow

import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from auth.decorators import require_admin
from config.app_config import APP_URL
from core.email_service import EmailService, customer_welcome_email, get_email_service
from core.kanban import KanbanOrder, build_columns, filter_orders
from core.order_workflow import OrderWorkflowError, apply_status_change
from database.config import get_db
from database.models import Agent, Order, OrderStatus, Profile
from schemas.orders import ApproveRequest, OrderPatch, RejectRequest, StatusUpdate
from services.account_service import NotCustomerAccount
from services.notification_service import NotificationService
from services.order_service import (
    OrderServiceError,
    approve_order,
    order_detail,
    reject_order,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/orders", tags=["Admin - Orders"])


def _load_orders(db: Session) -> List[Order]:
    return db.query(Order).options(
        joinedload(Order.agent).joinedload(Agent.profile),
        joinedload(Order.card_design),
    ).order_by(Order.created_at.desc(), Order.order_number.desc()).all()


def _get_order(db: Session, order_id: str) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


# ============================================================================
# BOARD
# ============================================================================

@router.get("", response_model=List[KanbanOrder], response_model_by_alias=True)
async def list_orders(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    """All orders as Kanban cards. The board filters client-side, so no pagination."""
    return [KanbanOrder.from_order(o) for o in _load_orders(db)]


@router.get("/board")
async def get_board(
    search: Optional[str] = Query(None),
    agent: Optional[str] = Query(None, description="Agent id, or 'direct' for website sales"),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    orders = filter_orders([KanbanOrder.from_order(o) for o in _load_orders(db)], search=search, agent=agent)
    columns = build_columns(orders)
    return {
        "columns": [
            {**col, "orders": [o.model_dump(mode="json", by_alias=True) for o in col["orders"]]}
            for col in columns
        ],
        "total": len(orders),
    }


# ============================================================================
# DETAIL
# ============================================================================

@router.get("/{order_id}")
async def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    return order_detail(_get_order(db, order_id))


@router.patch("/{order_id}")
async def update_order(
    order_id: str,
    patch: OrderPatch,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    """Edit fields that do not affect the workflow."""
    order = _get_order(db, order_id)
    changes = patch.model_dump(exclude_unset=True)

    for field, value in changes.items():
        if field == "line1_text" and value:
            value = value.strip().upper()
        setattr(order, field, value)

    try:
        db.commit()
        db.refresh(order)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update order {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update order")

    return order_detail(order)


# ============================================================================
# WORKFLOW
# ============================================================================

@router.put("/{order_id}/status")
async def update_order_status(
    order_id: str,
    update: StatusUpdate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    """
    Move an order along the pipeline. Only transitions allowed from the
    current status are accepted; approving credits the selling agent.
    """
    order = _get_order(db, order_id)
    previous = order.status

    try:
        apply_status_change(
            db, order, update.status,
            tracking_number=update.tracking_number,
            rejection_reason=update.rejection_reason,
            admin_notes=update.admin_notes,
            approved_commission=update.commission_amount,
        )
        if order.agent and order.agent.profile_id and update.status in (OrderStatus.APPROVED, OrderStatus.REJECTED):
            NotificationService(db).notify_order_decision(
                order.agent.profile_id, order.order_number,
                approved=update.status == OrderStatus.APPROVED,
                reason=update.rejection_reason,
            )
        db.commit()
        db.refresh(order)
    except OrderWorkflowError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to update status for order {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update order status")

    return {
        "success": True,
        "previousStatus": previous.value,
        "order": KanbanOrder.from_order(order).model_dump(mode="json", by_alias=True),
    }


@router.post("/{order_id}/approve")
async def approve(
    order_id: str,
    background_tasks: BackgroundTasks,
    body: Optional[ApproveRequest] = None,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin()),
    email_service: EmailService = Depends(get_email_service)
):
    """Approve a pending order, creating the customer's login and public profile."""
    order = _get_order(db, order_id)
    body = body or ApproveRequest()

    try:
        account = approve_order(db, order, admin_notes=body.admin_notes, commission_amount=body.commission_amount)
        db.commit()
        db.refresh(order)
    except (OrderServiceError, OrderWorkflowError, NotCustomerAccount) as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to approve order {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to approve order")

    customer = account["customer"]
    password = account["password"]
    if password:
        email = customer_welcome_email(
            customer_name=order.customer_name,
            order_number=order.order_number,
            profile_url=f"{APP_URL}/p/{customer.slug}",
            login_url=f"{APP_URL}/login",
            username=order.customer_email,
            password=password,
        )
        background_tasks.add_task(
            email_service.send_email,
            to={"email": order.customer_email, "name": order.customer_name},
            subject=email["subject"],
            html=email["html"],
            tags=["customer-welcome"],
        )

    logger.info(f"Order #{order.order_number} approved by admin {admin.id}. Customer: {customer.id}")
    return {
        "success": True,
        "message": "Order approved successfully",
        "order": {
            "id": order.id,
            "orderNumber": order.order_number,
            "status": order.status.value,
            "commissionAmount": float(order.commission_amount or 0),
        },
        "customer": {
            "id": customer.id,
            "slug": customer.slug,
            "isNew": password is not None,
        },
    }


@router.post("/{order_id}/reject")
async def reject(
    order_id: str,
    body: RejectRequest,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    order = _get_order(db, order_id)

    try:
        reject_order(db, order, body.reason)
        db.commit()
    except (OrderServiceError, OrderWorkflowError) as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to reject order {order_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to reject order")

    return {"success": True, "message": "Order rejected", "orderNumber": order.order_number}
