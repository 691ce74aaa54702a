# Public Orders Router for TapOnce
# Website checkout and order tracking

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.email_service import EmailService, get_email_service, order_confirmation_email
from database.config import get_db
from schemas.orders import DirectOrderSubmit, TrackRequest
from services.order_service import submit_direct_order, track_order

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("/submit")
async def submit_order(
    payload: DirectOrderSubmit,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service)
):
    """Place a direct website order. No agent is credited for these."""
    try:
        order = submit_direct_order(db, payload)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Order submission failed for {payload.customer_email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create order. Please try again."
        )

    email = order_confirmation_email(
        customer_name=payload.customer_name,
        order_number=order.order_number,
        material_name=payload.material_name,
        card_name=payload.template_name or "Custom Design",
        total=payload.sale_price,
        payment_method=payload.payment_method.value,
    )
    background_tasks.add_task(
        email_service.send_email,
        to={"email": order.customer_email, "name": order.customer_name},
        subject=email["subject"],
        html=email["html"],
        tags=["order-confirmation"],
    )

    return {
        "success": True,
        "orderId": order.id,
        "orderNumber": order.order_number,
        "message": "Order placed successfully!",
    }


@router.post("/track")
async def track(
    request: TrackRequest,
    db: Session = Depends(get_db)
):
    order = track_order(db, request.order_number, request.email)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found. Please check your order number and email."
        )
    return {"success": True, "order": order}
