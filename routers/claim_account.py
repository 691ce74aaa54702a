# Claim Account Router for TapOnce
# Lets customers of agent-sold orders set a password from their claim link

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from auth.utils import issue_token_for
from database.config import get_db
from schemas.orders import ClaimAccountRequest
from services.account_service import (
    AccountError,
    AlreadyClaimed,
    InvalidClaimToken,
    NotCustomerAccount,
    claim_account,
    find_claimable_order,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth/claim-account", tags=["Auth"])


@router.get("")
async def validate_claim_token(
    token: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
):
    """Validate the token and return what the claim form pre-fills."""
    try:
        order = find_claimable_order(db, token)
    except InvalidClaimToken:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid or expired claim link")
    except AlreadyClaimed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Account already claimed", "alreadyClaimed": True}
        )

    return {
        "success": True,
        "orderNumber": order.order_number,
        "customerName": order.customer_name,
        "customerEmail": order.customer_email,
    }


@router.post("")
async def claim(
    data: ClaimAccountRequest,
    db: Session = Depends(get_db)
):
    try:
        result = claim_account(db, data.token, data.password)
        db.commit()
    except InvalidClaimToken as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AlreadyClaimed as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": str(e), "alreadyClaimed": True})
    except NotCustomerAccount as e:
        db.rollback()
        logger.warning(f"Refused claim onto non-customer login {e.email}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This email cannot be used for a customer account. Please contact support.")
    except AccountError as e:
        db.rollback()
        logger.error(f"Account claim failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create customer profile. Please contact support.")

    profile = result["profile"]
    return {
        "success": True,
        "message": "Account created successfully!",
        "email": profile.email,
        "slug": result["customer"].slug,
        "accessToken": issue_token_for(profile),
    }
