# Auth Router for TapOnce
# Registration, login and the current-user lookup

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from auth.dependencies import get_current_user
from auth.roles import get_permissions_for_role
from auth.decorators import _get_user_type
from auth.utils import get_password_hash, issue_token_for, verify_password
from database.config import get_db
from database.models import Profile, UserRole
from schemas.auth import LoginRequest, RegisterRequest, UserResponse
from services.account_service import create_customer_account

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """Self-service signup always creates a customer account."""
    email = str(data.email).strip().lower()
    if db.query(Profile.id).filter(Profile.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    try:
        account = create_customer_account(
            db,
            full_name=data.full_name,
            email=email,
            phone=data.phone,
            password=data.password,
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception(f"Registration failed for {email}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create account")

    profile = account["profile"]
    return {
        "accessToken": issue_token_for(profile),
        "tokenType": "bearer",
        "user": UserResponse.from_profile(profile).model_dump(by_alias=True),
        "slug": account["customer"].slug,
    }


@router.post("/login")
async def login(
    data: LoginRequest,
    db: Session = Depends(get_db)
):
    profile = db.query(Profile).filter(Profile.email == str(data.email).strip().lower()).first()
    if not profile or not verify_password(data.password, profile.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "accessToken": issue_token_for(profile),
        "tokenType": "bearer",
        "user": UserResponse.from_profile(profile).model_dump(by_alias=True),
    }


@router.get("/me")
async def me(current_user: Profile = Depends(get_current_user)):
    user_type = _get_user_type(current_user)
    data = UserResponse.from_profile(current_user).model_dump(by_alias=True)
    data["permissions"] = sorted(p.value for p in get_permissions_for_role(user_type))
    if current_user.role == UserRole.AGENT and current_user.agent:
        data["referralCode"] = current_user.agent.referral_code
    if current_user.role == UserRole.CUSTOMER and current_user.customer:
        data["slug"] = current_user.customer.slug
    return data
