# Pydantic Schemas for Agents, Applications and Payouts

from pydantic import BaseModel, Field, EmailStr, validator
from pydantic.alias_generators import to_camel
from typing import Optional
from decimal import Decimal
import re

from database.models import AgentStatus, PayoutMethod


INDIAN_MOBILE = re.compile(r"^[6-9]\d{9}$")


def clean_indian_phone(value: str) -> str:
    """Strip formatting and country code; raise if not a 10-digit Indian mobile."""
    digits = re.sub(r"\D", "", value or "")[-10:]
    if not INDIAN_MOBILE.match(digits):
        raise ValueError("Please enter a valid 10-digit mobile number")
    return digits


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================================================
# APPLICATIONS
# ============================================================================

class AgentApplicationCreate(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str
    city: str = Field(..., min_length=2, max_length=100)
    experience: Optional[str] = None
    referral_code: Optional[str] = None

    @validator("phone")
    def validate_phone(cls, v):
        return clean_indian_phone(v)

    @validator("full_name", "city")
    def strip_text(cls, v):
        return v.strip()


class ApplicationReject(BaseModel):
    reason: str = Field(..., min_length=3)


# ============================================================================
# AGENTS
# ============================================================================

class AgentCreate(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str
    city: Optional[str] = None
    password: Optional[str] = Field(None, min_length=8)
    referral_code: Optional[str] = Field(None, min_length=3, max_length=20)
    parent_referral_code: Optional[str] = None
    upi_id: Optional[str] = None
    bank_account: Optional[str] = None
    bank_ifsc: Optional[str] = None
    bank_holder_name: Optional[str] = None
    base_commission: Optional[Decimal] = Field(None, ge=0)

    @validator("phone")
    def validate_phone(cls, v):
        return clean_indian_phone(v)

    @validator("referral_code")
    def upper_code(cls, v):
        return v.strip().upper() if v else v


class AgentUpdate(CamelModel):
    status: Optional[AgentStatus] = None
    city: Optional[str] = None
    upi_id: Optional[str] = None
    bank_account: Optional[str] = None
    bank_ifsc: Optional[str] = None
    bank_holder_name: Optional[str] = None
    base_commission: Optional[Decimal] = Field(None, ge=0)


# ============================================================================
# PAYOUTS
# ============================================================================

class PayoutCreate(CamelModel):
    agent_id: str
    amount: Decimal = Field(..., gt=0)
    payment_method: PayoutMethod
    reference: Optional[str] = None
    admin_notes: Optional[str] = None
    # Completes an agent-requested payout instead of creating a new one
    payout_id: Optional[str] = None


class PayoutRequest(CamelModel):
    amount: Decimal = Field(..., gt=0)
    payment_method: PayoutMethod = PayoutMethod.UPI


class AgentMspSet(CamelModel):
    msp_amount: Decimal = Field(..., gt=0)
