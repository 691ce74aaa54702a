# Pydantic Schemas for Orders, Tracking, Drafts and Account Claims

from pydantic import BaseModel, Field, EmailStr, validator
from typing import Optional, Dict, Any
from decimal import Decimal
from enum import Enum
import re

from database.models import OrderStatus, PaymentStatus
from config.themes import MATERIALS
from schemas.agents import CamelModel, clean_indian_phone


PINCODE = re.compile(r"^\d{6}$")


class Material(str, Enum):
    METAL = "metal"
    PVC = "pvc"
    WOOD = "wood"


class PaymentMethod(str, Enum):
    COD = "cod"
    ONLINE = "online"


# ============================================================================
# SHARED
# ============================================================================

class ShippingAddress(BaseModel):
    flat: str = Field(..., min_length=1)
    building: Optional[str] = ""
    street: Optional[str] = ""
    city: str = Field(..., min_length=1)
    state: Optional[str] = ""
    pincode: str

    @validator("pincode")
    def validate_pincode(cls, v):
        v = v.strip()
        if not PINCODE.match(v):
            raise ValueError("Please enter a valid 6-digit pincode")
        return v


class CustomerDetails(CamelModel):
    customer_name: str = Field(..., min_length=2, max_length=255)
    customer_phone: str
    customer_email: EmailStr
    customer_whatsapp: Optional[str] = None
    customer_company: Optional[str] = None

    @validator("customer_phone")
    def validate_phone(cls, v):
        return clean_indian_phone(v)

    @validator("customer_whatsapp")
    def validate_whatsapp(cls, v):
        return clean_indian_phone(v) if v else None

    @validator("customer_name")
    def strip_name(cls, v):
        return v.strip()


# ============================================================================
# PUBLIC ORDERS
# ============================================================================

class DirectOrderSubmit(CustomerDetails):
    """Website checkout for a direct (agentless) sale."""
    template_id: Optional[str] = None
    template_name: Optional[str] = None
    material: Material = Material.PVC
    line1_text: str = Field(..., min_length=1, max_length=100)
    line2_text: Optional[str] = Field(None, max_length=100)
    logo_url: Optional[str] = None
    sale_price: Decimal = Field(..., ge=0)
    payment_method: PaymentMethod = PaymentMethod.COD
    shipping_address: ShippingAddress
    draft_id: Optional[str] = None

    @property
    def material_name(self) -> str:
        return MATERIALS.get(self.material.value, self.material.value)


class TrackRequest(CamelModel):
    order_number: str
    email: EmailStr

    @validator("order_number")
    def clean_order_number(cls, v):
        v = v.strip().lstrip("#").strip()
        if not (v.isascii() and v.isdigit()):
            raise ValueError("Order number must be numeric")
        return v


# ============================================================================
# ADMIN ORDERS
# ============================================================================

class StatusUpdate(CamelModel):
    status: OrderStatus
    tracking_number: Optional[str] = None
    rejection_reason: Optional[str] = None
    admin_notes: Optional[str] = None
    commission_amount: Optional[Decimal] = Field(None, ge=0)


class OrderPatch(CamelModel):
    tracking_number: Optional[str] = None
    admin_notes: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None
    shipping_address: Optional[ShippingAddress] = None
    line1_text: Optional[str] = Field(None, min_length=1, max_length=100)
    line2_text: Optional[str] = Field(None, max_length=100)


class ApproveRequest(CamelModel):
    commission_amount: Optional[Decimal] = Field(None, ge=0)
    admin_notes: Optional[str] = None


class RejectRequest(CamelModel):
    reason: str = Field(..., min_length=3)


# ============================================================================
# AGENT ORDERS
# ============================================================================

class CommissionPreviewRequest(CamelModel):
    card_design_id: str
    sale_price: Decimal = Field(..., gt=0)


class AgentOrderCreate(CustomerDetails):
    card_design_id: str
    sale_price: Decimal = Field(..., gt=0)
    confirm_below_msp: bool = False
    line1_text: str = Field(..., min_length=1, max_length=100)
    line2_text: Optional[str] = Field(None, max_length=100)
    customer_photo_url: Optional[str] = None
    special_instructions: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    shipping_address: Optional[ShippingAddress] = None


# ============================================================================
# FUNNEL DRAFTS
# ============================================================================

class DraftCreate(CamelModel):
    profession: str
    user_name: Optional[str] = None
    user_email: Optional[EmailStr] = None


class DraftUpdate(CamelModel):
    template_id: Optional[str] = None
    material: Optional[Material] = None
    personalization: Optional[Dict[str, Any]] = None
    user_name: Optional[str] = None
    user_email: Optional[EmailStr] = None


class DraftResponse(CamelModel):
    id: str
    profession: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    template_id: Optional[str] = None
    material: Optional[str] = None
    personalization: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


# ============================================================================
# ACCOUNT CLAIM
# ============================================================================

class ClaimAccountRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8)
