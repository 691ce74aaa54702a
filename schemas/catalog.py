# Pydantic Schemas for the card design catalog

from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal

from database.models import DesignStatus
from schemas.agents import CamelModel


class CardDesignCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=255)
    description: Optional[str] = None
    base_msp: Decimal = Field(..., gt=0)
    preview_url: Optional[str] = None
    template_url: Optional[str] = None
    status: DesignStatus = DesignStatus.ACTIVE


class CardDesignUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = None
    base_msp: Optional[Decimal] = Field(None, gt=0)
    preview_url: Optional[str] = None
    template_url: Optional[str] = None
    status: Optional[DesignStatus] = None


def card_design_dict(design, effective_msp=None) -> dict:
    data = {
        "id": design.id,
        "name": design.name,
        "description": design.description,
        "baseMsp": float(design.base_msp),
        "previewUrl": design.preview_url,
        "templateUrl": design.template_url,
        "status": design.status.value,
        "totalSales": design.total_sales or 0,
    }
    if effective_msp is not None:
        data["msp"] = float(effective_msp)
    return data
