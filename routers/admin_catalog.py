# Admin Catalog Router for TapOnce
# Card designs and per-agent minimum selling price overrides

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from auth.decorators import require_admin
from database.config import get_db
from database.models import Agent, AgentMsp, CardDesign, DesignStatus, Profile
from schemas.agents import AgentMspSet
from schemas.catalog import CardDesignCreate, CardDesignUpdate, card_design_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin - Catalog"])


def _get_design(db: Session, design_id: str) -> CardDesign:
    design = db.query(CardDesign).filter(CardDesign.id == design_id).first()
    if not design:
        raise HTTPException(status_code=404, detail="Card design not found")
    return design


def _get_agent(db: Session, agent_id: str) -> Agent:
    agent = db.query(Agent).filter(Agent.id == agent_id).first()
    if not agent:
        raise HTTPException(status_code=404, detail="Agent not found")
    return agent


# ============================================================================
# CARD DESIGNS
# ============================================================================

@router.get("/card-designs")
async def list_card_designs(
    design_status: Optional[DesignStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    query = db.query(CardDesign)
    if design_status:
        query = query.filter(CardDesign.status == design_status)
    return [card_design_dict(d) for d in query.order_by(CardDesign.created_at).all()]


@router.post("/card-designs", status_code=status.HTTP_201_CREATED)
async def create_card_design(
    data: CardDesignCreate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    design = CardDesign(**data.model_dump())
    db.add(design)
    try:
        db.commit()
        db.refresh(design)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create card design: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create card design")

    logger.info(f"Card design '{design.name}' created with MSP {design.base_msp}")
    return card_design_dict(design)


@router.patch("/card-designs/{design_id}")
async def update_card_design(
    design_id: str,
    data: CardDesignUpdate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    design = _get_design(db, design_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(design, field, value)

    try:
        db.commit()
        db.refresh(design)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update card design {design_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update card design")

    return card_design_dict(design)


# ============================================================================
# AGENT MSP OVERRIDES
# ============================================================================

@router.get("/agents/{agent_id}/msps")
async def list_agent_msps(
    agent_id: str,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    _get_agent(db, agent_id)
    overrides = db.query(AgentMsp).filter(AgentMsp.agent_id == agent_id).all()
    return [
        {
            "cardDesignId": o.card_design_id,
            "cardDesignName": o.card_design.name if o.card_design else None,
            "baseMsp": float(o.card_design.base_msp) if o.card_design else None,
            "mspAmount": float(o.msp_amount),
        }
        for o in overrides
    ]


@router.put("/agents/{agent_id}/msps/{design_id}")
async def set_agent_msp(
    agent_id: str,
    design_id: str,
    data: AgentMspSet,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    """Create or replace the agent's MSP for one design."""
    _get_agent(db, agent_id)
    design = _get_design(db, design_id)

    override = db.query(AgentMsp).filter(
        AgentMsp.agent_id == agent_id,
        AgentMsp.card_design_id == design_id
    ).first()
    if override:
        override.msp_amount = data.msp_amount
    else:
        override = AgentMsp(agent_id=agent_id, card_design_id=design_id, msp_amount=data.msp_amount)
        db.add(override)

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to set MSP for agent {agent_id} on {design_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to set MSP")

    return {
        "cardDesignId": design.id,
        "cardDesignName": design.name,
        "baseMsp": float(design.base_msp),
        "mspAmount": float(override.msp_amount),
    }


@router.delete("/agents/{agent_id}/msps/{design_id}")
async def delete_agent_msp(
    agent_id: str,
    design_id: str,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    deleted = db.query(AgentMsp).filter(
        AgentMsp.agent_id == agent_id,
        AgentMsp.card_design_id == design_id
    ).delete()
    if not deleted:
        raise HTTPException(status_code=404, detail="MSP override not found")
    db.commit()
    return {"success": True}
