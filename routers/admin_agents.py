# Admin Agents Router for TapOnce
# Agent roster, manual onboarding and application review

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from auth.decorators import require_admin
from config.app_config import APP_URL
from core.email_service import EmailService, agent_approved_email, get_email_service
from core.identifiers import generate_password
from database.config import get_db
from database.models import Agent, AgentApplication, AgentStatus, ApplicationStatus, Profile
from schemas.agents import AgentCreate, AgentUpdate, ApplicationReject
from services import agent_service
from services.agent_service import AgentServiceError, DuplicateAgentError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/agents", tags=["Admin - Agents"])


def agent_dict(agent: Agent) -> dict:
    profile = agent.profile
    return {
        "id": agent.id,
        "profileId": agent.profile_id,
        "fullName": profile.full_name if profile else None,
        "email": profile.email if profile else None,
        "phone": profile.phone if profile else None,
        "referralCode": agent.referral_code,
        "city": agent.city,
        "status": agent.status.value,
        "parentAgentId": agent.parent_agent_id,
        "baseCommission": float(agent.base_commission or 0),
        "upiId": agent.upi_id,
        "bankAccount": agent.bank_account,
        "bankIfsc": agent.bank_ifsc,
        "bankHolderName": agent.bank_holder_name,
        "totalSales": agent.total_sales or 0,
        "totalEarnings": float(agent.total_earnings or 0),
        "availableBalance": float(agent.available_balance or 0),
        "createdAt": agent.created_at.isoformat() if agent.created_at else None,
    }


def application_dict(application: AgentApplication) -> dict:
    return {
        "id": application.id,
        "fullName": application.full_name,
        "email": application.email,
        "phone": application.phone,
        "city": application.city,
        "experience": application.experience,
        "referralCodeUsed": application.referral_code_used,
        "parentAgentId": application.parent_agent_id,
        "generatedReferralCode": application.generated_referral_code,
        "status": application.status.value,
        "rejectionReason": application.rejection_reason,
        "createdAt": application.created_at.isoformat() if application.created_at else None,
    }


# ============================================================================
# AGENTS
# ============================================================================

@router.get("")
async def list_agents(
    search: Optional[str] = Query(None),
    agent_status: Optional[AgentStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    agents = agent_service.list_agents(db, search=search, status=agent_status)
    return {
        "agents": [agent_dict(a) for a in agents],
        "stats": agent_service.agent_stats(agents),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_agent(
    data: AgentCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin()),
    email_service: EmailService = Depends(get_email_service)
):
    parent = None
    if data.parent_referral_code:
        parent = agent_service.find_agent_by_code(db, data.parent_referral_code)
        if not parent:
            raise HTTPException(status_code=400, detail="Parent referral code not found")

    password = data.password or generate_password()
    try:
        agent = agent_service.create_agent(
            db,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            city=data.city,
            password=password,
            referral_code=data.referral_code,
            parent_agent_id=parent.id if parent else None,
            base_commission=data.base_commission,
            upi_id=data.upi_id,
            bank_account=data.bank_account,
            bank_ifsc=data.bank_ifsc,
            bank_holder_name=data.bank_holder_name,
        )
        db.commit()
        db.refresh(agent)
    except DuplicateAgentError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except AgentServiceError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to create agent {data.email}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create agent")

    _send_welcome(background_tasks, email_service, agent, password)
    return {"success": True, "agent": agent_dict(agent), "temporaryPassword": None if data.password else password}


@router.patch("/{agent_id}")
async def update_agent(
    agent_id: str,
    data: AgentUpdate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    try:
        agent = agent_service.update_agent(db, agent_id, **data.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(agent)
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to update agent {agent_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update agent")

    return {"success": True, "agent": agent_dict(agent)}


# ============================================================================
# APPLICATIONS
# ============================================================================

@router.get("/applications")
async def list_applications(
    application_status: ApplicationStatus = Query(ApplicationStatus.PENDING, alias="status"),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    applications = db.query(AgentApplication).filter(
        AgentApplication.status == application_status
    ).order_by(AgentApplication.created_at.desc()).all()
    return [application_dict(a) for a in applications]


@router.post("/applications/{application_id}/approve")
async def approve_application(
    application_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin()),
    email_service: EmailService = Depends(get_email_service)
):
    try:
        result = agent_service.approve_application(db, application_id, admin.id)
        db.commit()
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateAgentError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except AgentServiceError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to approve application {application_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to approve application")

    agent = result["agent"]
    db.refresh(agent)
    _send_welcome(background_tasks, email_service, agent, result["password"])
    return {"success": True, "agent": agent_dict(agent), "temporaryPassword": result["password"]}


@router.post("/applications/{application_id}/reject")
async def reject_application(
    application_id: str,
    body: ApplicationReject,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin())
):
    try:
        application = agent_service.reject_application(db, application_id, admin.id, body.reason)
        db.commit()
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except AgentServiceError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"success": True, "application": application_dict(application)}


def _send_welcome(background_tasks: BackgroundTasks, email_service: EmailService, agent: Agent, password: str):
    email = agent_approved_email(
        agent_name=agent.profile.full_name,
        referral_code=agent.referral_code,
        login_url=f"{APP_URL}/login",
        username=agent.profile.email,
        password=password,
    )
    background_tasks.add_task(
        email_service.send_email,
        to={"email": agent.profile.email, "name": agent.profile.full_name},
        subject=email["subject"],
        html=email["html"],
        tags=["agent-approved"],
    )
