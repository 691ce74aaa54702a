# Agent Applications Router for TapOnce
# Public "become an agent" form

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.email_service import EmailService, agent_application_email, get_email_service
from database.config import get_db
from schemas.agents import AgentApplicationCreate
from services.agent_service import AgentServiceError, submit_application

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agents", tags=["Agents"])


@router.post("/apply")
async def apply(
    data: AgentApplicationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service)
):
    """
    Submit an agent application. An optional referral code links the new
    agent to the recruiting agent once approved.
    """
    try:
        application = submit_application(
            db,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            city=data.city,
            experience=data.experience,
            referral_code=data.referral_code,
        )
        db.commit()
    except AgentServiceError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception(f"Failed to submit agent application: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to submit application. Please try again.")

    email = agent_application_email(data.full_name)
    background_tasks.add_task(
        email_service.send_email,
        to={"email": application.email, "name": application.full_name},
        subject=email["subject"],
        html=email["html"],
        tags=["agent-application"],
    )

    return {
        "success": True,
        "message": "Application submitted successfully! We will review it within 48 hours.",
        "applicationId": application.id,
    }
