# Agent Service for TapOnce
# Agent onboarding, referral network, payouts and commission liabilities

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from auth.utils import get_password_hash
from config.app_config import APP_URL, BASE_COMMISSION
from core.commission import estimate_override_earnings
from core.identifiers import generate_password, generate_referral_code
from database.models import (
    Agent,
    AgentApplication,
    AgentStatus,
    ApplicationStatus,
    Expense,
    ExpenseCategory,
    Payout,
    PayoutStatus,
    Profile,
    UserRole,
)
from services.notification_service import NotificationService

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 10


class AgentServiceError(Exception):
    """Business rule violation; message is safe to show to the caller."""


class DuplicateAgentError(AgentServiceError):
    pass


class PayoutError(AgentServiceError):
    pass


class InsufficientBalance(PayoutError):
    def __init__(self, available):
        self.available = available
        super().__init__("Amount exceeds available balance")


def find_agent_by_code(db: Session, code: Optional[str]) -> Optional[Agent]:
    if not code:
        return None
    return db.query(Agent).filter(Agent.referral_code == code.strip().upper()).first()


def unique_referral_code(db: Session, name: str) -> str:
    """Generate a referral code not already used by an agent or pending application."""
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_referral_code(name)
        taken = db.query(Agent.id).filter(Agent.referral_code == code).first() or \
            db.query(AgentApplication.id).filter(AgentApplication.generated_referral_code == code).first()
        if not taken:
            return code
    raise AgentServiceError("Could not generate a unique referral code")


def referral_link(agent: Agent) -> str:
    return f"{APP_URL}/become-agent?ref={agent.referral_code}"


# ============================================================================
# APPLICATIONS
# ============================================================================

def submit_application(
    db: Session,
    full_name: str,
    email: str,
    phone: str,
    city: str,
    experience: Optional[str] = None,
    referral_code: Optional[str] = None,
) -> AgentApplication:
    email = email.strip().lower()

    existing = db.query(AgentApplication).filter(
        or_(AgentApplication.email == email, AgentApplication.phone == phone)
    ).first()
    if existing:
        if existing.status == ApplicationStatus.PENDING:
            raise AgentServiceError("Your application is already under review.")
        raise AgentServiceError("You have already applied. Please contact support.")

    existing_profile = db.query(Profile).filter(
        or_(Profile.phone == phone, Profile.email == email)
    ).first()
    if existing_profile:
        raise AgentServiceError("An account with this phone number or email already exists. Please login.")

    parent = find_agent_by_code(db, referral_code)

    application = AgentApplication(
        full_name=full_name,
        email=email,
        phone=phone,
        city=city,
        experience=experience or None,
        referral_code_used=referral_code.strip().upper() if referral_code else None,
        parent_agent_id=parent.id if parent else None,
        generated_referral_code=unique_referral_code(db, full_name),
        status=ApplicationStatus.PENDING,
    )
    db.add(application)
    db.flush()

    NotificationService(db).notify_agent_application(full_name, city)
    logger.info(f"New agent application {application.id} from {city}")
    return application


def approve_application(db: Session, application_id: str, admin_id: str) -> dict:
    """Turn a pending application into a live agent; returns the agent and a one-time password."""
    application = db.query(AgentApplication).filter(AgentApplication.id == application_id).first()
    if not application:
        raise LookupError("Application not found")
    if application.status != ApplicationStatus.PENDING:
        raise AgentServiceError(f"Application already {application.status.value}")

    password = generate_password()
    agent = create_agent(
        db,
        full_name=application.full_name,
        email=application.email,
        phone=application.phone,
        city=application.city,
        password=password,
        referral_code=application.generated_referral_code,
        parent_agent_id=application.parent_agent_id,
    )

    application.status = ApplicationStatus.APPROVED
    application.reviewed_at = datetime.utcnow()
    application.reviewed_by = admin_id
    return {"agent": agent, "password": password}


def reject_application(db: Session, application_id: str, admin_id: str, reason: str) -> AgentApplication:
    application = db.query(AgentApplication).filter(AgentApplication.id == application_id).first()
    if not application:
        raise LookupError("Application not found")
    if application.status != ApplicationStatus.PENDING:
        raise AgentServiceError(f"Application already {application.status.value}")

    application.status = ApplicationStatus.REJECTED
    application.rejection_reason = reason
    application.reviewed_at = datetime.utcnow()
    application.reviewed_by = admin_id
    return application


# ============================================================================
# AGENTS
# ============================================================================

def create_agent(
    db: Session,
    full_name: str,
    email: str,
    phone: Optional[str] = None,
    city: Optional[str] = None,
    password: Optional[str] = None,
    referral_code: Optional[str] = None,
    parent_agent_id: Optional[str] = None,
    base_commission=None,
    **payout_details,
) -> Agent:
    """
    Create profile + agent rows. A given referral_code is used verbatim so a
    clash surfaces as DuplicateAgentError from the unique constraint.
    """
    email = email.strip().lower()
    if db.query(Profile.id).filter(Profile.email == email).first():
        raise DuplicateAgentError("An account with this email already exists")

    profile = Profile(
        email=email,
        password_hash=get_password_hash(password or generate_password()),
        role=UserRole.AGENT,
        full_name=full_name.strip(),
        phone=phone,
    )
    db.add(profile)
    db.flush()

    code = referral_code.strip().upper() if referral_code else unique_referral_code(db, full_name)
    agent = Agent(
        profile_id=profile.id,
        referral_code=code,
        city=city,
        parent_agent_id=parent_agent_id,
        base_commission=base_commission if base_commission is not None else BASE_COMMISSION,
        status=AgentStatus.ACTIVE,
        total_sales=0,
        total_earnings=0,
        available_balance=0,
        **{k: v for k, v in payout_details.items() if v is not None},
    )
    db.add(agent)
    try:
        db.flush()
    except IntegrityError as e:
        logger.warning(f"Agent insert rejected for {email}: {e.orig}")
        raise DuplicateAgentError(f"Referral code {code} is already in use") from e

    logger.info(f"Created agent {agent.referral_code} for {email}")
    return agent


def update_agent(db: Session, agent_id: str, **changes) -> Agent:
    agent = db.query(Agent).filter(Agent.id == agent_id).first()
    if not agent:
        raise LookupError("Agent not found")
    for field, value in changes.items():
        if value is not None:
            setattr(agent, field, value)
    agent.updated_at = datetime.utcnow()
    return agent


def list_agents(db: Session, search: Optional[str] = None, status: Optional[AgentStatus] = None) -> List[Agent]:
    query = db.query(Agent).join(Profile, Agent.profile_id == Profile.id).options(joinedload(Agent.profile))

    if status:
        query = query.filter(Agent.status == status)

    if search:
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(or_(
            func.lower(Profile.full_name).like(pattern),
            func.lower(Profile.email).like(pattern),
            func.lower(Agent.referral_code).like(pattern),
            Profile.phone.like(pattern),
        ))

    return query.order_by(Agent.created_at.desc()).all()


def agent_stats(agents: List[Agent]) -> dict:
    return {
        "total": len(agents),
        "active": sum(1 for a in agents if a.status == AgentStatus.ACTIVE),
        "totalSales": sum(a.total_sales or 0 for a in agents),
        "totalOwed": float(sum((a.available_balance or 0) for a in agents)),
        "totalEarnings": float(sum((a.total_earnings or 0) for a in agents)),
    }


def get_sub_agents(db: Session, agent_id: str) -> List[dict]:
    """Direct recruits of an agent, with the display-only override estimate."""
    subs = db.query(Agent).options(joinedload(Agent.profile)).filter(
        Agent.parent_agent_id == agent_id
    ).order_by(Agent.created_at.desc()).all()

    return [
        {
            "id": sub.id,
            "name": sub.profile.full_name if sub.profile else "Unknown",
            "referralCode": sub.referral_code,
            "city": sub.city,
            "status": sub.status.value,
            "totalSales": sub.total_sales or 0,
            "joinedAt": sub.created_at.isoformat() if sub.created_at else None,
            "overrideEarnings": estimate_override_earnings(sub.total_sales or 0),
        }
        for sub in subs
    ]


# ============================================================================
# PAYOUTS
# ============================================================================

def process_payout(
    db: Session,
    agent_id: str,
    amount,
    payment_method,
    reference: Optional[str] = None,
    admin_notes: Optional[str] = None,
    payout_id: Optional[str] = None,
) -> Payout:
    """
    Record money sent to an agent: completes the payout, decrements the
    available balance and books an agent_commission expense.
    payout_id completes an existing pending request instead of creating one.
    """
    amount = Decimal(str(amount))
    if amount <= 0:
        raise PayoutError("Payout amount must be positive")

    agent = db.query(Agent).filter(Agent.id == agent_id).first()
    if not agent:
        raise LookupError("Agent not found")

    available = Decimal(str(agent.available_balance or 0))
    if amount > available:
        raise InsufficientBalance(available)

    now = datetime.utcnow()
    payout = None
    if payout_id:
        payout = db.query(Payout).filter(
            Payout.id == payout_id,
            Payout.agent_id == agent_id,
            Payout.status == PayoutStatus.PENDING
        ).first()
        if not payout:
            raise LookupError("Pending payout not found")
        payout.amount = amount
        payout.payment_method = payment_method
    else:
        payout = Payout(agent_id=agent_id, amount=amount, payment_method=payment_method)
        db.add(payout)

    payout.status = PayoutStatus.COMPLETED
    payout.reference = reference
    payout.admin_notes = admin_notes
    payout.processed_at = now
    db.flush()

    agent.available_balance = available - amount
    agent.updated_at = now

    db.add(Expense(
        category=ExpenseCategory.AGENT_COMMISSION,
        amount=amount,
        description=f"Payout to agent {agent.referral_code}",
        expense_date=now.date(),
        agent_payout_id=payout.id,
    ))

    NotificationService(db).notify_payout_completed(agent.profile_id, amount)
    logger.info(f"Payout {payout.id}: {amount} to agent {agent.referral_code}, balance now {agent.available_balance}")
    return payout


def request_payout(db: Session, agent: Agent, amount, payment_method) -> Payout:
    """Agent-initiated request; balance only moves when an admin processes it."""
    amount = Decimal(str(amount))
    available = Decimal(str(agent.available_balance or 0))
    if amount > available:
        raise InsufficientBalance(available)

    pending = db.query(Payout).filter(
        Payout.agent_id == agent.id,
        Payout.status == PayoutStatus.PENDING
    ).first()
    if pending:
        raise PayoutError("You already have a pending payout request")

    payout = Payout(
        agent_id=agent.id,
        amount=amount,
        payment_method=payment_method,
        status=PayoutStatus.PENDING,
    )
    db.add(payout)
    db.flush()

    name = agent.profile.full_name if agent.profile else agent.referral_code
    NotificationService(db).notify_payout_requested(name, amount)
    return payout


def get_commission_liabilities(db: Session) -> List[dict]:
    """Agents still owed money, largest balance first."""
    last_payout = db.query(
        Payout.agent_id,
        func.max(Payout.processed_at).label("last_payout_at")
    ).filter(Payout.status == PayoutStatus.COMPLETED).group_by(Payout.agent_id).subquery()

    rows = db.query(Agent, last_payout.c.last_payout_at).options(joinedload(Agent.profile)).outerjoin(
        last_payout, last_payout.c.agent_id == Agent.id
    ).filter(Agent.available_balance > 0).order_by(Agent.available_balance.desc()).all()

    return [
        {
            "agentId": agent.id,
            "agentName": agent.profile.full_name if agent.profile else "Unknown",
            "referralCode": agent.referral_code,
            "upiId": agent.upi_id,
            "availableBalance": float(agent.available_balance),
            "totalEarnings": float(agent.total_earnings or 0),
            "lastPayoutDate": last_at.isoformat() if last_at else None,
        }
        for agent, last_at in rows
    ]
