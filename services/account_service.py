# Customer Account Service for TapOnce
# Creates customer logins on order approval and lets agent-sold customers
# claim their account through a one-time link.

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.utils import get_password_hash
from core.identifiers import generate_password, generate_slug
from database.models import Customer, CustomerStatus, Order, Profile, UserRole

logger = logging.getLogger(__name__)

MAX_SLUG_ATTEMPTS = 5


class AccountError(Exception):
    pass


class InvalidClaimToken(AccountError):
    def __init__(self):
        super().__init__("Invalid or expired claim link. Please contact support.")


class AlreadyClaimed(AccountError):
    def __init__(self):
        super().__init__("This account has already been claimed. Please login instead.")


class NotCustomerAccount(AccountError):
    def __init__(self, email: str):
        super().__init__(f"{email} belongs to a staff account and cannot be used as a customer login")
        self.email = email


def _unique_slug(db: Session, name: str) -> str:
    for _ in range(MAX_SLUG_ATTEMPTS):
        slug = generate_slug(name)
        if not db.query(Customer.id).filter(Customer.slug == slug).first():
            return slug
    raise AccountError("Could not generate a unique profile slug")


def _ensure_customer(db: Session, profile: Profile, company: Optional[str] = None) -> Customer:
    customer = db.query(Customer).filter(Customer.profile_id == profile.id).first()
    if customer:
        return customer

    customer = Customer(
        profile_id=profile.id,
        slug=_unique_slug(db, profile.full_name),
        company=company,
        status=CustomerStatus.ACTIVE,
        custom_links=[],
    )
    db.add(customer)
    try:
        db.flush()
    except IntegrityError as e:
        logger.error(f"Customer insert failed for {profile.email}: {e.orig}")
        raise AccountError("Failed to create customer profile") from e
    return customer


def create_customer_account(
    db: Session,
    full_name: str,
    email: str,
    phone: Optional[str] = None,
    company: Optional[str] = None,
    password: Optional[str] = None,
) -> dict:
    """
    Create or reuse the profile + customer for an email.

    Returns {"customer", "profile", "password"}; password is the generated
    credential for a new login and None when the account already existed.
    """
    email = email.strip().lower()
    profile = db.query(Profile).filter(Profile.email == email).first()
    new_password = None

    if profile is None:
        new_password = password or generate_password()
        profile = Profile(
            email=email,
            password_hash=get_password_hash(new_password),
            role=UserRole.CUSTOMER,
            full_name=full_name.strip(),
            phone=phone,
        )
        db.add(profile)
        db.flush()
        logger.info(f"Created customer login for {email}")
    elif profile.role != UserRole.CUSTOMER:
        raise NotCustomerAccount(email)

    customer = _ensure_customer(db, profile, company)
    return {"customer": customer, "profile": profile, "password": new_password}


# ============================================================================
# CLAIM ACCOUNT
# ============================================================================

def find_claimable_order(db: Session, token: str) -> Order:
    order = db.query(Order).filter(Order.claim_token == token).first() if token else None
    if not order:
        raise InvalidClaimToken()
    if order.claim_token_used or order.customer_id:
        raise AlreadyClaimed()
    return order


def claim_account(db: Session, token: str, password: str) -> dict:
    """Set a password for the order's customer and link the order to their profile."""
    order = find_claimable_order(db, token)

    existing = db.query(Profile).filter(Profile.email == order.customer_email.lower()).first()
    if existing:
        if existing.role != UserRole.CUSTOMER:
            raise NotCustomerAccount(existing.email)
        existing.password_hash = get_password_hash(password)
        profile = existing
        customer = _ensure_customer(db, profile, order.customer_company)
    else:
        account = create_customer_account(
            db,
            full_name=order.customer_name,
            email=order.customer_email,
            phone=order.customer_phone,
            company=order.customer_company,
            password=password,
        )
        profile, customer = account["profile"], account["customer"]

    order.claim_token_used = True
    order.customer_id = customer.id
    order.portfolio_slug = customer.slug

    logger.info(f"Account claimed for order #{order.order_number}: {profile.email}")
    return {"profile": profile, "customer": customer, "order": order}
