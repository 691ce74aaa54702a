# Generators for human-facing identifiers: referral codes, profile slugs,
# temporary passwords, claim tokens and sequential order numbers

import random
import re
import secrets
import string

from sqlalchemy import func
from sqlalchemy.orm import Session

from config.app_config import FIRST_ORDER_NUMBER, GENERATED_PASSWORD_LENGTH
from database.models import Order

BASE36 = string.digits + string.ascii_lowercase
PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%"


def generate_referral_code(name: str) -> str:
    """First six letters of the name, upper-cased, plus a number 0-99 (e.g. PRIYAS42)."""
    letters = re.sub(r"[^A-Za-z]", "", name or "").upper()[:6] or "AGENT"
    return f"{letters}{random.randint(0, 99)}"


def slugify_name(name: str) -> str:
    base = re.sub(r"[^a-z0-9\s-]", "", (name or "").lower())
    base = re.sub(r"\s+", "-", base.strip())
    return base[:30]


def generate_slug(name: str) -> str:
    """Public profile slug: cleaned name plus four random base36 characters."""
    suffix = "".join(random.choices(BASE36, k=4))
    base = slugify_name(name) or "card"
    return f"{base}-{suffix}"


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def generate_claim_token() -> str:
    return secrets.token_urlsafe(32)


def next_order_number(db: Session) -> int:
    """Next sequential order number; the unique constraint guards concurrent inserts."""
    current = db.query(func.max(Order.order_number)).scalar()
    return (current or FIRST_ORDER_NUMBER - 1) + 1
