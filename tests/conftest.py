import os

# Configure before any project module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SKIP_STARTUP_SEED"] = "1"
os.environ["BREVO_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth.utils import issue_token_for
from core.email_service import get_email_service
from core.identifiers import next_order_number
from database.config import get_db
from database.models import Base, CardDesign, DesignStatus, Order, OrderStatus, PaymentStatus
from database.bootstrap import seed_admin
from server import app
from services.account_service import create_customer_account
from services.agent_service import create_agent

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingEmailService:
    """Stands in for Brevo; keeps every message instead of sending it."""

    def __init__(self):
        self.sent = []

    def send_email(self, to, subject, html, text=None, tags=None):
        self.sent.append({"to": to, "subject": subject, "html": html, "tags": tags or []})
        return {"messageId": f"test-{len(self.sent)}"}


def auth_headers(profile) -> dict:
    return {"Authorization": f"Bearer {issue_token_for(profile)}"}


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def outbox():
    return RecordingEmailService()


@pytest.fixture
def client(db_session, outbox):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: outbox
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================================
# ACCOUNTS
# ============================================================================

@pytest.fixture
def admin(db_session):
    profile = seed_admin(db_session, email="admin@taponce.in", password="admin-password")
    db_session.commit()
    return profile


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def agent(db_session):
    agent = create_agent(
        db_session,
        full_name="Priya Sharma",
        email="priya@agents.example.com",
        phone="9876543210",
        city="Mumbai",
        password="agent-password",
        referral_code="PRIYAS42",
        upi_id="priya@upi",
    )
    db_session.commit()
    return agent


@pytest.fixture
def agent_headers(agent):
    return auth_headers(agent.profile)


@pytest.fixture
def customer(db_session):
    account = create_customer_account(
        db_session,
        full_name="Jane Doe",
        email="jane@example.com",
        phone="9123456780",
        password="customer-password",
    )
    db_session.commit()
    return account["customer"]


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer.profile)


# ============================================================================
# CATALOG & ORDERS
# ============================================================================

@pytest.fixture
def design(db_session):
    design = CardDesign(name="Vertical Blue Premium", base_msp=600, status=DesignStatus.ACTIVE, total_sales=0)
    db_session.add(design)
    db_session.commit()
    return design


@pytest.fixture
def make_order(db_session, design):
    """Factory for orders in any status; commission fields default to a 600 MSP design."""
    def _make(agent=None, status=OrderStatus.PENDING_APPROVAL, **overrides):
        fields = dict(
            order_number=next_order_number(db_session),
            agent_id=agent.id if agent else None,
            card_design_id=design.id,
            customer_name="Rahul Verma",
            customer_phone="9988776655",
            customer_email="rahul@example.com",
            line1_text="RAHUL VERMA",
            msp_at_order=600,
            sale_price=800,
            commission_amount=200 if agent else 0,
            status=status,
            payment_status=PaymentStatus.PENDING,
            is_direct_sale=agent is None,
            is_below_msp=False,
            claim_token_used=False,
        )
        fields.update(overrides)
        order = Order(**fields)
        db_session.add(order)
        db_session.commit()
        return order

    return _make
