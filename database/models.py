# Database Models for TapOnce NFC Card Platform

from sqlalchemy import Column, String, Integer, DateTime, Date, ForeignKey, Text, JSON, Enum, Boolean, Numeric, UniqueConstraint
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import relationship, backref
from sqlalchemy.sql import func
import uuid
import enum

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


def _enum_column(enum_cls, name):
    """Store enum values (lower case) rather than member names."""
    return Enum(enum_cls, values_callable=lambda x: [e.value for e in x], name=name)


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(str, enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"
    CUSTOMER = "customer"


class AgentStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CustomerStatus(str, enum.Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"


class DesignStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class OrderStatus(str, enum.Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    PRINTING = "printing"
    PRINTED = "printed"
    READY_TO_SHIP = "ready_to_ship"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    PAID = "paid"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    ADVANCE_PAID = "advance_paid"
    PAID = "paid"
    COD = "cod"


class PayoutMethod(str, enum.Enum):
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"


class PayoutStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ExpenseCategory(str, enum.Enum):
    PRINTING = "printing"
    SHIPPING = "shipping"
    AGENT_COMMISSION = "agent_commission"
    MARKETING = "marketing"
    OTHER = "other"


# ============================================================================
# USERS
# ============================================================================

class Profile(Base):
    """One row per account; role decides which surface the user can reach."""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(_enum_column(UserRole, "userrole"), nullable=False, default=UserRole.CUSTOMER)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(20))
    avatar_url = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    agent = relationship("Agent", back_populates="profile", uselist=False)
    customer = relationship("Customer", back_populates="profile", uselist=False)
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")


class Agent(Base):
    __tablename__ = "agents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    referral_code = Column(String(20), unique=True, nullable=False, index=True)
    city = Column(String(100))

    # Payout details
    upi_id = Column(String(100))
    bank_account = Column(String(50))
    bank_ifsc = Column(String(20))
    bank_holder_name = Column(String(255))

    base_commission = Column(Numeric(10, 2), nullable=False, default=100)
    parent_agent_id = Column(String(36), ForeignKey("agents.id", ondelete="SET NULL"), nullable=True)
    status = Column(_enum_column(AgentStatus, "agentstatus"), nullable=False, default=AgentStatus.ACTIVE)

    # Running totals, updated by approval and payout paths
    total_sales = Column(Integer, nullable=False, default=0)
    total_earnings = Column(Numeric(10, 2), nullable=False, default=0)
    available_balance = Column(Numeric(10, 2), nullable=False, default=0)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="agent")
    sub_agents = relationship("Agent", backref=backref("parent_agent", remote_side=[id]))
    orders = relationship("Order", back_populates="agent")
    payouts = relationship("Payout", back_populates="agent", cascade="all, delete-orphan")
    msp_overrides = relationship("AgentMsp", back_populates="agent", cascade="all, delete-orphan")


class AgentApplication(Base):
    """Public 'become an agent' submissions awaiting admin review."""
    __tablename__ = "agent_applications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    city = Column(String(100), nullable=False)
    experience = Column(Text)
    referral_code_used = Column(String(20))
    parent_agent_id = Column(String(36), ForeignKey("agents.id", ondelete="SET NULL"), nullable=True)
    generated_referral_code = Column(String(20), unique=True)
    status = Column(_enum_column(ApplicationStatus, "applicationstatus"), nullable=False, default=ApplicationStatus.PENDING)
    reviewed_at = Column(DateTime)
    reviewed_by = Column(String(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    rejection_reason = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    parent_agent = relationship("Agent", foreign_keys=[parent_agent_id])


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)

    company = Column(String(255))
    job_title = Column(String(255))
    bio = Column(Text)
    tagline = Column(String(255))
    location = Column(String(255))
    profession = Column(String(50))
    theme_preset = Column(String(20))
    accent_color = Column(String(20))
    whatsapp = Column(String(20))

    # Social links
    linkedin_url = Column(String(500))
    instagram_url = Column(String(500))
    facebook_url = Column(String(500))
    twitter_url = Column(String(500))
    website_url = Column(String(500))
    custom_links = Column(JSON, default=list)

    cta_text = Column(String(100))
    cta_url = Column(String(500))

    status = Column(_enum_column(CustomerStatus, "customerstatus"), nullable=False, default=CustomerStatus.ACTIVE)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="customer")
    orders = relationship("Order", back_populates="customer")


# ============================================================================
# CATALOG
# ============================================================================

class CardDesign(Base):
    __tablename__ = "card_designs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    base_msp = Column(Numeric(10, 2), nullable=False, default=600)
    preview_url = Column(String(500))
    template_url = Column(String(500))
    status = Column(_enum_column(DesignStatus, "designstatus"), nullable=False, default=DesignStatus.ACTIVE)
    total_sales = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class AgentMsp(Base):
    """Per-agent minimum selling price override for one design."""
    __tablename__ = "agent_msps"
    __table_args__ = (
        UniqueConstraint("agent_id", "card_design_id", name="uq_agent_msps_agent_design"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    agent_id = Column(String(36), ForeignKey("agents.id", ondelete="CASCADE"), nullable=False)
    card_design_id = Column(String(36), ForeignKey("card_designs.id", ondelete="CASCADE"), nullable=False)
    msp_amount = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    agent = relationship("Agent", back_populates="msp_overrides")
    card_design = relationship("CardDesign")


# ============================================================================
# ORDERS
# ============================================================================

class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_number = Column(Integer, unique=True, nullable=False, index=True)

    customer_id = Column(String(36), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    agent_id = Column(String(36), ForeignKey("agents.id", ondelete="SET NULL"), nullable=True)
    card_design_id = Column(String(36), ForeignKey("card_designs.id", ondelete="SET NULL"), nullable=True)

    # Customer details captured at order time
    customer_name = Column(String(255), nullable=False)
    customer_company = Column(String(255))
    customer_phone = Column(String(20), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_whatsapp = Column(String(20))
    customer_photo_url = Column(String(500))

    # Printed card text
    line1_text = Column(String(100), nullable=False)
    line2_text = Column(String(100))

    # Pricing (msp snapshot so later catalog edits do not rewrite history)
    msp_at_order = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=False)
    commission_amount = Column(Numeric(10, 2), nullable=False, default=0)
    override_commission = Column(Numeric(10, 2), nullable=False, default=0)

    status = Column(_enum_column(OrderStatus, "orderstatus"), nullable=False, default=OrderStatus.PENDING_APPROVAL, index=True)
    payment_status = Column(_enum_column(PaymentStatus, "paymentstatus"), nullable=False, default=PaymentStatus.PENDING)
    is_direct_sale = Column(Boolean, nullable=False, default=False)
    is_below_msp = Column(Boolean, nullable=False, default=False)

    portfolio_slug = Column(String(100))
    shipping_address = Column(JSON)
    tracking_number = Column(String(100))
    special_instructions = Column(Text)
    admin_notes = Column(Text)
    rejection_reason = Column(Text)

    # One-time token letting an agent-sold customer claim their account
    claim_token = Column(String(64), unique=True, nullable=True)
    claim_token_used = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    approved_at = Column(DateTime)
    shipped_at = Column(DateTime)
    delivered_at = Column(DateTime)
    paid_at = Column(DateTime)

    customer = relationship("Customer", back_populates="orders")
    agent = relationship("Agent", back_populates="orders")
    card_design = relationship("CardDesign")


# ============================================================================
# FINANCE
# ============================================================================

class Payout(Base):
    __tablename__ = "payouts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    agent_id = Column(String(36), ForeignKey("agents.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(_enum_column(PayoutMethod, "payoutmethod"), nullable=False)
    reference = Column(String(255))
    admin_notes = Column(Text)
    status = Column(_enum_column(PayoutStatus, "payoutstatus"), nullable=False, default=PayoutStatus.PENDING)
    processed_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())

    agent = relationship("Agent", back_populates="payouts")


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    category = Column(_enum_column(ExpenseCategory, "expensecategory"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text)
    expense_date = Column(Date, nullable=False, server_default=func.current_date())
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)
    agent_payout_id = Column(String(36), ForeignKey("payouts.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="system")
    action_url = Column(String(500))
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("Profile", back_populates="notifications")


# ============================================================================
# FUNNEL
# ============================================================================

class DraftOrder(Base):
    """Funnel state between profession pick and checkout; deleted once an order is placed."""
    __tablename__ = "draft_orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    profession = Column(String(50), nullable=False)
    user_name = Column(String(255))
    user_email = Column(String(255))
    template_id = Column(String(50))
    material = Column(String(20))
    personalization = Column(JSON, default=dict)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
