"""TapOnce initial schema

This migration creates:
1. profiles (admin / agent / customer logins)
2. agents and agent_applications
3. customers (public profile data)
4. card_designs and agent_msps
5. orders
6. payouts and expenses
7. notifications
8. draft_orders (funnel state)

Revision ID: taponce_initial_schema
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = 'taponce_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum('admin', 'agent', 'customer', name='userrole')
agent_status = sa.Enum('active', 'inactive', name='agentstatus')
application_status = sa.Enum('pending', 'approved', 'rejected', name='applicationstatus')
customer_status = sa.Enum('active', 'pending', 'suspended', name='customerstatus')
design_status = sa.Enum('active', 'inactive', name='designstatus')
order_status = sa.Enum(
    'pending_approval', 'approved', 'printing', 'printed', 'ready_to_ship',
    'shipped', 'delivered', 'paid', 'rejected', 'cancelled',
    name='orderstatus'
)
payment_status = sa.Enum('pending', 'advance_paid', 'paid', 'cod', name='paymentstatus')
payout_method = sa.Enum('upi', 'bank_transfer', 'cash', name='payoutmethod')
payout_status = sa.Enum('pending', 'completed', 'failed', name='payoutstatus')
expense_category = sa.Enum('printing', 'shipping', 'agent_commission', 'marketing', 'other', name='expensecategory')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade():
    # 1. Profiles
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20)),
        sa.Column('avatar_url', sa.String(500)),
        *_timestamps(),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)

    # 2. Agents and applications
    op.create_table(
        'agents',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('profile_id', sa.String(36), sa.ForeignKey('profiles.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('referral_code', sa.String(20), nullable=False),
        sa.Column('city', sa.String(100)),
        sa.Column('upi_id', sa.String(100)),
        sa.Column('bank_account', sa.String(50)),
        sa.Column('bank_ifsc', sa.String(20)),
        sa.Column('bank_holder_name', sa.String(255)),
        sa.Column('base_commission', sa.Numeric(10, 2), nullable=False),
        sa.Column('parent_agent_id', sa.String(36), sa.ForeignKey('agents.id', ondelete='SET NULL')),
        sa.Column('status', agent_status, nullable=False),
        sa.Column('total_sales', sa.Integer(), nullable=False),
        sa.Column('total_earnings', sa.Numeric(10, 2), nullable=False),
        sa.Column('available_balance', sa.Numeric(10, 2), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_agents_referral_code', 'agents', ['referral_code'], unique=True)

    op.create_table(
        'agent_applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('experience', sa.Text()),
        sa.Column('referral_code_used', sa.String(20)),
        sa.Column('parent_agent_id', sa.String(36), sa.ForeignKey('agents.id', ondelete='SET NULL')),
        sa.Column('generated_referral_code', sa.String(20), unique=True),
        sa.Column('status', application_status, nullable=False),
        sa.Column('reviewed_at', sa.DateTime()),
        sa.Column('reviewed_by', sa.String(36), sa.ForeignKey('profiles.id', ondelete='SET NULL')),
        sa.Column('rejection_reason', sa.Text()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_agent_applications_email', 'agent_applications', ['email'])

    # 3. Customers
    op.create_table(
        'customers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('profile_id', sa.String(36), sa.ForeignKey('profiles.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('company', sa.String(255)),
        sa.Column('job_title', sa.String(255)),
        sa.Column('bio', sa.Text()),
        sa.Column('tagline', sa.String(255)),
        sa.Column('location', sa.String(255)),
        sa.Column('profession', sa.String(50)),
        sa.Column('theme_preset', sa.String(20)),
        sa.Column('accent_color', sa.String(20)),
        sa.Column('whatsapp', sa.String(20)),
        sa.Column('linkedin_url', sa.String(500)),
        sa.Column('instagram_url', sa.String(500)),
        sa.Column('facebook_url', sa.String(500)),
        sa.Column('twitter_url', sa.String(500)),
        sa.Column('website_url', sa.String(500)),
        sa.Column('custom_links', sa.JSON()),
        sa.Column('cta_text', sa.String(100)),
        sa.Column('cta_url', sa.String(500)),
        sa.Column('status', customer_status, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_customers_slug', 'customers', ['slug'], unique=True)

    # 4. Catalog
    op.create_table(
        'card_designs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('base_msp', sa.Numeric(10, 2), nullable=False),
        sa.Column('preview_url', sa.String(500)),
        sa.Column('template_url', sa.String(500)),
        sa.Column('status', design_status, nullable=False),
        sa.Column('total_sales', sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'agent_msps',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('agent_id', sa.String(36), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('card_design_id', sa.String(36), sa.ForeignKey('card_designs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('msp_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('agent_id', 'card_design_id', name='uq_agent_msps_agent_design'),
    )

    # 5. Orders
    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('order_number', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.String(36), sa.ForeignKey('customers.id', ondelete='SET NULL')),
        sa.Column('agent_id', sa.String(36), sa.ForeignKey('agents.id', ondelete='SET NULL')),
        sa.Column('card_design_id', sa.String(36), sa.ForeignKey('card_designs.id', ondelete='SET NULL')),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_company', sa.String(255)),
        sa.Column('customer_phone', sa.String(20), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=False),
        sa.Column('customer_whatsapp', sa.String(20)),
        sa.Column('customer_photo_url', sa.String(500)),
        sa.Column('line1_text', sa.String(100), nullable=False),
        sa.Column('line2_text', sa.String(100)),
        sa.Column('msp_at_order', sa.Numeric(10, 2), nullable=False),
        sa.Column('sale_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('commission_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('override_commission', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', order_status, nullable=False),
        sa.Column('payment_status', payment_status, nullable=False),
        sa.Column('is_direct_sale', sa.Boolean(), nullable=False),
        sa.Column('is_below_msp', sa.Boolean(), nullable=False),
        sa.Column('portfolio_slug', sa.String(100)),
        sa.Column('shipping_address', sa.JSON()),
        sa.Column('tracking_number', sa.String(100)),
        sa.Column('special_instructions', sa.Text()),
        sa.Column('admin_notes', sa.Text()),
        sa.Column('rejection_reason', sa.Text()),
        sa.Column('claim_token', sa.String(64), unique=True),
        sa.Column('claim_token_used', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.Column('approved_at', sa.DateTime()),
        sa.Column('shipped_at', sa.DateTime()),
        sa.Column('delivered_at', sa.DateTime()),
        sa.Column('paid_at', sa.DateTime()),
    )
    op.create_index('ix_orders_order_number', 'orders', ['order_number'], unique=True)
    op.create_index('ix_orders_customer_email', 'orders', ['customer_email'])
    op.create_index('ix_orders_status', 'orders', ['status'])

    # 6. Finance
    op.create_table(
        'payouts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('agent_id', sa.String(36), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', payout_method, nullable=False),
        sa.Column('reference', sa.String(255)),
        sa.Column('admin_notes', sa.Text()),
        sa.Column('status', payout_status, nullable=False),
        sa.Column('processed_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        'expenses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('category', expense_category, nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('expense_date', sa.Date(), nullable=False, server_default=sa.func.current_date()),
        sa.Column('order_id', sa.String(36), sa.ForeignKey('orders.id', ondelete='SET NULL')),
        sa.Column('agent_payout_id', sa.String(36), sa.ForeignKey('payouts.id', ondelete='SET NULL')),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # 7. Notifications
    op.create_table(
        'notifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('action_url', sa.String(500)),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    # 8. Funnel drafts
    op.create_table(
        'draft_orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('profession', sa.String(50), nullable=False),
        sa.Column('user_name', sa.String(255)),
        sa.Column('user_email', sa.String(255)),
        sa.Column('template_id', sa.String(50)),
        sa.Column('material', sa.String(20)),
        sa.Column('personalization', sa.JSON()),
        *_timestamps(),
    )


def downgrade():
    for table in (
        'draft_orders', 'notifications', 'expenses', 'payouts', 'orders',
        'agent_msps', 'card_designs', 'customers', 'agent_applications',
        'agents', 'profiles',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (
        expense_category, payout_status, payout_method, payment_status, order_status,
        design_status, customer_status, application_status, agent_status, user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
