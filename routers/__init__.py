# TapOnce Routers Module
# Exports all modular API routers

from routers.agents import router as agents_router
from routers.admin_agents import router as admin_agents_router
from routers.admin_payouts import router as admin_payouts_router
from routers.admin_orders import router as admin_orders_router
from routers.admin_catalog import router as admin_catalog_router
from routers.orders import router as orders_router
from routers.agent_portal import router as agent_portal_router
from routers.auth import router as auth_router
from routers.claim_account import router as claim_account_router
from routers.customer import router as customer_router
from routers.public_profile import router as public_profile_router
from routers.drafts import router as drafts_router
from routers.notifications import router as notifications_router

__all__ = [
    'agents_router',
    'admin_agents_router',
    'admin_payouts_router',
    'admin_orders_router',
    'admin_catalog_router',
    'orders_router',
    'agent_portal_router',
    'auth_router',
    'claim_account_router',
    'customer_router',
    'public_profile_router',
    'drafts_router',
    'notifications_router',
]
