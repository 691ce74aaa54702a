# Role-Based Access Control for TapOnce
# Defines user roles and the permissions each role carries

from enum import Enum
from typing import List, Set


class UserType(str, Enum):
    """Account roles; mirrors database.models.UserRole."""
    ADMIN = "admin"
    AGENT = "agent"
    CUSTOMER = "customer"


class Permission(str, Enum):
    """Fine-grained permissions for the platform."""

    # Agent permissions
    SUBMIT_ORDERS = "submit_orders"
    VIEW_OWN_ORDERS = "view_own_orders"
    VIEW_CATALOG = "view_catalog"
    REQUEST_PAYOUTS = "request_payouts"
    VIEW_NETWORK = "view_network"

    # Customer permissions
    EDIT_OWN_PROFILE = "edit_own_profile"

    # Common permissions
    VIEW_NOTIFICATIONS = "view_notifications"

    # Admin permissions
    MANAGE_ORDERS = "manage_orders"
    MANAGE_AGENTS = "manage_agents"
    MANAGE_CATALOG = "manage_catalog"
    MANAGE_PAYOUTS = "manage_payouts"
    VIEW_FINANCE = "view_finance"


# Role to permissions mapping
ROLE_PERMISSIONS: dict[UserType, Set[Permission]] = {
    UserType.AGENT: {
        Permission.SUBMIT_ORDERS,
        Permission.VIEW_OWN_ORDERS,
        Permission.VIEW_CATALOG,
        Permission.REQUEST_PAYOUTS,
        Permission.VIEW_NETWORK,
        Permission.VIEW_NOTIFICATIONS,
    },

    UserType.CUSTOMER: {
        Permission.EDIT_OWN_PROFILE,
        Permission.VIEW_NOTIFICATIONS,
    },

    UserType.ADMIN: {
        # Admin has ALL permissions
        *Permission.__members__.values()
    },
}


def get_permissions_for_role(user_type: UserType) -> Set[Permission]:
    """Get all permissions for a given user type."""
    return ROLE_PERMISSIONS.get(user_type, set())


def has_any_permission(user_type: UserType, permissions: List[Permission]) -> bool:
    """Check if a user type has any of the given permissions."""
    user_permissions = get_permissions_for_role(user_type)
    return any(p in user_permissions for p in permissions)
