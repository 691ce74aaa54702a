# Auth module for TapOnce
# Provides role-based access control and authentication dependencies

from auth.roles import (
    UserType,
    Permission,
    ROLE_PERMISSIONS,
    get_permissions_for_role,
    has_any_permission,
)

from auth.decorators import (
    AuthError,
    require_permission,
    require_admin,
    require_agent,
    require_customer,
)

__all__ = [
    # Roles
    "UserType",
    "Permission",
    "ROLE_PERMISSIONS",
    "get_permissions_for_role",
    "has_any_permission",

    # Dependencies
    "AuthError",
    "require_permission",
    "require_admin",
    "require_agent",
    "require_customer",
]
