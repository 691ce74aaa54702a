# Authentication and Authorization Dependencies for TapOnce
# These dependency factories provide access control for API endpoints

from fastapi import HTTPException, status, Depends
from sqlalchemy.orm import Session

from database.config import get_db
from database.models import Profile, Agent, AgentStatus, Customer
from auth.roles import UserType, Permission, has_any_permission
from auth.dependencies import get_current_user


class AuthError(HTTPException):
    """Custom exception for authentication/authorization errors."""

    def __init__(self, detail: str, status_code: int = status.HTTP_403_FORBIDDEN):
        super().__init__(status_code=status_code, detail=detail)


def require_permission(*permissions: Permission):
    """Dependency that requires the user to hold at least one of the permissions."""
    async def dependency(current_user: Profile = Depends(get_current_user)) -> Profile:
        if not has_any_permission(_get_user_type(current_user), list(permissions)):
            raise AuthError(detail="You don't have permission to perform this action")
        return current_user

    return dependency


def require_admin():
    """
    Dependency that requires the user to be an admin.

    Usage:
        @router.get("/api/admin/orders")
        async def list_orders(user: Profile = Depends(require_admin())):
            ...
    """
    async def dependency(current_user: Profile = Depends(get_current_user)) -> Profile:
        if _get_user_type(current_user) != UserType.ADMIN:
            raise AuthError(detail="Admin access required")
        return current_user

    return dependency


def require_agent():
    """Dependency resolving the caller's active Agent record."""
    async def dependency(
        current_user: Profile = Depends(get_current_user),
        db: Session = Depends(get_db)
    ) -> Agent:
        if _get_user_type(current_user) != UserType.AGENT:
            raise AuthError(detail="Agent access required")

        agent = db.query(Agent).filter(Agent.profile_id == current_user.id).first()
        if not agent:
            raise AuthError(detail="Agent profile not found", status_code=status.HTTP_404_NOT_FOUND)
        if agent.status != AgentStatus.ACTIVE:
            raise AuthError(detail="Agent account is inactive")

        return agent

    return dependency


def require_customer():
    """Dependency resolving the caller's Customer record."""
    async def dependency(
        current_user: Profile = Depends(get_current_user),
        db: Session = Depends(get_db)
    ) -> Customer:
        customer = db.query(Customer).filter(Customer.profile_id == current_user.id).first()
        if not customer:
            raise AuthError(detail="Customer profile not found", status_code=status.HTTP_404_NOT_FOUND)
        return customer

    return dependency


def _get_user_type(user: Profile) -> UserType:
    """Helper to extract UserType from a Profile row."""
    role = user.role.value if hasattr(user.role, "value") else user.role
    try:
        return UserType(str(role).lower())
    except ValueError:
        return UserType.CUSTOMER
