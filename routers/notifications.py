# Notifications Router for TapOnce
# In-app notifications for admins, agents and customers

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session

from database.config import get_db
from database.models import Notification, Profile
from auth.roles import Permission
from auth.decorators import require_permission
from services.notification_service import get_notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def notification_dict(n: Notification) -> dict:
    return {
        "id": n.id,
        "type": n.type,
        "title": n.title,
        "message": n.message,
        "actionUrl": n.action_url,
        "read": n.read,
        "createdAt": n.created_at.isoformat() if n.created_at else None,
    }


# ============================================================================
# NOTIFICATION ENDPOINTS
# ============================================================================

@router.get("")
async def get_notifications(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_permission(Permission.VIEW_NOTIFICATIONS)),
    unread_only: bool = Query(False, alias="unreadOnly", description="Only return unread notifications"),
    limit: int = Query(50, ge=1, le=100),
):
    """
    Get user's notifications, newest first.
    """
    service = get_notification_service(db)
    notifications = service.get_user_notifications(current_user.id, unread_only=unread_only, limit=limit)
    return {
        "notifications": [notification_dict(n) for n in notifications],
        "unreadCount": service.get_unread_count(current_user.id),
    }


@router.put("/read-all")
async def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_permission(Permission.VIEW_NOTIFICATIONS))
):
    count = get_notification_service(db).mark_all_as_read(current_user.id)
    db.commit()
    return {"success": True, "marked": count}


@router.put("/{notification_id}/read")
async def mark_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_permission(Permission.VIEW_NOTIFICATIONS))
):
    """
    Mark a notification as read.
    """
    if not get_notification_service(db).mark_as_read(notification_id, current_user.id):
        raise HTTPException(status_code=404, detail="Notification not found")
    db.commit()
    return {"success": True}
