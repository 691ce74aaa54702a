# Notification Service for TapOnce
# Provides centralized notification creation and management

from sqlalchemy.orm import Session
from typing import Optional, List
from enum import Enum

from database.models import Notification, Profile, UserRole


class NotificationType(str, Enum):
    NEW_ORDER = "new_order"
    ORDER_APPROVED = "order_approved"
    ORDER_REJECTED = "order_rejected"
    ORDER_STATUS = "order_status"
    AGENT_APPLICATION = "agent_application"
    PAYOUT_REQUESTED = "payout_requested"
    PAYOUT_COMPLETED = "payout_completed"
    SYSTEM = "system"


class NotificationService:
    """
    Service for creating and managing user notifications.
    Use this service from any router; it flushes but never commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        user_id: str,
        type: NotificationType | str,
        title: str,
        message: str,
        action_url: Optional[str] = None,
    ) -> Notification:
        """
        Create a new notification for a user.

        Args:
            user_id: Profile id to notify
            type: Notification type (use NotificationType enum)
            title: Short notification title
            message: Full notification message
            action_url: Optional link for the notification action
        """
        type_value = type.value if isinstance(type, NotificationType) else str(type)

        notification = Notification(
            user_id=user_id,
            type=type_value,
            title=title,
            message=message,
            action_url=action_url,
        )
        self.db.add(notification)
        self.db.flush()  # Get the ID without committing
        return notification

    def notify_admins(
        self,
        type: NotificationType | str,
        title: str,
        message: str,
        action_url: Optional[str] = None,
    ) -> List[Notification]:
        admins = self.db.query(Profile).filter(Profile.role == UserRole.ADMIN).all()
        return [self.create(a.id, type, title, message, action_url) for a in admins]

    def get_user_notifications(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read == False)
        return query.order_by(Notification.created_at.desc()).limit(limit).all()

    def mark_as_read(self, notification_id: str, user_id: str) -> bool:
        """
        Mark a notification as read.

        Returns:
            True if notification was marked read, False if not found
        """
        notification = self.db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.user_id == user_id
        ).first()

        if notification:
            notification.read = True
            return True
        return False

    def mark_all_as_read(self, user_id: str) -> int:
        """Returns the number of notifications marked as read."""
        return self.db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.read == False
        ).update({"read": True})

    def get_unread_count(self, user_id: str) -> int:
        return self.db.query(Notification).filter(
            Notification.user_id == user_id,
            Notification.read == False
        ).count()

    # =========================================================================
    # DOMAIN HELPERS
    # =========================================================================

    def notify_new_order(self, order_number: int, customer_name: str, source: str):
        return self.notify_admins(
            NotificationType.NEW_ORDER,
            title=f"New order #{order_number}",
            message=f"{customer_name} placed an order via {source}",
            action_url="/admin/orders",
        )

    def notify_agent_application(self, applicant_name: str, city: str):
        return self.notify_admins(
            NotificationType.AGENT_APPLICATION,
            title="New agent application",
            message=f"{applicant_name} from {city} applied to become an agent",
            action_url="/admin/agents",
        )

    def notify_order_decision(self, agent_profile_id: str, order_number: int, approved: bool, reason: Optional[str] = None):
        if approved:
            return self.create(
                agent_profile_id,
                NotificationType.ORDER_APPROVED,
                title=f"Order #{order_number} approved",
                message="Your commission has been added to your balance.",
                action_url="/agent/orders",
            )
        return self.create(
            agent_profile_id,
            NotificationType.ORDER_REJECTED,
            title=f"Order #{order_number} rejected",
            message=reason or "The order was rejected by the admin.",
            action_url="/agent/orders",
        )

    def notify_payout_completed(self, agent_profile_id: str, amount):
        return self.create(
            agent_profile_id,
            NotificationType.PAYOUT_COMPLETED,
            title="Payout sent",
            message=f"₹{amount} has been paid out to you.",
            action_url="/agent/payouts",
        )

    def notify_payout_requested(self, agent_name: str, amount):
        return self.notify_admins(
            NotificationType.PAYOUT_REQUESTED,
            title="Payout requested",
            message=f"{agent_name} requested a payout of ₹{amount}",
            action_url="/admin/finance",
        )


def get_notification_service(db: Session) -> NotificationService:
    return NotificationService(db)
