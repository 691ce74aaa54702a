# Services Module for TapOnce
# Contains business logic services shared by the routers

from services.notification_service import NotificationService, NotificationType, get_notification_service
from services.agent_service import AgentServiceError, DuplicateAgentError, PayoutError, InsufficientBalance
from services.account_service import AccountError, InvalidClaimToken, AlreadyClaimed, NotCustomerAccount
from services.order_service import OrderServiceError, BelowMspNotConfirmed

__all__ = [
    'NotificationService',
    'NotificationType',
    'get_notification_service',
    'AgentServiceError',
    'DuplicateAgentError',
    'PayoutError',
    'InsufficientBalance',
    'AccountError',
    'InvalidClaimToken',
    'AlreadyClaimed',
    'NotCustomerAccount',
    'OrderServiceError',
    'BelowMspNotConfirmed',
]
