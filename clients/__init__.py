# API clients for TapOnce

from clients.admin_client import AdminApiError, AdminClient

__all__ = ['AdminApiError', 'AdminClient']
