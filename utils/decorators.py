"""
Route decorators for authorization.
Provides role-based access control for API routes.
"""

from functools import wraps
from flask_login import login_required, current_user

from utils.api_response import api_error
from utils.messages import MESSAGES

ADMIN_ROLES = ('admin', 'superadmin')


def role_required(*roles: str):
    """
    Decorator to require one of the given user types for a route.

    Usage:
        @bp.route('/court-reservations/<reservation_id>/status', methods=['PUT'])
        @login_required
        @role_required('admin', 'superadmin')
        def update_status(reservation_id):
            ...

    Args:
        roles: Allowed user_type values

    Returns:
        Decorator function
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if getattr(current_user, 'user_type', None) not in roles:
                return api_error(MESSAGES['forbidden'], status=403)
            return func(*args, **kwargs)
        return wrapper
    return decorator


def admin_required(func):
    """Shortcut for role_required('admin', 'superadmin')."""
    return role_required(*ADMIN_ROLES)(func)


# Re-export login_required for convenience
__all__ = ['login_required', 'role_required', 'admin_required', 'ADMIN_ROLES']
