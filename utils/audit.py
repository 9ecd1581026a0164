"""
Audit logging helpers.
Builds admin log entries for reservation status changes and writes them
best-effort: a failed write is logged and reported, never raised.
"""

import logging

from utils.side_effects import SideEffectResult, run_side_effect
from utils.datetime_helpers import format_log_date

logger = logging.getLogger(__name__)

COURT_ENTITY_TYPE = 'CourtReservation'

_STATUS_VERBS = {
    'approved': 'Approved',
    'rejected': 'Rejected',
    'cancelled': 'Cancelled',
}


def court_log_action(new_status: str):
    """AuditAction tag for a court reservation moving to new_status."""
    from models.audit_log import AuditAction

    return {
        'approved': AuditAction.COURT_RESERVATION_APPROVED,
        'rejected': AuditAction.COURT_RESERVATION_REJECTED,
        'cancelled': AuditAction.COURT_RESERVATION_CANCELLED,
    }.get(new_status, AuditAction.COURT_RESERVATION_UPDATED)


def describe_court_status_change(reservation: dict, previous_status: str, new_status: str) -> str:
    """
    Human-readable audit text for a status change.

    Example:
        'Approved court reservation for Juan Dela Cruz on Jun 1, 2025
        (Service ID: CR-250601-001); status pending -> approved'
    """
    verb = _STATUS_VERBS.get(new_status, 'Updated')
    service_id = reservation.get('service_id') or reservation['id']
    return (
        f"{verb} court reservation for {reservation['representative_name']} "
        f"on {format_log_date(reservation['reservation_date'])} "
        f"(Service ID: {service_id}); status {previous_status} -> {new_status}"
    )


def log_admin_action(
    admin_name: str,
    action,
    details: str,
    entity_id: str = None,
    entity_type: str = COURT_ENTITY_TYPE
) -> SideEffectResult:
    """
    Append an admin audit entry without ever failing the caller.

    Returns:
        SideEffectResult: ok with the new log ID, or failed with the error
    """
    from models.audit_log import create_user_log

    if not admin_name:
        return SideEffectResult.skip('audit')

    result = run_side_effect(
        'audit', create_user_log,
        admin_name=admin_name,
        action=action,
        details=details,
        entity_id=entity_id,
        entity_type=entity_type
    )
    if not result.ok:
        logger.error(f"Failed to log audit entry for {entity_type} {entity_id}: {result.error}")
    return result


def log_court_status_change(
    admin_name: str,
    reservation: dict,
    previous_status: str,
    new_status: str
) -> SideEffectResult:
    """Audit a court reservation status change made by an admin."""
    return log_admin_action(
        admin_name=admin_name,
        action=court_log_action(new_status),
        details=describe_court_status_change(reservation, previous_status, new_status),
        entity_id=reservation.get('service_id') or reservation['id'],
        entity_type=COURT_ENTITY_TYPE
    )


__all__ = [
    'court_log_action',
    'describe_court_status_change',
    'log_admin_action',
    'log_court_status_change',
]
