"""
Court reservation status management.
Holds the two status vocabularies, the transition matrix, and the admin
status update and resident cancellation workflows.
"""

import enum
import sqlite3
import logging
from flask import current_app

from database import get_db
from utils.audit import log_court_status_change
from utils.datetime_helpers import now_iso
from utils.errors import (
    ValidationError, MissingActor, InvalidTransition, Forbidden, NotFound, PersistenceFailure
)
from utils.side_effects import SideEffectResult, run_side_effect
from utils.validators import validate_rejection_comment, MIN_REJECTION_COMMENT_LENGTH

logger = logging.getLogger(__name__)


# =============================================================================
# STATUS VOCABULARIES
# =============================================================================

class ReservationStatus(str, enum.Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'


class TransactionStatus(str, enum.Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'


TERMINAL_STATUSES = frozenset({ReservationStatus.REJECTED, ReservationStatus.CANCELLED})

# Re-saving the current status is allowed (comment / processor updates)
VALID_TRANSITIONS = {
    ReservationStatus.PENDING: frozenset({
        ReservationStatus.PENDING,
        ReservationStatus.APPROVED,
        ReservationStatus.REJECTED,
        ReservationStatus.CANCELLED,
    }),
    ReservationStatus.APPROVED: frozenset({
        ReservationStatus.APPROVED,
        ReservationStatus.CANCELLED,
    }),
    ReservationStatus.REJECTED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}

_TRANSACTION_STATUS_MAP = {
    ReservationStatus.PENDING: TransactionStatus.PENDING,
    ReservationStatus.APPROVED: TransactionStatus.APPROVED,
    ReservationStatus.CANCELLED: TransactionStatus.CANCELLED,
    # The ledger has no "rejected"; a rejected request is a cancelled charge
    ReservationStatus.REJECTED: TransactionStatus.CANCELLED,
}


def parse_reservation_status(value) -> ReservationStatus:
    """
    Read a reservation status from user input.

    Raises:
        ValidationError: If the value is not a known status
    """
    try:
        return ReservationStatus(value)
    except ValueError:
        raise ValidationError(f'Invalid status value: {value}') from None


def to_transaction_status(status) -> TransactionStatus:
    """Map a reservation status onto the ledger vocabulary."""
    return _TRANSACTION_STATUS_MAP[ReservationStatus(status)]


def get_allowed_transitions(current_status) -> list:
    """Statuses reachable from current_status, excluding itself."""
    current = ReservationStatus(current_status)
    return sorted(s.value for s in VALID_TRANSITIONS[current] if s != current)


def validate_status_transition(current_status, new_status) -> None:
    """
    Check a status change against the transition matrix.

    Raises:
        InvalidTransition: If current_status is terminal or the move is not allowed
    """
    current = ReservationStatus(current_status)
    target = ReservationStatus(new_status)

    if current in TERMINAL_STATUSES:
        raise InvalidTransition(current.value, target.value,
                                message=f'Cannot change status of a {current.value} reservation')

    if target not in VALID_TRANSITIONS[current]:
        raise InvalidTransition(current.value, target.value)


# =============================================================================
# RESULT
# =============================================================================

class StatusUpdateOutcome:
    """
    Result of a status change: the saved reservation plus the best-effort
    side effects (ledger sync, audit log) that ran after it.
    """

    def __init__(self, reservation: dict, previous_status: str, ledger: SideEffectResult,
                 audit: SideEffectResult):
        self.reservation = reservation
        self.previous_status = previous_status
        self.ledger = ledger
        self.audit = audit

    @property
    def side_effects(self) -> list:
        return [self.ledger, self.audit]

    @property
    def failed_side_effects(self) -> list:
        return [effect for effect in self.side_effects if not effect.ok]

    @property
    def transaction(self) -> dict:
        return self.ledger.value if self.ledger.ok else None


# =============================================================================
# WORKFLOWS
# =============================================================================

def _save_status(reservation_id: str, status: str, admin_comment=None, processed_by=None) -> None:
    """Persist status (and optional comment/processor) for one reservation."""
    db = get_db()
    sets = ['status = ?', 'updated_at = ?']
    params = [status, now_iso()]

    if admin_comment is not None:
        sets.append('admin_comment = ?')
        params.append(admin_comment)

    if processed_by:
        sets.append('processed_by = ?')
        params.append(processed_by)

    params.append(reservation_id)

    try:
        db.execute(f"UPDATE court_reservations SET {', '.join(sets)} WHERE id = ?", params)
        db.commit()
    except sqlite3.Error as e:
        db.rollback()
        logger.error(f"Error saving reservation {reservation_id}: {e}", exc_info=True)
        raise PersistenceFailure('Error saving reservation') from e


def _sync_ledger(reservation: dict, status: ReservationStatus, admin_comment=None, processed_by=None):
    from models.transaction import sync_transaction_status

    return run_side_effect(
        'ledger', sync_transaction_status,
        reservation,
        to_transaction_status(status),
        admin_comment=admin_comment,
        processed_by=processed_by,
        evening_start_hour=current_app.config.get('COURT_EVENING_START_HOUR', 18),
        hourly_rate=current_app.config.get('COURT_EVENING_RATE', 200)
    )


def update_court_reservation_status(
    reservation_id: str,
    status,
    admin_comment: str = None,
    actor_id: str = None,
    actor_name: str = None
) -> StatusUpdateOutcome:
    """
    Admin status change for a court reservation.

    Behavior:
    1. Rejects unknown statuses, missing reservations and moves out of a
       terminal status
    2. Requires a comment of at least 3 characters for a rejection
    3. Saves status, comment, processed_by and updated_at
    4. Mirrors the status into the transaction ledger (creating the ledger
       row if it is missing)
    5. Appends an admin audit entry when an actor name is known

    Steps 4 and 5 are best-effort: failures are logged and reported on the
    outcome, the status change itself stands.

    Args:
        reservation_id: Reservation ID
        status: New status (None keeps the current one)
        admin_comment: Optional comment, required for rejection
        actor_id: ID of the admin making the change
        actor_name: Display name used in the audit log

    Returns:
        StatusUpdateOutcome

    Raises:
        ValidationError, NotFound, InvalidTransition, PersistenceFailure
    """
    from models.court_crud import get_court_reservation_by_id

    new_status = parse_reservation_status(status) if status else None

    reservation = get_court_reservation_by_id(reservation_id)
    if not reservation:
        raise NotFound('Court reservation not found')

    previous_status = reservation['status']
    if new_status is None:
        new_status = ReservationStatus(previous_status)

    validate_status_transition(previous_status, new_status)

    if new_status == ReservationStatus.REJECTED and not validate_rejection_comment(admin_comment):
        raise ValidationError(
            f'Admin comment is required and must be at least '
            f'{MIN_REJECTION_COMMENT_LENGTH} characters long for rejection'
        )

    _save_status(reservation_id, new_status.value, admin_comment, actor_id)
    updated = get_court_reservation_by_id(reservation_id)
    logger.info(f"Court reservation {reservation_id}: {previous_status} -> {new_status.value}")

    ledger = _sync_ledger(updated, new_status, admin_comment, actor_id)

    if actor_name:
        audit = log_court_status_change(actor_name, updated, previous_status, new_status.value)
    else:
        audit = SideEffectResult.skip('audit')

    return StatusUpdateOutcome(updated, previous_status, ledger, audit)


def cancel_court_reservation(reservation_id: str, requester_id: str) -> StatusUpdateOutcome:
    """
    Resident cancellation of their own reservation.

    Args:
        reservation_id: Reservation ID
        requester_id: ID of the user asking to cancel

    Returns:
        StatusUpdateOutcome (audit is always skipped)

    Raises:
        MissingActor, NotFound, Forbidden, InvalidTransition, PersistenceFailure
    """
    from models.court_crud import get_court_reservation_by_id

    if not requester_id:
        raise MissingActor('User ID is required')

    reservation = get_court_reservation_by_id(reservation_id)
    if not reservation:
        raise NotFound('Court reservation not found')

    if str(reservation['booked_by']) != str(requester_id):
        raise Forbidden('Unauthorized to cancel this reservation')

    previous_status = reservation['status']
    if ReservationStatus(previous_status) in TERMINAL_STATUSES:
        raise InvalidTransition(previous_status, ReservationStatus.CANCELLED.value,
                                message='This reservation is already cancelled or rejected')
    validate_status_transition(previous_status, ReservationStatus.CANCELLED)

    _save_status(reservation_id, ReservationStatus.CANCELLED.value)
    updated = get_court_reservation_by_id(reservation_id)
    logger.info(f"Court reservation {reservation_id} cancelled by its requester")

    ledger = _sync_ledger(updated, ReservationStatus.CANCELLED)

    return StatusUpdateOutcome(updated, previous_status, ledger, SideEffectResult.skip('audit'))
