"""
Court reservation CRUD operations.
Handles creation (with conflict check and ledger entry) and reads.
"""

import math
import sqlite3
import uuid
import logging
from datetime import date
from flask import current_app

from database import get_db
from utils.datetime_helpers import now_iso, parse_hhmm, to_day_key
from utils.errors import ValidationError, MissingActor, SlotConflict, PersistenceFailure
from utils.validators import validate_time_format
from .court_availability import find_slot_holding_reservations, has_time_conflict, reservation_interval
from .court_state import ReservationStatus, TransactionStatus
from .pricing import calculate_court_amount
from .transaction import insert_transaction, build_court_details, get_transaction_by_id

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


# =============================================================================
# SERVICE ID GENERATION
# =============================================================================

def generate_service_id(reservation_date: str, cursor=None) -> str:
    """
    Generate the human-readable service ID for a reservation.

    Format: CR-YYMMDD-NNN where NNN is the sequence within the
    reservation day (001, 002, ...). Call inside the creating transaction
    so the sequence cannot be handed out twice.

    Args:
        reservation_date: Reservation date (YYYY-MM-DD)
        cursor: Active transaction cursor

    Returns:
        str: Service ID, e.g. CR-250601-001
    """
    prefix = 'CR-' + date.fromisoformat(reservation_date).strftime('%y%m%d') + '-'

    cur = cursor or get_db().cursor()
    cur.execute('''
        SELECT MAX(CAST(SUBSTR(service_id, 11) AS INTEGER)) as max_seq
        FROM court_reservations
        WHERE service_id LIKE ?
    ''', (f'{prefix}%',))
    result = cur.fetchone()
    next_seq = (result['max_seq'] or 0) + 1

    return f'{prefix}{next_seq:03d}'


# =============================================================================
# CREATE
# =============================================================================

def _validate_booking_input(requester_id, reservation_date, start_time, duration, representative_name):
    """Normalize and validate create input. Returns (day_key, start_time, duration)."""
    if not requester_id:
        raise MissingActor('User ID is required')

    if not reservation_date:
        raise ValidationError('Reservation date is required')
    try:
        day_key = to_day_key(reservation_date)
    except ValueError:
        raise ValidationError(f'Invalid reservation date: {reservation_date}') from None

    if not start_time or not validate_time_format(start_time):
        raise ValidationError(f'Invalid start time: {start_time}. Use HH:MM')
    hours, minutes = parse_hhmm(start_time)

    try:
        duration = float(duration)
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid duration: {duration}') from None
    if not math.isfinite(duration) or duration <= 0:
        raise ValidationError('Duration must be a positive number of hours')

    # Conflicts are bucketed per day, so a booking may not run past midnight
    if hours * 60 + minutes + int(round(duration * 60)) > MINUTES_PER_DAY:
        raise ValidationError('Reservation must end by midnight')

    if not representative_name or not str(representative_name).strip():
        raise ValidationError('Representative name is required')

    # Zero-padded so that text ordering matches time ordering
    return day_key, f'{hours:02d}:{minutes:02d}', duration


def create_court_reservation(
    requester_id: str,
    reservation_date,
    start_time: str,
    duration,
    representative_name: str,
    contact_number: str = None,
    purpose: str = None,
    number_of_people: int = None,
    additional_notes: str = ''
) -> tuple:
    """
    Create a pending court reservation and its pending ledger row.

    The conflict check and both inserts run in one BEGIN IMMEDIATE
    transaction: SQLite hands the write lock to one creator at a time, so
    a concurrent request for the same slot waits and then sees this row.
    A wait longer than DATABASE_TIMEOUT fails with PersistenceFailure.

    Args:
        requester_id: ID of the booking user
        reservation_date: Date (date or ISO string)
        start_time: Start time (HH:MM)
        duration: Duration in hours (> 0)
        representative_name: Name of the group representative
        contact_number: Contact phone number
        purpose: Purpose of the booking
        number_of_people: Expected attendance
        additional_notes: Free text

    Returns:
        tuple: (reservation dict, transaction dict)

    Raises:
        MissingActor, ValidationError, SlotConflict, PersistenceFailure
    """
    day_key, start_time, duration = _validate_booking_input(
        requester_id, reservation_date, start_time, duration, representative_name
    )
    candidate = reservation_interval(start_time, duration)
    amount = calculate_court_amount(
        start_time, duration,
        current_app.config.get('COURT_EVENING_START_HOUR', 18),
        current_app.config.get('COURT_EVENING_RATE', 200)
    )

    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('BEGIN IMMEDIATE')

        existing = find_slot_holding_reservations(day_key, cursor=cursor)
        if has_time_conflict(candidate, existing):
            raise SlotConflict(
                'The requested time slot conflicts with an existing reservation',
                reservation_date=day_key, start_time=start_time, duration=duration
            )

        reservation_id = uuid.uuid4().hex
        service_id = generate_service_id(day_key, cursor)
        timestamp = now_iso()

        cursor.execute('''
            INSERT INTO court_reservations (
                id, service_id, representative_name, contact_number, purpose,
                number_of_people, additional_notes, booked_by,
                reservation_date, start_time, duration, status,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            reservation_id, service_id, representative_name.strip(), contact_number, purpose,
            number_of_people, additional_notes or '', requester_id,
            day_key, start_time, duration, ReservationStatus.PENDING.value,
            timestamp, timestamp
        ))

        reservation = {
            'id': reservation_id,
            'representative_name': representative_name.strip(),
            'reservation_date': day_key,
            'start_time': start_time,
            'duration': duration,
            'purpose': purpose,
        }
        transaction_id = insert_transaction(
            cursor,
            user_id=requester_id,
            reference_id=reservation_id,
            amount=amount,
            details=build_court_details(reservation),
            status=TransactionStatus.PENDING
        )

        db.commit()

    except SlotConflict:
        db.rollback()
        raise
    except sqlite3.Error as e:
        db.rollback()
        logger.error(f"Error creating court reservation: {e}", exc_info=True)
        raise PersistenceFailure('Error creating court reservation') from e
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created court reservation {service_id} on {day_key} {start_time} for {duration}h")
    return get_court_reservation_by_id(reservation_id), get_transaction_by_id(transaction_id)


# =============================================================================
# READ
# =============================================================================

_SELECT_WITH_NAMES = '''
    SELECT r.*,
           b.first_name || ' ' || b.last_name as booked_by_name,
           b.email as booked_by_email,
           p.first_name || ' ' || p.last_name as processed_by_name
    FROM court_reservations r
    LEFT JOIN users b ON r.booked_by = b.id
    LEFT JOIN users p ON r.processed_by = p.id
'''


def get_court_reservation_by_id(reservation_id: str) -> dict:
    """
    Get reservation by ID with booker and processor names.

    Args:
        reservation_id: Reservation ID

    Returns:
        dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute(_SELECT_WITH_NAMES + ' WHERE r.id = ?', (reservation_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_court_reservations_filtered(
    user_id: str = None,
    status: str = None,
    start_date: str = None,
    end_date: str = None
) -> list:
    """
    List reservations ordered by date and start time.

    Args:
        user_id: Only reservations booked by this user
        status: Only this status
        start_date: Reservation date on or after (YYYY-MM-DD)
        end_date: Reservation date on or before (YYYY-MM-DD)

    Returns:
        list of reservation dicts
    """
    clauses = []
    params = []

    if user_id:
        clauses.append('r.booked_by = ?')
        params.append(user_id)

    if status:
        clauses.append('r.status = ?')
        params.append(status)

    if start_date:
        clauses.append('r.reservation_date >= ?')
        params.append(to_day_key(start_date))

    if end_date:
        clauses.append('r.reservation_date <= ?')
        params.append(to_day_key(end_date))

    query = _SELECT_WITH_NAMES
    if clauses:
        query += ' WHERE ' + ' AND '.join(clauses)
    query += ' ORDER BY r.reservation_date, r.start_time'

    db = get_db()
    cursor = db.cursor()
    cursor.execute(query, params)
    return [dict(row) for row in cursor.fetchall()]


# =============================================================================
# SERIALIZATION
# =============================================================================

def serialize_court_reservation(reservation: dict) -> dict:
    """API shape of a reservation row."""
    return {
        'id': reservation['id'],
        'serviceId': reservation['service_id'],
        'representativeName': reservation['representative_name'],
        'contactNumber': reservation['contact_number'],
        'purpose': reservation['purpose'],
        'numberOfPeople': reservation['number_of_people'],
        'additionalNotes': reservation['additional_notes'],
        'bookedBy': reservation['booked_by'],
        'bookedByName': reservation.get('booked_by_name'),
        'reservationDate': reservation['reservation_date'],
        'startTime': reservation['start_time'],
        'duration': reservation['duration'],
        'status': reservation['status'],
        'adminComment': reservation['admin_comment'],
        'processedBy': reservation['processed_by'],
        'processedByName': reservation.get('processed_by_name'),
        'createdAt': reservation['created_at'],
        'updatedAt': reservation['updated_at'],
    }
