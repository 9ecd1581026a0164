"""
Court slot conflict detection.

Reservations are bucketed by calendar day (exact match on the ISO date) and
compared as half-open minute intervals [start, start + duration) counted
from midnight. Only pending and approved reservations hold a slot.
"""

import logging
from database import get_db
from utils.datetime_helpers import parse_hhmm, to_day_key

logger = logging.getLogger(__name__)

SLOT_HOLDING_STATUSES = ('pending', 'approved')


# =============================================================================
# PURE INTERVAL HELPERS
# =============================================================================

def time_to_minutes(start_time: str) -> int:
    """Minutes since midnight for a HH:MM string."""
    hours, minutes = parse_hhmm(start_time)
    return hours * 60 + minutes


def reservation_interval(start_time: str, duration: float) -> tuple:
    """
    Half-open interval covered by a reservation.

    Args:
        start_time: Start time (HH:MM)
        duration: Duration in hours (fractions allowed)

    Returns:
        tuple: (start_minute, end_minute)
    """
    start = time_to_minutes(start_time)
    return start, start + int(round(float(duration) * 60))


def intervals_overlap(first: tuple, second: tuple) -> bool:
    """
    True when two half-open intervals share at least one minute.
    Abutting intervals (one ends where the other starts) do not overlap.
    """
    start_a, end_a = first
    start_b, end_b = second
    return start_a < end_b and start_b < end_a


def has_time_conflict(candidate: tuple, existing_reservations: list) -> bool:
    """
    Check a candidate interval against reservations already on the same day.

    Args:
        candidate: (start_minute, end_minute)
        existing_reservations: Rows/dicts with start_time and duration

    Returns:
        bool: True if any reservation overlaps the candidate
    """
    for existing in existing_reservations:
        interval = reservation_interval(existing['start_time'], existing['duration'])
        if intervals_overlap(candidate, interval):
            logger.debug(f"Conflict: candidate {candidate} overlaps existing {interval}")
            return True
    return False


# =============================================================================
# STORE QUERIES
# =============================================================================

def find_slot_holding_reservations(day_key: str, cursor=None, exclude_id: str = None) -> list:
    """
    Get the pending/approved reservations on one calendar day.

    Args:
        day_key: ISO date (YYYY-MM-DD)
        cursor: Active transaction cursor (optional)
        exclude_id: Reservation ID to leave out

    Returns:
        list: Rows with id, start_time, duration, status
    """
    cur = cursor or get_db().cursor()

    query = '''
        SELECT id, start_time, duration, status
        FROM court_reservations
        WHERE reservation_date = ?
          AND status IN (?, ?)
    '''
    params = [day_key, *SLOT_HOLDING_STATUSES]

    if exclude_id:
        query += ' AND id != ?'
        params.append(exclude_id)

    cur.execute(query, params)
    return cur.fetchall()


def check_court_conflict(reservation_date, start_time: str, duration, exclude_id: str = None) -> bool:
    """
    Check whether a proposed booking overlaps an active reservation.

    Missing or zero inputs are answered with "no conflict" so that an
    incomplete form does not block the user. Any failure while checking is
    answered with "conflict" so that a double-booking is never allowed.

    Args:
        reservation_date: Date (date, datetime or ISO string)
        start_time: Start time (HH:MM)
        duration: Duration in hours
        exclude_id: Reservation ID to ignore (optional)

    Returns:
        bool: True if the slot is taken
    """
    if not reservation_date or not start_time or not duration:
        return False

    try:
        if float(duration) <= 0:
            return False

        day_key = to_day_key(reservation_date)
        candidate = reservation_interval(start_time, duration)
        existing = find_slot_holding_reservations(day_key, exclude_id=exclude_id)
        logger.debug(f"Found {len(existing)} active reservations on {day_key}")

        return has_time_conflict(candidate, existing)

    except Exception as e:
        logger.error(f"Error checking reservation conflict: {e}", exc_info=True)
        return True
